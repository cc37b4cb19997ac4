import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import tkinter as tk
from tkinter import ttk, filedialog

from PIL import Image, ImageOps, ImageTk
from pydantic import ValidationError

from keysort import __version__
from keysort.bindings import FolderBindings
from keysort.cache import ImageCache
from keysort.config import Settings
from keysort.errors import BindingError
from keysort.log import configure_logging
from keysort.navigator import ImageManager
from keysort.sorter import Sorter

logger = logging.getLogger(__name__)


class KeySortApp(tk.Tk):
	def __init__(self, settings: Settings, folder: Optional[Path] = None) -> None:
		super().__init__()
		self.title("Image organizer")
		self.geometry("1000x760")
		self.minsize(640, 480)

		self.colors = {
			"bg": "#111111",
			"fg": "#EAEAEA",
			"muted": "#888888",
			"panel": "#1A1A1A",
			"border": "#2A2A2A",
			"error": "#FF5555",
		}
		self.font_family = "Consolas" if sys.platform.startswith("win") else "Menlo"
		self.base_font = (self.font_family, 11)
		self.small_font = (self.font_family, 10)

		self.configure(bg=self.colors["bg"])
		self._setup_style()

		# Core state
		self.settings = settings
		self.manager = ImageManager(ImageCache(), radius=settings.cache_radius)
		self.sorter = Sorter(self.manager)
		self.bindings = FolderBindings.from_mapping(settings.bindings, reserved=settings.reserved_keys)

		# Presentation state
		self.current_image_pil: Optional[Image.Image] = None
		self.current_photo: Optional[ImageTk.PhotoImage] = None
		self._resize_after_id: Optional[str] = None
		self._tick_after_id: Optional[str] = None
		self._left_arrow_id: Optional[int] = None
		self._right_arrow_id: Optional[int] = None
		self._binding_rows: List[ttk.Frame] = []
		self.new_folder_var = tk.StringVar()
		self.new_letter_var = tk.StringVar()

		self._build_ui()
		self._bind_keys()
		self._refresh_bindings()

		if folder is not None:
			self.open_folder(folder)
		self._schedule_tick()

	def _setup_style(self) -> None:
		c = self.colors
		style = ttk.Style(self)
		if "clam" in style.theme_names():
			style.theme_use("clam")
		style.configure("TFrame", background=c["bg"])
		style.configure("Panel.TFrame", background=c["panel"])
		for name, bg, fg, font in (
			("TLabel", c["bg"], c["fg"], self.base_font),
			("Panel.TLabel", c["panel"], c["fg"], self.small_font),
			("Muted.TLabel", c["bg"], c["muted"], self.small_font),
		):
			style.configure(name, background=bg, foreground=fg, font=font)
		style.configure("TButton", background=c["panel"], foreground=c["fg"], font=self.base_font, padding=(10, 6))
		style.map("TButton", background=[("active", c["border"])], foreground=[("disabled", c["muted"])])

	def _build_ui(self) -> None:
		# Top toolbar
		top = ttk.Frame(self, style="Panel.TFrame")
		top.pack(side=tk.TOP, fill=tk.X)

		self.btn_open = ttk.Button(top, text="Choose Folder", command=self.choose_folder)
		self.btn_prev = ttk.Button(top, text="Prev", command=self.prev_image)
		self.btn_next = ttk.Button(top, text="Next", command=self.next_image)
		self.btn_undo = ttk.Button(top, text="Undo", command=self.undo_last_move)
		for w in (self.btn_open, self.btn_prev, self.btn_next, self.btn_undo):
			w.pack(side=tk.LEFT, padx=(8, 0), pady=8)

		self.folder_label = ttk.Label(top, text="No folder selected.", style="Panel.TLabel")
		self.folder_label.pack(side=tk.LEFT, padx=12)

		# Status bar (counter + text)
		bottom = ttk.Frame(self, style="Panel.TFrame")
		bottom.pack(side=tk.BOTTOM, fill=tk.X)
		self.counter_label = ttk.Label(bottom, text="", style="Muted.TLabel")
		self.counter_label.pack(side=tk.LEFT, padx=(8, 0), pady=6)
		self.status_label = ttk.Label(bottom, text="Pick a folder to begin", style="Muted.TLabel")
		self.status_label.pack(side=tk.LEFT, padx=8, pady=6)

		# Folder & letter bindings, below the image
		self._build_bindings_ui()

		self.path_label = ttk.Label(self, text="", style="Muted.TLabel")
		self.path_label.pack(side=tk.TOP, fill=tk.X, padx=8, pady=(6, 0))

		self.canvas = tk.Canvas(self, bg=self.colors["bg"], highlightthickness=0)
		self.canvas.pack(fill=tk.BOTH, expand=True)
		self.canvas.bind("<Configure>", self._on_canvas_resize)

		self._update_controls()
		self.protocol("WM_DELETE_WINDOW", self._on_close)

	def _build_bindings_ui(self) -> None:
		panel = ttk.Frame(self, style="Panel.TFrame", padding=8)
		panel.pack(side=tk.BOTTOM, fill=tk.X)

		ttk.Label(panel, text="Folder & Letter Entries:", style="Panel.TLabel").pack(anchor="w")

		row = ttk.Frame(panel, style="Panel.TFrame")
		row.pack(fill=tk.X, pady=(6, 6))
		ttk.Label(row, text="Folder:", style="Panel.TLabel").pack(side=tk.LEFT)
		ttk.Button(row, text="Choose Folder", command=self._choose_binding_folder).pack(side=tk.LEFT, padx=(6, 0))
		self.folder_entry = ttk.Entry(row, font=self.small_font, textvariable=self.new_folder_var)
		self.folder_entry.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=6)
		ttk.Label(row, text="Letter:", style="Panel.TLabel").pack(side=tk.LEFT)
		self.letter_entry = ttk.Entry(row, font=self.small_font, width=3, textvariable=self.new_letter_var)
		self.letter_entry.pack(side=tk.LEFT, padx=6)
		self.letter_entry.bind("<Return>", lambda e: self._add_binding())
		ttk.Button(row, text="+", command=self._add_binding).pack(side=tk.LEFT)

		self.bindings_list = ttk.Frame(panel, style="Panel.TFrame")
		self.bindings_list.pack(fill=tk.X)

	def _bind_keys(self) -> None:
		self.bind("<Escape>", lambda e: self._on_close())
		self.bind("<Left>", lambda e: self._on_nav_key(self.prev_image))
		self.bind("<Right>", lambda e: self._on_nav_key(self.next_image))
		self.bind("<Control-z>", lambda e: self._on_nav_key(self.undo_last_move))
		self.bind("<Key>", self._on_key)

	# ----- Key dispatch -----
	def _typing_in_entry(self) -> bool:
		return isinstance(self.focus_get(), (ttk.Entry, tk.Entry))

	def _on_nav_key(self, action) -> None:
		if self._typing_in_entry():
			return
		action()

	def _on_key(self, event) -> None:
		char = event.char
		if not char or len(char) != 1 or not char.isprintable() or self._typing_in_entry():
			return
		if event.state & 0x4:  # Control held: leave to explicit bindings
			return
		if char == self.settings.next_key:
			self.next_image()
		elif char == self.settings.prev_key:
			self.prev_image()
		else:
			self.sort_current(char)

	# ----- Folder / sequence management -----
	def choose_folder(self) -> None:
		path = filedialog.askdirectory(title="Select image folder")
		if not path:
			return
		self.open_folder(Path(path))

	def open_folder(self, folder: Path) -> None:
		count = self.manager.set_directory(folder)
		self.folder_label.configure(text=str(folder))
		self._set_status("" if count else "No images found in the folder.")
		self._show_current()
		self._update_controls()

	def prev_image(self) -> None:
		if self.manager.previous() is None:
			return
		self._set_status()
		self._show_current()

	def next_image(self) -> None:
		if self.manager.next() is None:
			return
		self._set_status()
		self._show_current()

	def sort_current(self, char: str) -> None:
		status = self.sorter.sort_by_key(char, self.bindings)
		if status is None:
			return
		self._set_status(extra=status)
		self._show_current()
		self._update_controls()

	def undo_last_move(self) -> None:
		status = self.sorter.undo()
		self._set_status(extra=status)
		self._show_current()
		self._update_controls()

	def _set_status(self, extra: str = "") -> None:
		path = self.manager.current()
		if path is None:
			if self.manager.folder is None:
				text = "Pick a folder to begin"
			else:
				text = "No images found in the folder."
			if extra and extra != text:
				text = f"{text}  |  {extra}"
			self.counter_label.configure(text="")
			self.status_label.configure(text=text)
			return
		info = f" — {path.name}"
		if extra:
			info = f"{info}  |  {extra}"
		self.counter_label.configure(text=f"{self.manager.index + 1}/{len(self.manager)}")
		self.status_label.configure(text=info)

	def _update_controls(self) -> None:
		has_images = bool(self.manager.images)
		self.btn_prev.configure(state=(tk.NORMAL if has_images else tk.DISABLED))
		self.btn_next.configure(state=(tk.NORMAL if has_images else tk.DISABLED))
		self.btn_undo.configure(state=(tk.NORMAL if self.sorter.log else tk.DISABLED))
		self._draw_arrows()

	# ----- Bindings editor -----
	def _choose_binding_folder(self) -> None:
		path = filedialog.askdirectory(title="Select destination folder")
		if path:
			self.new_folder_var.set(path)

	def _add_binding(self) -> None:
		letter = self.new_letter_var.get().strip()[:1]
		try:
			self.bindings.add(letter, self.new_folder_var.get().strip())
		except BindingError as e:
			self._set_status(extra=e.status())
			return
		self.new_folder_var.set("")
		self.new_letter_var.set("")
		self.canvas.focus_set()
		self._refresh_bindings()

	def _remove_binding(self, letter: str) -> None:
		self.bindings.remove(letter)
		self._refresh_bindings()

	def _refresh_bindings(self) -> None:
		for row in self._binding_rows:
			row.destroy()
		self._binding_rows = []
		for letter, folder in self.bindings:
			row = ttk.Frame(self.bindings_list, style="Panel.TFrame")
			row.pack(fill=tk.X)
			ttk.Label(row, text=f"Folder: {folder}, Letter: {letter}", style="Panel.TLabel").pack(side=tk.LEFT)
			ttk.Button(row, text="−", width=2, command=lambda ltr=letter: self._remove_binding(ltr)).pack(side=tk.RIGHT)
			self._binding_rows.append(row)

	# ----- Rendering -----
	def _show_current(self) -> None:
		self.canvas.delete("all")
		self.current_image_pil = None
		self.current_photo = None

		path = self.manager.current()
		if path is None:
			self.path_label.configure(text="")
			w = self.canvas.winfo_width() or 800
			h = self.canvas.winfo_height() or 600
			hint = "No folder selected." if self.manager.folder is None else "No images found in the folder."
			self.canvas.create_text(w // 2, h // 2, text=hint, fill=self.colors["muted"], font=self.base_font)
			self._draw_arrows()
			return

		self.path_label.configure(text=f"Current Image: {path}")
		try:
			info = self.manager.display_info()
		except Exception as e:
			# Pillow raises more than OSError on broken or oversized files
			logger.warning("Cannot display %s: %s", path, e)
			self.canvas.create_text(
				20,
				20,
				text=f"Error loading {path.name}: {e}",
				fill=self.colors["error"],
				anchor="nw",
				font=self.small_font,
			)
			self._draw_arrows()
			return
		self.current_image_pil = info.handle
		self._render_to_canvas()

	def _on_canvas_resize(self, _event) -> None:
		if not self.current_image_pil:
			if self.manager.current() is None:
				self._show_current()
			return
		# Debounce rapid resize events
		if self._resize_after_id:
			self.after_cancel(self._resize_after_id)
		self._resize_after_id = self.after(80, self._render_to_canvas)

	def _render_to_canvas(self) -> None:
		self._resize_after_id = None
		if not self.current_image_pil:
			return
		size = (max(1, self.canvas.winfo_width()), max(1, self.canvas.winfo_height()))
		fitted = ImageOps.contain(self.current_image_pil, size, Image.Resampling.LANCZOS)
		self.current_photo = ImageTk.PhotoImage(fitted)

		self.canvas.delete("all")
		self.canvas.create_image(size[0] // 2, size[1] // 2, image=self.current_photo, anchor="center")
		self._draw_arrows()

	def _clear_arrow_items(self) -> None:
		for item in (self._left_arrow_id, self._right_arrow_id):
			if item is not None:
				self.canvas.delete(item)
		self._left_arrow_id = None
		self._right_arrow_id = None

	def _draw_arrows(self) -> None:
		self._clear_arrow_items()
		# Navigation wraps, so arrows show whenever there is somewhere to go
		if len(self.manager) < 2:
			return

		cw = self.canvas.winfo_width() or 800
		ch = self.canvas.winfo_height() or 600
		y = ch // 2
		size = max(18, min(72, int(ch * 0.08)))
		arrow_font = (self.font_family, size)
		padding = max(16, int(cw * 0.02))

		self._left_arrow_id = self.canvas.create_text(
			padding, y, text="‹", fill=self.colors["fg"], font=arrow_font, anchor="w"
		)
		self._right_arrow_id = self.canvas.create_text(
			cw - padding, y, text="›", fill=self.colors["fg"], font=arrow_font, anchor="e"
		)
		for item, action in ((self._left_arrow_id, self.prev_image), (self._right_arrow_id, self.next_image)):
			self.canvas.tag_bind(item, "<Button-1>", lambda e, a=action: a())
			self.canvas.tag_bind(item, "<Enter>", lambda e: self.canvas.config(cursor="hand2"))
			self.canvas.tag_bind(item, "<Leave>", lambda e: self.canvas.config(cursor=""))

	# ----- Tick -----
	def _schedule_tick(self) -> None:
		self._tick_after_id = self.after(self.settings.tick_ms, self._tick)

	def _tick(self) -> None:
		self.manager.reconcile_cache()
		self._schedule_tick()

	def _on_close(self) -> None:
		if self._tick_after_id:
			self.after_cancel(self._tick_after_id)
			self._tick_after_id = None
		self.current_image_pil = None
		self.manager.cache.clear()
		self.destroy()


def main(argv: Optional[List[str]] = None) -> None:
	parser = argparse.ArgumentParser(prog="keysort", description="File images into folders with one keystroke.")
	parser.add_argument("folder", nargs="?", type=Path, help="image folder to open on startup")
	parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	args = parser.parse_args(argv)

	try:
		settings = Settings()
	except ValidationError as e:
		raise SystemExit(f"Invalid configuration:\n{e}")
	configure_logging(settings.log_level, settings.log_dir)

	app = KeySortApp(settings, args.folder)
	app.mainloop()


if __name__ == "__main__":
	main()
