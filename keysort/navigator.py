import logging
from pathlib import Path
from typing import List, NamedTuple, Optional, Set, Union

from PIL import Image

from keysort.cache import ImageCache
from keysort.listing import list_images

logger = logging.getLogger(__name__)

DEFAULT_RADIUS = 3


class DisplayInfo(NamedTuple):
	path: Path
	handle: Image.Image
	index: int
	total: int

	@property
	def counter(self) -> str:
		return f"{self.index + 1}/{self.total}"


class ImageManager:
	"""Ordered image sequence with a cyclic cursor and a cache window around it.

	Every operation is total over the empty sequence: cursor queries return None
	and steps are no-ops. Each mutation re-reconciles the cache against the
	current window.
	"""

	def __init__(self, cache: Optional[ImageCache] = None, radius: int = DEFAULT_RADIUS) -> None:
		if radius < 0:
			raise ValueError("radius must be >= 0")
		self.cache = cache if cache is not None else ImageCache()
		self.radius = radius
		self.folder: Optional[Path] = None
		self.images: List[Path] = []
		self.index: int = 0

	def __len__(self) -> int:
		return len(self.images)

	# ----- Sequence -----
	def set_directory(self, folder: Union[str, Path]) -> int:
		"""Replace the sequence with folder's images and rewind to the first one."""
		self.folder = Path(folder)
		self.images = list_images(self.folder)
		self.index = 0
		logger.info("Opened %s (%d images)", self.folder, len(self.images))
		self.reconcile_cache()
		return len(self.images)

	def current(self) -> Optional[Path]:
		if 0 <= self.index < len(self.images):
			return self.images[self.index]
		return None

	def next(self) -> Optional[Path]:
		if not self.images:
			return None
		self.index = (self.index + 1) % len(self.images)
		self.reconcile_cache()
		return self.current()

	def previous(self) -> Optional[Path]:
		if not self.images:
			return None
		self.index = (self.index - 1) % len(self.images)
		self.reconcile_cache()
		return self.current()

	def remove_current(self) -> Optional[Path]:
		if not (0 <= self.index < len(self.images)):
			logger.warning("Index %d out of range for %d images; nothing removed", self.index, len(self.images))
			return None
		path = self.images.pop(self.index)
		if not self.images:
			self.index = 0
		elif self.index == len(self.images):
			# Removed the last element; point at the new last one
			self.index -= 1
		self.reconcile_cache()
		return path

	def insert_at_current(self, path: Path) -> None:
		self.index = max(0, min(self.index, len(self.images)))
		self.images.insert(self.index, Path(path))
		self.reconcile_cache()

	def discard(self, path: Path) -> bool:
		"""Drop path from the sequence wherever it is, keeping the cursor on the same image."""
		try:
			pos = self.images.index(Path(path))
		except ValueError:
			return False
		del self.images[pos]
		if pos < self.index:
			self.index -= 1
		self.index = max(0, min(self.index, len(self.images) - 1))
		self.reconcile_cache()
		return True

	def reinsert(self, path: Path, index: int) -> None:
		"""Put path back at index and make it current (rollback of a removal)."""
		self.index = max(0, min(index, len(self.images)))
		self.images.insert(self.index, Path(path))
		self.reconcile_cache()

	# ----- Cache window -----
	def window_around(self, radius: Optional[int] = None) -> Set[Path]:
		if not self.images:
			return set()
		r = self.radius if radius is None else radius
		lo = max(0, self.index - r)
		hi = min(len(self.images), self.index + r + 1)
		return set(self.images[lo:hi])

	def reconcile_cache(self) -> List[Path]:
		return self.cache.reconcile(self.window_around())

	def display_info(self) -> Optional[DisplayInfo]:
		"""Current path with its cached handle, or None when there is nothing to show."""
		path = self.current()
		if path is None:
			return None
		handle = self.cache.request(path)
		return DisplayInfo(path, handle, self.index, len(self.images))
