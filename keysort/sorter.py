"""Move orchestration: filesystem rename + sequence update + move log, and undo."""
import logging
from pathlib import Path
from typing import Optional, Union

from keysort.bindings import FolderBindings
from keysort.errors import (
	EmptySequence,
	MoveIoError,
	NoCurrentImage,
	NothingToUndo,
	SortError,
	UndoIoError,
)
from keysort.movelog import MoveLog, MoveLogEntry
from keysort.navigator import ImageManager

logger = logging.getLogger(__name__)


def _reason(e: OSError) -> str:
	return e.strerror or str(e)


class Sorter:
	def __init__(self, manager: ImageManager, log: Optional[MoveLog] = None) -> None:
		self.manager = manager
		self.log = log if log is not None else MoveLog()

	def move_current_to(self, dest_dir: Union[str, Path]) -> MoveLogEntry:
		"""Move the current image into dest_dir, keeping its filename.

		Raises NoCurrentImage (EmptySequence when the folder has no images left)
		or MoveIoError. On a failed rename the sequence is restored exactly and
		nothing is logged.
		"""
		if not self.manager.images:
			raise EmptySequence()
		src = self.manager.current()
		if src is None:
			raise NoCurrentImage()
		dest_dir = Path(dest_dir)
		if dest_dir.resolve() == src.parent.resolve():
			raise MoveIoError(src, dest_dir, "already in that folder")
		dest = dest_dir / src.name

		index = self.manager.index
		self.manager.remove_current()
		try:
			src.rename(dest)
		except OSError as e:
			self.manager.reinsert(src, index)
			logger.error("Move %s -> %s failed: %s", src, dest, e)
			raise MoveIoError(src, dest_dir, _reason(e)) from e

		entry = self.log.record(src, dest)
		logger.info("Moved %s -> %s", src, dest)
		return entry

	def undo_last(self) -> Optional[Path]:
		"""Reverse the most recent move. None when there is nothing to undo.

		A failed reverse rename raises UndoIoError and keeps the entry on the
		log so the undo can be retried.
		"""
		try:
			return self._undo()
		except NothingToUndo:
			return None

	def _undo(self) -> Path:
		entry = self.log.pop_last()
		if entry is None:
			raise NothingToUndo()
		try:
			entry.dest.rename(entry.src)
		except OSError as e:
			self.log.push_back(entry)
			logger.error("Undo %s -> %s failed: %s", entry.dest, entry.src, e)
			raise UndoIoError(entry.src, entry.dest, _reason(e)) from e

		if entry.dest.parent == self.manager.folder:
			self.manager.discard(entry.dest)
		if entry.src.parent == self.manager.folder:
			self.manager.insert_at_current(entry.src)
		logger.info("Restored %s", entry.src)
		return entry.src

	# ----- Status-string boundary for the UI -----
	def sort_by_key(self, char: str, bindings: FolderBindings) -> Optional[str]:
		"""Move the current image to the folder bound to char.

		Returns a status line, or None when char is not bound to anything.
		"""
		folder = bindings.folder_for(char)
		if folder is None:
			return None
		try:
			entry = self.move_current_to(folder)
		except SortError as e:
			logger.info("Sort with '%s' not done: %s", char, e)
			return e.status()
		return f"Moved {entry.src.name} to {folder}"

	def undo(self) -> str:
		try:
			src = self._undo()
		except SortError as e:
			return e.status()
		return f"Restored {src.name}"
