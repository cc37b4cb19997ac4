from pathlib import Path
from typing import Optional


class SortError(Exception):
	"""Base class for everything a sort or undo can report to the user."""

	def status(self) -> str:
		return str(self)


class NoCurrentImage(SortError):
	def __init__(self, message: str = "No image selected") -> None:
		super().__init__(message)


class EmptySequence(NoCurrentImage):
	def __init__(self) -> None:
		super().__init__("No images found in the folder.")


class MoveIoError(SortError):
	def __init__(self, src: Path, dest_dir: Path, reason: str) -> None:
		self.src = src
		self.dest_dir = dest_dir
		self.reason = reason
		super().__init__(f"Failed to move {src.name} to {dest_dir}: {reason}")


class NothingToUndo(SortError):
	def __init__(self) -> None:
		super().__init__("Nothing to undo")


class UndoIoError(SortError):
	def __init__(self, src: Path, dest: Path, reason: str) -> None:
		self.src = src
		self.dest = dest
		self.reason = reason
		super().__init__(f"Failed to restore {dest.name}: {reason}")


class BindingError(SortError):
	def __init__(self, message: str, letter: Optional[str] = None) -> None:
		self.letter = letter
		super().__init__(message)
