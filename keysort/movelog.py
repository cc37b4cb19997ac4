from pathlib import Path
from typing import List, NamedTuple, Optional


class MoveLogEntry(NamedTuple):
	src: Path
	dest: Path


class MoveLog:
	"""LIFO journal of completed moves. Only the newest entry is ever touched."""

	def __init__(self) -> None:
		self._entries: List[MoveLogEntry] = []

	def __len__(self) -> int:
		return len(self._entries)

	def __bool__(self) -> bool:
		return bool(self._entries)

	def record(self, src: Path, dest: Path) -> MoveLogEntry:
		entry = MoveLogEntry(Path(src), Path(dest))
		self._entries.append(entry)
		return entry

	def peek(self) -> Optional[MoveLogEntry]:
		return self._entries[-1] if self._entries else None

	def pop_last(self) -> Optional[MoveLogEntry]:
		if not self._entries:
			return None
		return self._entries.pop()

	def push_back(self, entry: MoveLogEntry) -> None:
		# Used to retain an entry whose undo failed.
		self._entries.append(entry)
