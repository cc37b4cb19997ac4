from pathlib import Path
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from keysort.errors import BindingError


class FolderBindings:
	"""Ordered letter -> destination folder table. Keys are case-sensitive."""

	def __init__(self, reserved: Iterable[str] = ()) -> None:
		self._folders: Dict[str, Path] = {}
		self._reserved = set(reserved)

	@classmethod
	def from_mapping(cls, mapping: Mapping[str, Union[str, Path]], reserved: Iterable[str] = ()) -> "FolderBindings":
		bindings = cls(reserved)
		for letter, folder in mapping.items():
			bindings.add(letter, folder)
		return bindings

	def __len__(self) -> int:
		return len(self._folders)

	def __contains__(self, letter: object) -> bool:
		return letter in self._folders

	def __iter__(self) -> Iterator[Tuple[str, Path]]:
		return iter(list(self._folders.items()))

	def add(self, letter: str, folder: Union[str, Path]) -> Path:
		if len(letter) != 1 or letter.isspace():
			raise BindingError(f"Letter must be a single character, got {letter!r}", letter)
		if letter in self._reserved:
			raise BindingError(f"'{letter}' is reserved for navigation", letter)
		if not str(folder).strip():
			raise BindingError("Choose a folder first", letter)
		path = Path(folder)
		self._folders[letter] = path
		return path

	def remove(self, letter: str) -> Optional[Path]:
		return self._folders.pop(letter, None)

	def folder_for(self, char: str) -> Optional[Path]:
		return self._folders.get(char)
