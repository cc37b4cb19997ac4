"""Sliding-window image cache.

Decoded images are kept only while their path is inside the window around the
current position. Anything outside the window is released on reconcile, so the
number of resident images is bounded by the window size rather than by how many
images a session has visited.
"""
import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Set

from PIL import Image, ImageOps

logger = logging.getLogger(__name__)


def load_image(path: Path) -> Image.Image:
	"""Decode path into a detached, EXIF-oriented image (no open file handle kept)."""
	with Image.open(path) as src:
		src.load()
		return ImageOps.exif_transpose(src)


def release_image(handle: Image.Image) -> None:
	handle.close()


class ImageCache:
	def __init__(
		self,
		loader: Callable[[Path], Image.Image] = load_image,
		release: Callable[[Image.Image], None] = release_image,
	) -> None:
		self._loader = loader
		self._release = release
		self._live: Dict[Path, Image.Image] = {}

	def __len__(self) -> int:
		return len(self._live)

	def __contains__(self, path: object) -> bool:
		return path in self._live

	@property
	def live_paths(self) -> Set[Path]:
		return set(self._live)

	def request(self, path: Path) -> Image.Image:
		"""Return the live handle for path, materializing it on first request.

		Loader errors (OSError, including PIL's UnidentifiedImageError) propagate
		and leave nothing registered.
		"""
		handle = self._live.get(path)
		if handle is not None:
			return handle
		handle = self._loader(path)
		self._live[path] = handle
		logger.debug("Materialized %s (%d live)", path, len(self._live))
		return handle

	def release(self, path: Path) -> bool:
		handle = self._live.pop(path, None)
		if handle is None:
			return False
		self._release(handle)
		logger.debug("Released %s (%d live)", path, len(self._live))
		return True

	def reconcile(self, keep: Iterable[Path]) -> List[Path]:
		"""Release every live entry outside keep. Returns the evicted paths.

		Paths in keep that are not live yet stay unmaterialized until requested.
		"""
		keep = set(keep)
		stale = [p for p in self._live if p not in keep]
		for path in stale:
			self.release(path)
		return stale

	def clear(self) -> None:
		for path in list(self._live):
			self.release(path)
