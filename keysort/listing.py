import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)

IMG_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def is_image(path: Path) -> bool:
	return path.suffix.lower() in IMG_EXTS


def _is_image_file(path: Path) -> bool:
	if not is_image(path):
		return False
	try:
		return path.is_file()
	except OSError as e:
		logger.debug("Skipping %s: %s", path, e)
		return False


def list_images(folder: Union[str, Path]) -> List[Path]:
	"""Image files directly inside folder, newest-named first.

	Paths are sorted by their string form and reversed, so timestamped
	filenames come out most recent first. An unreadable folder yields [],
	and entries that cannot be inspected are skipped.
	"""
	folder = Path(folder)
	try:
		entries = list(folder.iterdir())
	except OSError as e:
		logger.warning("Cannot read %s: %s", folder, e)
		return []
	return sorted((p for p in entries if _is_image_file(p)), key=str, reverse=True)
