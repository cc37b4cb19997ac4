"""
Application-wide logging setup.

Console output at the configured level and, when a log directory is given,
ERROR and above to a rotating file.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE = "keysort.log"

_installed: List[logging.Handler] = []


def configure_logging(
	level: Union[int, str] = logging.INFO,
	log_dir: Optional[Path] = None,
	max_bytes: int = 1_000_000,
	backup_count: int = 3,
) -> logging.Logger:
	"""Configure the root logger. Calling it again replaces the handlers it installed."""
	root = logging.getLogger()
	root.setLevel(logging.DEBUG)  # handlers filter
	for handler in _installed:
		root.removeHandler(handler)
		handler.close()
	_installed.clear()

	formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

	console = logging.StreamHandler()
	console.setLevel(level)
	console.setFormatter(formatter)
	_installed.append(console)

	if log_dir is not None:
		log_dir = Path(log_dir)
		log_dir.mkdir(parents=True, exist_ok=True)
		file_handler = RotatingFileHandler(
			log_dir / LOG_FILE, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
		)
		file_handler.setLevel(logging.ERROR)
		file_handler.setFormatter(formatter)
		_installed.append(file_handler)

	for handler in _installed:
		root.addHandler(handler)
	return root
