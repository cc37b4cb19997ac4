"""Shared fixtures: real image files written with Pillow into tmp_path."""
from pathlib import Path

import pytest
from PIL import Image


def write_image(path: Path, color=(200, 30, 30), size=(4, 3)) -> Path:
	fmt = {".jpg": "JPEG", ".jpeg": "JPEG", ".png": "PNG", ".gif": "GIF", ".webp": "WEBP"}[path.suffix.lower()]
	Image.new("RGB", size, color).save(path, fmt)
	return path


@pytest.fixture
def make_image():
	return write_image


@pytest.fixture
def src_dir(tmp_path):
	d = tmp_path / "src"
	d.mkdir()
	return d


@pytest.fixture
def dest_dir(tmp_path):
	d = tmp_path / "dest"
	d.mkdir()
	return d


class FakeLoader:
	"""Loader/release pair that records calls instead of decoding."""

	def __init__(self):
		self.loaded = []
		self.released = []

	def load(self, path):
		handle = object()
		self.loaded.append(path)
		return handle

	def release(self, handle):
		self.released.append(handle)


@pytest.fixture
def fake_loader():
	return FakeLoader()
