import errno
from pathlib import Path

from keysort.listing import is_image, list_images


def test_filters_by_extension_case_insensitive(src_dir):
	for name in ("a.jpg", "b.JPEG", "c.Png", "d.gif", "e.WebP", "notes.txt", "noext", "f.bmp"):
		(src_dir / name).touch()
	names = sorted(p.name for p in list_images(src_dir))
	assert names == ["a.jpg", "b.JPEG", "c.Png", "d.gif", "e.WebP"]


def test_newest_name_first(src_dir):
	for name in ("IMG_20240101.jpg", "IMG_20240303.jpg", "IMG_20240202.jpg"):
		(src_dir / name).touch()
	assert [p.name for p in list_images(src_dir)] == [
		"IMG_20240303.jpg",
		"IMG_20240202.jpg",
		"IMG_20240101.jpg",
	]


def test_paths_are_inside_folder(src_dir):
	(src_dir / "x.png").touch()
	assert list_images(src_dir) == [src_dir / "x.png"]


def test_non_recursive(src_dir):
	sub = src_dir / "nested"
	sub.mkdir()
	(sub / "inner.jpg").touch()
	(src_dir / "outer.jpg").touch()
	assert [p.name for p in list_images(src_dir)] == ["outer.jpg"]


def test_directory_named_like_image_is_skipped(src_dir):
	(src_dir / "album.jpg").mkdir()
	assert list_images(src_dir) == []


def test_missing_folder_is_empty(tmp_path):
	assert list_images(tmp_path / "nope") == []


def test_accepts_str(src_dir):
	(src_dir / "a.gif").touch()
	assert len(list_images(str(src_dir))) == 1


def test_is_image(tmp_path):
	assert is_image(tmp_path / "x.JPG")
	assert not is_image(tmp_path / "x.jpg.txt")
	assert not is_image(tmp_path / "jpg")


def test_entry_that_cannot_be_inspected_is_skipped(src_dir, monkeypatch):
	(src_dir / "a.jpg").touch()
	(src_dir / "b.jpg").touch()
	real_is_file = Path.is_file

	# Python < 3.12 re-raises EACCES from is_file on a listable but unsearchable folder
	def is_file(self, *args, **kwargs):
		if self.name == "a.jpg":
			raise PermissionError(errno.EACCES, "Permission denied", str(self))
		return real_is_file(self, *args, **kwargs)

	monkeypatch.setattr(Path, "is_file", is_file)
	assert list_images(src_dir) == [src_dir / "b.jpg"]
