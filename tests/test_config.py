import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from keysort.bindings import FolderBindings
from keysort.config import Settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
	monkeypatch.chdir(tmp_path)
	for key in ("CACHE_RADIUS", "TICK_MS", "NEXT_KEY", "PREV_KEY", "LOG_LEVEL", "LOG_DIR", "BINDINGS"):
		monkeypatch.delenv(f"KEYSORT_{key}", raising=False)


def test_defaults():
	settings = Settings()
	assert settings.cache_radius == 3
	assert settings.next_key == "j"
	assert settings.prev_key == "k"
	assert settings.bindings == {}
	assert settings.reserved_keys == {"j", "k"}


def test_env_overrides(monkeypatch):
	monkeypatch.setenv("KEYSORT_CACHE_RADIUS", "5")
	monkeypatch.setenv("KEYSORT_LOG_LEVEL", "debug")
	monkeypatch.setenv("KEYSORT_BINDINGS", json.dumps({"a": "/photos/keep"}))
	settings = Settings()
	assert settings.cache_radius == 5
	assert settings.log_level == "DEBUG"
	assert settings.bindings == {"a": Path("/photos/keep")}


def test_env_file(tmp_path):
	(tmp_path / "keysort.env").write_text("KEYSORT_NEXT_KEY=n\nKEYSORT_PREV_KEY=p\n", encoding="utf-8")
	settings = Settings()
	assert (settings.next_key, settings.prev_key) == ("n", "p")


@pytest.mark.parametrize(
	"key,value",
	[
		("KEYSORT_CACHE_RADIUS", "-1"),
		("KEYSORT_NEXT_KEY", "jj"),
		("KEYSORT_LOG_LEVEL", "chatty"),
		("KEYSORT_BINDINGS", json.dumps({"ab": "/x"})),
		("KEYSORT_BINDINGS", json.dumps({" ": "/x"})),
		("KEYSORT_BINDINGS", json.dumps({"\t": "/x"})),
		("KEYSORT_BINDINGS", json.dumps({"j": "/x"})),
		("KEYSORT_PREV_KEY", "j"),
	],
)
def test_invalid_values(monkeypatch, key, value):
	monkeypatch.setenv(key, value)
	with pytest.raises(ValidationError):
		Settings()


def test_frozen():
	settings = Settings()
	with pytest.raises(ValidationError):
		settings.cache_radius = 9


def test_configured_bindings_load_into_table(monkeypatch):
	monkeypatch.setenv("KEYSORT_BINDINGS", json.dumps({"a": "/keep", "x": "/trash"}))
	settings = Settings()
	bindings = FolderBindings.from_mapping(settings.bindings, reserved=settings.reserved_keys)
	assert bindings.folder_for("x") == Path("/trash")
