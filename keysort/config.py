from pathlib import Path
from typing import Dict, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = "keysort.env"


class Settings(BaseSettings):
	cache_radius: int = Field(default=3, ge=0)
	tick_ms: int = Field(default=50, gt=0)
	next_key: str = "j"
	prev_key: str = "k"
	log_level: str = "INFO"
	log_dir: Optional[Path] = None
	# JSON object in KEYSORT_BINDINGS, e.g. {"a": "/photos/keep"}
	bindings: Dict[str, Path] = Field(default_factory=dict)

	model_config = SettingsConfigDict(
		frozen=True,
		env_prefix="KEYSORT_",
		env_file=ENV_FILE,
		extra="ignore",
	)

	@field_validator("next_key", "prev_key")
	@classmethod
	def _single_char(cls, value: str) -> str:
		if len(value) != 1:
			raise ValueError("must be a single character")
		return value

	@field_validator("log_level")
	@classmethod
	def _level_name(cls, value: str) -> str:
		value = value.upper()
		if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
			raise ValueError(f"unknown log level {value!r}")
		return value

	@field_validator("bindings")
	@classmethod
	def _single_char_keys(cls, value: Dict[str, Path]) -> Dict[str, Path]:
		bad = [k for k in value if len(k) != 1 or k.isspace()]
		if bad:
			raise ValueError(f"binding keys must be single non-space characters: {bad}")
		return value

	@model_validator(mode="after")
	def _bindings_not_reserved(self) -> "Settings":
		if self.next_key == self.prev_key:
			raise ValueError("next_key and prev_key must differ")
		clash = sorted(set(self.bindings) & self.reserved_keys)
		if clash:
			raise ValueError(f"bindings use navigation keys: {clash}")
		return self

	@property
	def reserved_keys(self) -> set:
		return {self.next_key, self.prev_key}
