"""Configuration loading utilities for utf8conv."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .models import ByteOrder
from .paths import project_config_path, runtime_config_dir
from .transcoder import AUTO, default_registry


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()


class TranscoderConfig(BaseModel):
    backend: str = Field(default=AUTO, description="Transcoder backend: auto|native|codecs|pure")

    @field_validator("backend")
    @classmethod
    def _validate_backend(cls, value: str) -> str:
        name = value.strip().lower()
        known = set(default_registry().all())
        if name != AUTO and name not in known:
            choices = ", ".join(sorted(known | {AUTO}))
            raise ValueError(f"Unknown transcoder backend '{value}'; expected one of: {choices}")
        return name


class CLIConfig(BaseModel):
    byte_order: ByteOrder = Field(default=ByteOrder.LITTLE, description="Byte order of UTF-16 files")


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    transcoder: TranscoderConfig = Field(default_factory=TranscoderConfig)
    cli: CLIConfig = Field(default_factory=CLIConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield project_config_path()
    yield runtime_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> AppConfig:
    if path is not None and not path.is_file():
        raise ValueError(f"Configuration file not found: {path}")
    for candidate in config_search_paths(path):
        if candidate.is_file():
            with candidate.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
            try:
                return AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)
