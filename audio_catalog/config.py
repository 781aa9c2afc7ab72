from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .models import AudioCatalogError

CONFIG_NAMES = ("audio-catalog.yaml", "audio-catalog.yml")


class ConfigError(AudioCatalogError):
    """Raised when an explicitly requested config file cannot be used."""


class ProcessingSettings(BaseModel):
    worker_concurrency: int = Field(default=4, ge=1)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    warnings_log: Optional[Path] = None
    quiet_loggers: List[str] = Field(default_factory=lambda: ["mutagen"])

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return str(value).upper()

    @field_validator("warnings_log", mode="before")
    @classmethod
    def _expand_log(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value is None:
            return None
        return Path(value).expanduser().resolve()


class OutputSettings(BaseModel):
    indent: Optional[int] = 2
    skip_unsupported: bool = True


class Settings(BaseModel):
    processing: ProcessingSettings = Field(default_factory=ProcessingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise ConfigError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for name in CONFIG_NAMES:
        candidate = cwd / name
        if candidate.exists():
            return candidate
    return None


def load_settings(explicit_path: Optional[Path]) -> Settings:
    path = find_config(explicit_path)
    if path is None:
        return Settings()
    return Settings.load(path)
