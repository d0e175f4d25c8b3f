"""Pydantic model for resolved settings."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, field_validator

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseModel):
    cache_dir: Path | None = None
    cache_atomic_writes: bool = False
    log_level: str = "WARNING"

    @field_validator("cache_dir")
    @classmethod
    def _expand_cache_dir(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)
