# config.py
"""Startup settings, read from the environment (and a .env file) with command-line overrides."""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

ENV_PREFIX = "RECALC_"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    """Session settings."""
    precision: Optional[int] = Field(None, ge=0, description="Initial display precision; None prints the shortest form")
    history_file: str = Field("~/.recalc_history", validate_default=True, description="File backing the interactive line history")
    log_level: str = "WARNING"
    prompt: str = "> "

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator('history_file')
    @classmethod
    def history_file_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('history file cannot be empty')
        return os.path.expanduser(v.strip())

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def load_settings(env: Optional[Mapping[str, str]] = None, **overrides: Any) -> Settings:
    """Build Settings from RECALC_* variables, then apply any non-None overrides.

    When env is None the process environment is used, after loading a .env
    file found from the working directory upwards.
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    values = {}
    for field_name in Settings.model_fields:
        raw = env.get(ENV_PREFIX + field_name.upper())
        if raw is not None and raw != "":
            values[field_name] = raw
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(_format_validation_error(e)) from e


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"])
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
