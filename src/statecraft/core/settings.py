"""Centralized configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod

Besides the environment flag and log level, it carries the two memory bounds
used by the reversible logs: the snapshot stack depth and the transition
history length. An empty value (``SNAPSHOT_MAX_DEPTH=``) means unbounded.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_SNAPSHOT_MAX_DEPTH = 100
DEFAULT_TRANSITION_HISTORY_LIMIT = 1000


class Settings(BaseSettings):
    """Typed configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `STATECRAFT_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    snapshot_max_depth : int | None
        Maximum number of snapshots kept per undo/redo stack; maps from
        `SNAPSHOT_MAX_DEPTH`. ``None`` disables the bound.
    transition_history_limit : int | None
        Maximum number of transition records retained per context; maps from
        `TRANSITION_HISTORY_LIMIT`. ``None`` disables the bound.
    """

    environment: EnvName = Field(default="dev", alias="STATECRAFT_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    snapshot_max_depth: int | None = Field(
        default=DEFAULT_SNAPSHOT_MAX_DEPTH, alias="SNAPSHOT_MAX_DEPTH"
    )
    transition_history_limit: int | None = Field(
        default=DEFAULT_TRANSITION_HISTORY_LIMIT, alias="TRANSITION_HISTORY_LIMIT"
    )

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("snapshot_max_depth", "transition_history_limit", mode="before")
    @classmethod
    def _blank_means_unbounded(cls, v: object) -> object:
        """Treat an empty env value as "no bound"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("snapshot_max_depth", "transition_history_limit")
    @classmethod
    def _positive_bound(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError("bounds must be positive integers (leave empty for unbounded)")
        return v

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("STATECRAFT_ENV", "dev")
    return Settings()


# Ready-to-use instance (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "statecraft") -> logging.Logger:
    """Return a logger configured to the current `LOG_LEVEL`.

    The level is read through `load_settings()` so a test that clears the
    cache sees its overrides applied to newly requested loggers.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger


__all__ = ["Settings", "get_logger", "load_settings", "settings"]
