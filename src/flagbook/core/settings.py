"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LangName = Literal["fr", "en"]

# Placeholder shipped in the sample .env; treated as "not configured".
RECAPTCHA_PLACEHOLDER = "your-secret-key-here"


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `FLAGBOOK_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    data_file : Path | None
        JSON file mirroring the message store. ``None`` keeps messages in
        memory only. Maps from `FLAGBOOK_DATA_FILE`.
    uploads_dir : Path
        Directory holding uploaded images; maps from `FLAGBOOK_UPLOADS_DIR`.
    max_upload_bytes : int
        Upper bound for a single uploaded image (2 MiB by default).
    recaptcha_secret_key : str | None
        reCAPTCHA v3 server secret. Verification is skipped when unset.
    recaptcha_min_score : float
        Minimum reCAPTCHA score accepted for a submission.
    sign_max_attempts : int
        How many times the write path re-validates after an origin conflict.
    default_lang : LangName
        Language used for user-facing errors when the client expresses none.
    """

    environment: EnvName = Field(default="dev", alias="FLAGBOOK_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")

    data_file: Path | None = Field(default=None, alias="FLAGBOOK_DATA_FILE")
    uploads_dir: Path = Field(default=Path("uploads"), alias="FLAGBOOK_UPLOADS_DIR")
    max_upload_bytes: int = Field(
        default=2 * 1024 * 1024, ge=1, alias="FLAGBOOK_MAX_UPLOAD_BYTES"
    )

    recaptcha_secret_key: str | None = Field(default=None, alias="RECAPTCHA_SECRET_KEY")
    recaptcha_min_score: float = Field(
        default=0.5, ge=0.0, le=1.0, alias="RECAPTCHA_MIN_SCORE"
    )

    sign_max_attempts: int = Field(default=3, ge=1, alias="FLAGBOOK_SIGN_MAX_ATTEMPTS")
    default_lang: LangName = Field(default="fr", alias="FLAGBOOK_LANG")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

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

    @property
    def recaptcha_enabled(self) -> bool:
        """Return True when a real reCAPTCHA secret is configured."""
        key = self.recaptcha_secret_key
        return bool(key) and key != RECAPTCHA_PLACEHOLDER

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("FLAGBOOK_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "flagbook") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
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
