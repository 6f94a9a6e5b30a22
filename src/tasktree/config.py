# src/tasktree/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Paths are only computed here, never created at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .storage.paths import DEFAULT_EXTENSION, DEFAULT_LEGACY_DIR

ENV_PREFIX = "TASKTREE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Local .env never overrides the real environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path | None  # None -> <app data dir>/logs

    # ---- Storage ----
    data_dir: Path | None  # None -> platform convention
    legacy_dir: Path
    file_extension: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasktree").strip() or "tasktree"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        ext = _env(_k("FILE_EXTENSION"), DEFAULT_EXTENSION).strip() or DEFAULT_EXTENSION
        if not ext.startswith("."):
            ext = "." + ext

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=_env_path(_k("LOG_DIR"), None),
            data_dir=_env_path(_k("DATA_DIR"), None),
            legacy_dir=_env_path(_k("LEGACY_DIR"), DEFAULT_LEGACY_DIR) or DEFAULT_LEGACY_DIR,
            file_extension=ext,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
