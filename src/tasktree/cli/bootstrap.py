# src/tasktree/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- builds the path resolver, the JSON store and the service,
- wires them into AppState.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import Settings, get_settings
from ..core.state import AppState
from ..service.project_service import ProjectService
from ..storage.paths import PlatformPaths
from ..storage.project_store import JsonProjectStore

logger = logging.getLogger(__name__)


def build_paths(settings: Settings) -> PlatformPaths:
    return PlatformPaths(
        settings.app_name,
        data_dir=settings.data_dir,
        legacy_dir=settings.legacy_dir,
        extension=settings.file_extension,
    )


def default_log_dir(settings: Settings) -> Path:
    if settings.log_dir is not None:
        return settings.log_dir
    return build_paths(settings).app_data_dir() / "logs"


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = JsonProjectStore(build_paths(settings))
    return AppState(settings=settings, store=store, service=ProjectService(store))
