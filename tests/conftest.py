# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasktree.config import Settings
from tasktree.core.models import Task, TaskList
from tasktree.core.state import AppState
from tasktree.service.project_service import ProjectService
from tasktree.storage.paths import PlatformPaths
from tasktree.storage.project_store import JsonProjectStore

from .fakes import InMemoryProjectRepo


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing every path into tmp_path.

    Built directly instead of via from_env() to keep tests independent
    of the developer's environment and .env file.
    """
    return Settings(
        app_name="tasktree-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        data_dir=tmp_path / "appdata",
        legacy_dir=tmp_path / "legacy" / "projects",
        file_extension=".json",
    )


@pytest.fixture()
def paths(settings: Settings) -> PlatformPaths:
    return PlatformPaths(
        settings.app_name,
        data_dir=settings.data_dir,
        legacy_dir=settings.legacy_dir,
        extension=settings.file_extension,
    )


@pytest.fixture()
def store(paths: PlatformPaths) -> JsonProjectStore:
    return JsonProjectStore(paths)


@pytest.fixture()
def service(store: JsonProjectStore) -> ProjectService:
    """Service over the real JSON store (round-trips through disk)."""
    return ProjectService(store)


@pytest.fixture()
def memory_repo() -> InMemoryProjectRepo:
    return InMemoryProjectRepo()


@pytest.fixture()
def state(settings: Settings, store: JsonProjectStore, service: ProjectService) -> AppState:
    return AppState(settings=settings, store=store, service=service)


@pytest.fixture()
def sample_list() -> TaskList:
    """
    Backlog
      A
        A1
          A1a
      B
        A1      (same title as A/A1, different parent)
      C
    """
    return TaskList(
        name="Backlog",
        tasks=(
            Task("A", children=(Task("A1", children=(Task("A1a"),)),)),
            Task("B", description="second", children=(Task("A1"),)),
            Task("C"),
        ),
    )
