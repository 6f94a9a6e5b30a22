# src/tasktree/storage/project_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import re
from pathlib import Path

from ..core.models import Project
from ..errors import StorageError, TaskTreeError
from . import codec
from .paths import PlatformPaths

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9.-]")


def sanitize_key(title: str) -> str:
    """Every character outside [A-Za-z0-9.-] becomes '_' (collisions are possible)."""
    return _UNSAFE_CHARS.sub("_", title)


class JsonProjectStore:
    """
    One JSON document per project, keyed by the project title.

    Behavior:
    - save() always rewrites the whole document (temp file + os.replace);
    - the storage directory is resolved on every call (see PlatformPaths);
    - find_all() walks sub-directories too and aborts on the first bad document;
    - no locking: concurrent read-modify-write cycles are last-writer-wins.

    Titles that sanitize to the same filename share one document.
    """

    def __init__(self, paths: PlatformPaths) -> None:
        self._paths = paths
        logger.info(
            "JsonProjectStore ready platform_dir=%s legacy_dir=%s",
            paths.platform_dir(),
            paths.legacy_dir(),
        )

    @property
    def extension(self) -> str:
        return self._paths.extension

    # ---- low-level helpers ----

    def storage_dir(self) -> Path:
        return self._paths.storage_dir()

    def path_for(self, title: str) -> Path:
        return self.storage_dir() / f"{sanitize_key(title)}{self.extension}"

    @staticmethod
    def _blank(title: str | None) -> bool:
        return title is None or not title.strip()

    def _read(self, path: Path) -> Project:
        try:
            return codec.loads(path.read_text("utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError, TaskTreeError) as e:
            raise StorageError(f"Failed to read project document {path}: {e}") from e

    # ---- public API ----

    def save(self, project: Project) -> Project:
        if project is None:
            raise ValueError("project must not be None")

        path = self.path_for(project.title)
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(codec.dumps(project), "utf-8")
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageError(f"Failed to save project '{project.title}': {e}") from e

        logger.debug("Project saved title=%s path=%s", project.title, path)
        return project

    def find_by_key(self, title: str) -> Project | None:
        if self._blank(title):
            return None
        path = self.path_for(title)
        if not path.is_file():
            return None
        project = self._read(path)
        logger.debug("Project loaded title=%s path=%s", title, path)
        return project

    def find_all(self) -> list[Project]:
        root = self.storage_dir()
        if not root.is_dir():
            return []
        try:
            files = sorted(p for p in root.rglob(f"*{self.extension}") if p.is_file())
        except OSError as e:
            raise StorageError(f"Failed to scan project directory {root}: {e}") from e
        return [self._read(p) for p in files]

    def delete_by_key(self, title: str) -> bool:
        if self._blank(title):
            return False
        path = self.path_for(title)
        if not path.is_file():
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete project '{title}': {e}") from e
        logger.debug("Project deleted title=%s path=%s", title, path)
        return True

    def exists_by_key(self, title: str) -> bool:
        if self._blank(title):
            return False
        return self.path_for(title).is_file()

    def count_projects(self) -> int:
        root = self.storage_dir()
        if not root.is_dir():
            return 0
        return sum(1 for p in root.rglob(f"*{self.extension}") if p.is_file())
