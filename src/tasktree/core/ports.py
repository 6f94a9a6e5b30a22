# src/tasktree/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The service depends on this Protocol instead of the JSON store, so tests
can swap in an in-memory repository.
"""

from typing import Protocol

from .models import Project


class ProjectRepo(Protocol):
    """Key -> document store for projects. The key is the project title."""

    def save(self, project: Project) -> Project: ...
    def find_by_key(self, title: str) -> Project | None: ...
    def find_all(self) -> list[Project]: ...
    def delete_by_key(self, title: str) -> bool: ...
    def exists_by_key(self, title: str) -> bool: ...
