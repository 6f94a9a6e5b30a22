# src/tasktree/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..service.project_service import ProjectService
from ..storage.project_store import JsonProjectStore


@dataclass
class AppState:
    # Settings are kept on the state for commands that report them.
    settings: object

    store: JsonProjectStore
    service: ProjectService

    # Project the console is currently looking at (/open).
    current_project: str | None = None
