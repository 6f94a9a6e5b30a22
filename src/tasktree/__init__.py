"""
tasktree: hierarchical project data (project -> task list -> nested tasks)
kept as immutable values and stored as one JSON document per project.
"""

from .core.models import Project, Task, TaskList
from .errors import (
    DuplicateKeyError,
    NotFoundError,
    StorageError,
    TaskTreeError,
    ValidationError,
)
from .service.project_service import ProjectService
from .storage.paths import PlatformPaths
from .storage.project_store import JsonProjectStore

__all__ = [
    "DuplicateKeyError",
    "JsonProjectStore",
    "NotFoundError",
    "PlatformPaths",
    "Project",
    "ProjectService",
    "StorageError",
    "Task",
    "TaskList",
    "TaskTreeError",
    "ValidationError",
]
