# src/tasktree/core/models.py

"""
Immutable project tree: Project -> TaskList -> Task (-> Task ...).

All entities are frozen dataclasses. Collection fields are normalized to
tuples in __post_init__, so equality and hashing are structural and a
caller can never mutate a tree in place. "Mutation" means building a new
value (see core/tree.py).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from ..errors import ValidationError


def _require(value: str | None, what: str) -> None:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{what} must not be empty.")


def _freeze(items: Iterable | None) -> tuple:
    if items is None:
        return ()
    return items if type(items) is tuple else tuple(items)


def now_local() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True, slots=True)
class Task:
    """
    A unit of work. Title is the identity key among direct siblings only;
    it is stored as given (trimming is used for the emptiness check only).
    """

    title: str
    description: str | None = None
    children: tuple[Task, ...] = ()
    completed: bool = False

    def __post_init__(self) -> None:
        _require(self.title, "Task title")
        object.__setattr__(self, "children", _freeze(self.children))
        object.__setattr__(self, "completed", bool(self.completed))

    def child(self, title: str) -> Task | None:
        for t in self.children:
            if t.title == title:
                return t
        return None

    def __repr__(self) -> str:
        return f"Task(title={self.title!r}, completed={self.completed}, children={len(self.children)})"


@dataclass(frozen=True, slots=True)
class TaskList:
    name: str
    description: str | None = None
    tasks: tuple[Task, ...] = ()

    def __post_init__(self) -> None:
        _require(self.name, "Task list name")
        object.__setattr__(self, "tasks", _freeze(self.tasks))

    def task(self, title: str) -> Task | None:
        """Top-level task with this exact title (no descent)."""
        for t in self.tasks:
            if t.title == title:
                return t
        return None

    def __repr__(self) -> str:
        return f"TaskList(name={self.name!r}, tasks={len(self.tasks)})"


@dataclass(frozen=True, slots=True)
class Project:
    """
    Top-level container; `title` is the document-store key.

    `created_at` is set once when the value is first built and carried
    over unchanged by every later rewrite (dataclasses.replace keeps it).
    """

    title: str
    description: str | None = None
    lists: tuple[TaskList, ...] = ()
    created_at: datetime = field(default_factory=now_local)

    def __post_init__(self) -> None:
        _require(self.title, "Project title")
        object.__setattr__(self, "lists", _freeze(self.lists))
        if not isinstance(self.created_at, datetime):
            raise ValidationError("Project created_at must be a datetime.")

    def task_list(self, name: str) -> TaskList | None:
        for tl in self.lists:
            if tl.name == name:
                return tl
        return None

    def __repr__(self) -> str:
        return (
            f"Project(title={self.title!r}, created_at={self.created_at.isoformat()}, "
            f"lists={len(self.lists)})"
        )
