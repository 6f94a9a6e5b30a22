# src/tasktree/storage/codec.py

"""
Project <-> plain JSON document.

Schema (recursive at "children"):

    {"title", "description", "createdAt",
     "lists": [{"name", "description",
                "tasks": [{"title", "description", "completed", "children": [...]}]}]}

Absent descriptions are written as null. Documents written before the
"completed" flag existed decode with completed=False; missing or null
collections decode as empty.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from ..core.models import Project, Task, TaskList, now_local
from ..errors import TaskTreeError

Document = dict[str, Any]


class CodecError(TaskTreeError, ValueError):
    """The document does not describe a valid project."""


def _opt_str(raw: Any, field: str) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise CodecError(f"'{field}' must be a string or null")
    return raw


def _completed(raw: Any) -> bool:
    if raw is None:
        return False
    if not isinstance(raw, bool):
        raise CodecError("'completed' must be a boolean or null")
    return raw


def _items(doc: Document, key: str) -> list[Any]:
    raw = doc.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise CodecError(f"'{key}' must be a list")
    return raw


def _obj(raw: Any, what: str) -> Document:
    if not isinstance(raw, dict):
        raise CodecError(f"{what} must be a JSON object")
    return raw


# ---- encode ----


def encode_task(task: Task) -> Document:
    return {
        "title": task.title,
        "description": task.description,
        "completed": task.completed,
        "children": [encode_task(c) for c in task.children],
    }


def encode_task_list(task_list: TaskList) -> Document:
    return {
        "name": task_list.name,
        "description": task_list.description,
        "tasks": [encode_task(t) for t in task_list.tasks],
    }


def encode_project(project: Project) -> Document:
    return {
        "title": project.title,
        "description": project.description,
        "createdAt": project.created_at.isoformat(),
        "lists": [encode_task_list(tl) for tl in project.lists],
    }


# ---- decode ----


def decode_task(raw: Any) -> Task:
    doc = _obj(raw, "task")
    return Task(
        title=doc.get("title"),  # type: ignore[arg-type]
        description=_opt_str(doc.get("description"), "description"),
        children=tuple(decode_task(c) for c in _items(doc, "children")),
        completed=_completed(doc.get("completed")),
    )


def decode_task_list(raw: Any) -> TaskList:
    doc = _obj(raw, "task list")
    return TaskList(
        name=doc.get("name"),  # type: ignore[arg-type]
        description=_opt_str(doc.get("description"), "description"),
        tasks=tuple(decode_task(t) for t in _items(doc, "tasks")),
    )


def _decode_created_at(raw: Any) -> datetime:
    if raw is None:
        # No timestamp was ever written: treat the document as created now.
        return now_local()
    if not isinstance(raw, str):
        raise CodecError("'createdAt' must be an ISO-8601 string")
    try:
        return datetime.fromisoformat(raw)
    except ValueError as e:
        raise CodecError(f"Invalid 'createdAt' value: {raw!r}") from e


def decode_project(raw: Any) -> Project:
    doc = _obj(raw, "project")
    return Project(
        title=doc.get("title"),  # type: ignore[arg-type]
        description=_opt_str(doc.get("description"), "description"),
        lists=tuple(decode_task_list(tl) for tl in _items(doc, "lists")),
        created_at=_decode_created_at(doc.get("createdAt")),
    )


def dumps(project: Project) -> str:
    return json.dumps(encode_project(project), ensure_ascii=False, indent=2)


def loads(text: str) -> Project:
    return decode_project(json.loads(text))
