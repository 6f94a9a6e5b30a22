# src/tasktree/service/project_service.py

"""
Project service: validate arguments, load the stored tree, rewrite it
with core.tree, save the whole new value.

There is no in-memory master copy. Every mutation is a full
read-modify-write against the repository, so two overlapping callers on
the same title race and the later save wins. The new tree is built
completely before anything is written; a StorageError from save() means
the returned-but-unsaved value must be treated as unconfirmed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core import tree
from ..core.models import Project, Task, TaskList
from ..core.ports import ProjectRepo
from ..errors import DuplicateKeyError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _required(value: str | None, what: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{what} must not be empty")
    return value


def _path(path: Sequence[str], what: str = "Task path") -> tuple[str, ...]:
    if isinstance(path, str):
        path = (path,)
    out = tuple(path)
    if not out:
        raise ValidationError(f"{what} must not be empty")
    for part in out:
        _required(part, "Task title")
    return out


def _opt_path(path: Sequence[str], what: str) -> tuple[str, ...]:
    if isinstance(path, str):
        path = (path,)
    return _path(path, what) if path else ()


class ProjectService:
    def __init__(self, repo: ProjectRepo) -> None:
        self._repo = repo

    # ---- helpers ----

    def _load(self, title: str) -> Project:
        _required(title, "Project title")
        project = self._repo.find_by_key(title)
        if project is None:
            raise NotFoundError(f"Project with title '{title}' does not exist")
        return project

    def _store(self, project: Project, action: str) -> Project:
        saved = self._repo.save(project)
        logger.info("Project %s: %s", action, project.title)
        return saved

    # ---- projects ----

    def create_project(self, title: str, description: str | None = None) -> Project:
        _required(title, "Project title")
        if self._repo.exists_by_key(title):
            raise DuplicateKeyError(f"Project with title '{title}' already exists")
        return self._store(Project(title=title, description=description), "created")

    def get_project(self, title: str | None) -> Project | None:
        if title is None or not title.strip():
            return None
        return self._repo.find_by_key(title)

    def get_all_projects(self) -> list[Project]:
        return self._repo.find_all()

    def update_project(self, project: Project) -> Project:
        if project is None:
            raise ValidationError("Project must not be None")
        if not self._repo.exists_by_key(project.title):
            raise NotFoundError(f"Project with title '{project.title}' does not exist")
        return self._store(project, "updated")

    def delete_project(self, title: str | None) -> bool:
        if title is None or not title.strip():
            return False
        deleted = self._repo.delete_by_key(title)
        if deleted:
            logger.info("Project deleted: %s", title)
        return deleted

    # ---- task lists ----

    def add_task_list(self, title: str, task_list: TaskList) -> Project:
        if task_list is None:
            raise ValidationError("Task list must not be None")
        project = self._load(title)
        return self._store(tree.add_list(project, task_list), f"list '{task_list.name}' added")

    def remove_task_list(self, title: str, list_name: str) -> Project:
        _required(list_name, "Task list name")
        project = self._load(title)
        return self._store(tree.remove_list(project, list_name), f"list '{list_name}' removed")

    # ---- tasks ----

    def add_task(self, title: str, list_name: str, task: Task) -> Project:
        """Append `task` to the top level of the named list."""
        return self.add_subtask(title, list_name, (), task)

    def add_subtask(
        self, title: str, list_name: str, parent_path: Sequence[str], task: Task
    ) -> Project:
        """Append `task` under the task at `parent_path` (empty path = top level)."""
        _required(list_name, "Task list name")
        if task is None:
            raise ValidationError("Task must not be None")
        parent = _opt_path(parent_path, "Parent path")
        project = self._load(title)
        new = tree.update_tasks(project, list_name, lambda ts: tree.insert_task_at(ts, parent, task))
        return self._store(new, f"task '{task.title}' added to '{list_name}'")

    def remove_task(self, title: str, list_name: str, task_title: str) -> Project:
        """Remove a top-level task of the named list (with its subtree)."""
        _required(task_title, "Task title")
        return self.remove_task_at(title, list_name, (task_title,))

    def remove_task_at(self, title: str, list_name: str, path: Sequence[str]) -> Project:
        _required(list_name, "Task list name")
        task_path = _path(path)
        project = self._load(title)
        new = tree.update_tasks(project, list_name, lambda ts: tree.remove_task_at(ts, task_path))
        return self._store(new, f"task '{'/'.join(task_path)}' removed from '{list_name}'")

    def update_task(self, title: str, list_name: str, path: Sequence[str], task: Task) -> Project:
        """Replace the task at `path`; a rename may not collide with a sibling."""
        _required(list_name, "Task list name")
        if task is None:
            raise ValidationError("Task must not be None")
        task_path = _path(path)
        project = self._load(title)
        new = tree.update_tasks(
            project, list_name, lambda ts: tree.replace_task_at(ts, task_path, task)
        )
        return self._store(new, f"task '{'/'.join(task_path)}' updated in '{list_name}'")

    def set_task_completed(
        self,
        title: str,
        list_name: str,
        path: Sequence[str],
        completed: bool,
        *,
        cascade: bool = True,
    ) -> Project:
        _required(list_name, "Task list name")
        task_path = _path(path)
        project = self._load(title)
        current = tree.find_task_at(tree.require_list(project, list_name).tasks, task_path)
        if current is None:
            raise NotFoundError(f"Task '{'/'.join(task_path)}' does not exist")
        updated = tree.with_completed(current, completed, cascade=cascade)
        new = tree.update_tasks(
            project, list_name, lambda ts: tree.replace_task_at(ts, task_path, updated)
        )
        state = "done" if completed else "open"
        return self._store(new, f"task '{'/'.join(task_path)}' marked {state}")

    def move_task(
        self,
        title: str,
        source_list: str,
        source_path: Sequence[str],
        target_list: str,
        target_path: Sequence[str] = (),
    ) -> Project:
        _required(source_list, "Source list name")
        _required(target_list, "Target list name")
        src = _path(source_path, "Source path")
        dst = _opt_path(target_path, "Target path")
        project = self._load(title)
        new = tree.move_task(project, source_list, src, target_list, dst)
        where = f"{target_list}:{'/'.join(dst)}" if dst else target_list
        return self._store(new, f"task '{'/'.join(src)}' moved to '{where}'")

