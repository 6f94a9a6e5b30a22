# src/tasktree/core/tree.py

"""
Locate and rewrite nodes in an immutable project tree.

Every edit funnels through `rewrite_at`: it rebuilds only the tuples on
the path from the root of the search down to the target and slices the
untouched siblings into the new tuples, so unrelated subtrees are the
very same objects in the old and new tree.

Two ways to address a task:
- by title: depth-first, pre-order, first exact match anywhere below a
  task sequence (titles are unique only among direct siblings, so this
  can hit a same-named task under a different parent);
- by path: a sequence of titles from the list's top level down, matched
  among direct siblings at every step. Use this when ambiguity matters.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import replace

from ..errors import DuplicateKeyError, NotFoundError, ValidationError
from .models import Project, Task, TaskList

TaskPath = tuple[str, ...]
IndexPath = tuple[int, ...]
TaskRewrite = Callable[[Task], "Task | None"]
TasksRewrite = Callable[[tuple[Task, ...]], tuple[Task, ...]]


def _fmt_path(path: Sequence[str]) -> str:
    return "/".join(path)


# ---- lookup ----


def iter_tasks(tasks: Sequence[Task], _prefix: TaskPath = ()) -> Iterator[tuple[TaskPath, Task]]:
    """Pre-order walk yielding (title path, task)."""
    for t in tasks:
        path = _prefix + (t.title,)
        yield path, t
        yield from iter_tasks(t.children, path)


def locate_task(tasks: Sequence[Task], title: str) -> IndexPath | None:
    """
    Index path of the first pre-order match for `title`.

    Siblings at one level are checked before descending, but each
    subtree is searched completely before moving to the next sibling.
    """
    for i, t in enumerate(tasks):
        if t.title == title:
            return (i,)
    for i, t in enumerate(tasks):
        sub = locate_task(t.children, title)
        if sub is not None:
            return (i, *sub)
    return None


def resolve_path(tasks: Sequence[Task], path: Sequence[str]) -> IndexPath | None:
    out: list[int] = []
    level: Sequence[Task] = tasks
    for title in path:
        for i, t in enumerate(level):
            if t.title == title:
                out.append(i)
                level = t.children
                break
        else:
            return None
    return tuple(out)


def task_at(tasks: Sequence[Task], index_path: IndexPath) -> Task:
    if not index_path:
        raise ValueError("index_path must not be empty")
    node = tasks[index_path[0]]
    for i in index_path[1:]:
        node = node.children[i]
    return node


def find_task(tasks: Sequence[Task], title: str) -> Task | None:
    idx = locate_task(tasks, title)
    return task_at(tasks, idx) if idx is not None else None


def find_task_at(tasks: Sequence[Task], path: Sequence[str]) -> Task | None:
    if not path:
        return None
    idx = resolve_path(tasks, path)
    return task_at(tasks, idx) if idx is not None else None


# ---- the one rewrite primitive ----


def rewrite_at(tasks: tuple[Task, ...], index_path: IndexPath, fn: TaskRewrite) -> tuple[Task, ...]:
    """
    Return a new task tuple where the node at `index_path` is replaced by
    fn(node), or dropped (with its subtree) when fn returns None.
    """
    if not index_path:
        raise ValueError("index_path must not be empty")

    i, rest = index_path[0], index_path[1:]
    node = tasks[i]
    if rest:
        new: Task | None = replace(node, children=rewrite_at(node.children, rest, fn))
    else:
        new = fn(node)

    if new is None:
        return tasks[:i] + tasks[i + 1 :]
    return tasks[:i] + (new,) + tasks[i + 1 :]


def append_unique(tasks: tuple[Task, ...], task: Task) -> tuple[Task, ...]:
    """Append `task` unless a direct sibling already uses its title."""
    if any(t.title == task.title for t in tasks):
        raise DuplicateKeyError(f"Task with title '{task.title}' already exists at this level")
    return tasks + (task,)


def _swap(old: Task, new: Task, siblings: Sequence[Task]) -> Task:
    if new.title != old.title and any(s.title == new.title for s in siblings):
        raise DuplicateKeyError(f"Task with title '{new.title}' already exists at this level")
    return new


def _siblings(tasks: tuple[Task, ...], index_path: IndexPath) -> tuple[Task, ...]:
    if len(index_path) == 1:
        return tasks
    return task_at(tasks, index_path[:-1]).children


# ---- by title (first pre-order match) ----


def replace_task(tasks: tuple[Task, ...], title: str, new_task: Task) -> tuple[Task, ...]:
    idx = locate_task(tasks, title)
    if idx is None:
        raise NotFoundError(f"Task with title '{title}' does not exist")
    siblings = _siblings(tasks, idx)
    return rewrite_at(tasks, idx, lambda old: _swap(old, new_task, siblings))


def remove_task(tasks: tuple[Task, ...], title: str) -> tuple[Task, ...]:
    idx = locate_task(tasks, title)
    if idx is None:
        raise NotFoundError(f"Task with title '{title}' does not exist")
    return rewrite_at(tasks, idx, lambda _old: None)


def insert_child(tasks: tuple[Task, ...], parent_title: str, task: Task) -> tuple[Task, ...]:
    idx = locate_task(tasks, parent_title)
    if idx is None:
        raise NotFoundError(f"Task with title '{parent_title}' does not exist")
    return rewrite_at(tasks, idx, lambda p: replace(p, children=append_unique(p.children, task)))


# ---- by path (exact ancestor chain) ----


def _require_path(tasks: tuple[Task, ...], path: Sequence[str]) -> IndexPath:
    if not path:
        raise ValidationError("Task path must not be empty")
    idx = resolve_path(tasks, path)
    if idx is None:
        raise NotFoundError(f"Task '{_fmt_path(path)}' does not exist")
    return idx


def replace_task_at(tasks: tuple[Task, ...], path: Sequence[str], new_task: Task) -> tuple[Task, ...]:
    idx = _require_path(tasks, path)
    siblings = _siblings(tasks, idx)
    return rewrite_at(tasks, idx, lambda old: _swap(old, new_task, siblings))


def remove_task_at(tasks: tuple[Task, ...], path: Sequence[str]) -> tuple[Task, ...]:
    idx = _require_path(tasks, path)
    return rewrite_at(tasks, idx, lambda _old: None)


def insert_task_at(tasks: tuple[Task, ...], parent_path: Sequence[str], task: Task) -> tuple[Task, ...]:
    """Append `task` under `parent_path`; an empty path means the top level."""
    if not parent_path:
        return append_unique(tasks, task)
    idx = _require_path(tasks, parent_path)
    return rewrite_at(tasks, idx, lambda p: replace(p, children=append_unique(p.children, task)))


def with_completed(task: Task, completed: bool, *, cascade: bool = True) -> Task:
    """Set the completion flag, optionally on the whole subtree."""
    if not cascade:
        return replace(task, completed=completed)
    return replace(
        task,
        completed=completed,
        children=tuple(with_completed(c, completed) for c in task.children),
    )


# ---- task lists within a project ----


def require_list(project: Project, name: str) -> TaskList:
    tl = project.task_list(name)
    if tl is None:
        raise NotFoundError(f"Task list '{name}' does not exist in project '{project.title}'")
    return tl


def add_list(project: Project, task_list: TaskList) -> Project:
    if project.task_list(task_list.name) is not None:
        raise DuplicateKeyError(
            f"Task list '{task_list.name}' already exists in project '{project.title}'"
        )
    return replace(project, lists=project.lists + (task_list,))


def remove_list(project: Project, name: str) -> Project:
    require_list(project, name)
    return replace(project, lists=tuple(tl for tl in project.lists if tl.name != name))


def update_list(project: Project, name: str, fn: Callable[[TaskList], TaskList]) -> Project:
    """Replace the first list named `name` with fn(list); other lists are reused."""
    for i, tl in enumerate(project.lists):
        if tl.name == name:
            lists = project.lists[:i] + (fn(tl),) + project.lists[i + 1 :]
            return replace(project, lists=lists)
    raise NotFoundError(f"Task list '{name}' does not exist in project '{project.title}'")


def update_tasks(project: Project, list_name: str, fn: TasksRewrite) -> Project:
    """Run a task-tuple rewrite inside one list and rebuild the project around it."""
    return update_list(project, list_name, lambda tl: replace(tl, tasks=fn(tl.tasks)))


def move_task(
    project: Project,
    source_list: str,
    source_path: Sequence[str],
    target_list: str,
    target_path: Sequence[str] = (),
) -> Project:
    """
    Move a whole subtree: remove it at the source, then append it under
    the target parent (empty target path = the target list's top level).
    """
    src_tasks = require_list(project, source_list).tasks
    src_idx = _require_path(src_tasks, source_path)
    moving = task_at(src_tasks, src_idx)

    if source_list == target_list and target_path:
        dst_idx = resolve_path(src_tasks, target_path)
        if dst_idx is not None and dst_idx[: len(src_idx)] == src_idx:
            raise ValidationError(
                f"Cannot move '{_fmt_path(source_path)}' into its own subtree"
            )

    require_list(project, target_list)
    detached = update_tasks(project, source_list, lambda ts: rewrite_at(ts, src_idx, lambda _t: None))
    return update_tasks(detached, target_list, lambda ts: insert_task_at(ts, target_path, moving))
