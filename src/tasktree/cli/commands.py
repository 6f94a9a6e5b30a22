# src/tasktree/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable

from ..core import tree
from ..core.models import Project, Task, TaskList
from ..core.state import AppState
from ..errors import TaskTreeError

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

PATH_SEP = "/"


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /new, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like '/command arg "quoted arg"'.
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Cannot parse command: {e}"
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except TaskTreeError as e:
            logger.info("/%s failed: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def split_path(raw: str) -> tuple[str, ...]:
    return tuple(p for p in raw.split(PATH_SEP) if p)


def render_project(project: Project) -> str:
    lines = [project.title]
    if project.description:
        lines.append(f"  {project.description}")
    lines.append(f"  created {project.created_at:%Y-%m-%d %H:%M}")
    if not project.lists:
        lines.append("  (no lists)")
    for tl in project.lists:
        lines.append(f"  [{tl.name}]" + (f" - {tl.description}" if tl.description else ""))
        for path, task in tree.iter_tasks(tl.tasks):
            mark = "x" if task.completed else " "
            indent = "    " * len(path)
            lines.append(f"{indent}[{mark}] {task.title}")
    return "\n".join(lines)


def _current(state: AppState) -> str:
    if not state.current_project:
        raise TaskTreeError("No project open. Use /open <title> first.")
    return state.current_project


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_projects(state: AppState, args: list[str]) -> str:
    projects = state.service.get_all_projects()
    if not projects:
        return "No projects yet. Create one with /new <title>."
    lines = ["Projects:"]
    # naive timestamps (older documents) count as local time
    for p in sorted(projects, key=lambda x: x.created_at.timestamp()):
        lines.append(f"  {p.title} ({len(p.lists)} lists)")
    return "\n".join(lines)


def cmd_new(state: AppState, args: list[str]) -> str:
    """/new <title> [description]"""
    if not args:
        return "Usage: /new <title> [description]"
    project = state.service.create_project(args[0], " ".join(args[1:]) or None)
    state.current_project = project.title
    return f"Created project '{project.title}'."


def cmd_open(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /open <title>"
    project = state.service.get_project(args[0])
    if project is None:
        return f"No project titled '{args[0]}'."
    state.current_project = project.title
    return render_project(project)


def cmd_show(state: AppState, args: list[str]) -> str:
    title = args[0] if args else _current(state)
    project = state.service.get_project(title)
    if project is None:
        return f"No project titled '{title}'."
    return render_project(project)


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <title>"
    if not state.service.delete_project(args[0]):
        return f"No project titled '{args[0]}'."
    if state.current_project == args[0]:
        state.current_project = None
    return f"Deleted project '{args[0]}'."


def cmd_addlist(state: AppState, args: list[str]) -> str:
    """/addlist <name> [description]"""
    if not args:
        return "Usage: /addlist <name> [description]"
    tl = TaskList(name=args[0], description=" ".join(args[1:]) or None)
    state.service.add_task_list(_current(state), tl)
    return f"Added list '{tl.name}'."


def cmd_rmlist(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /rmlist <name>"
    state.service.remove_task_list(_current(state), args[0])
    return f"Removed list '{args[0]}'."


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <list> <path/to/new-task> [description]

    Everything before the last path segment names the parent task.
    """
    if len(args) < 2:
        return "Usage: /add <list> <parent/.../title> [description]"
    path = split_path(args[1])
    if not path:
        return "Task title cannot be empty."
    task = Task(title=path[-1], description=" ".join(args[2:]) or None)
    state.service.add_subtask(_current(state), args[0], path[:-1], task)
    return f"Added task '{args[1]}' to '{args[0]}'."


def cmd_rm(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /rm <list> <path/to/task>"
    state.service.remove_task_at(_current(state), args[0], split_path(args[1]))
    return f"Removed task '{args[1]}' from '{args[0]}'."


def _set_done(state: AppState, args: list[str], completed: bool) -> str:
    if len(args) < 2:
        return f"Usage: /{'done' if completed else 'undone'} <list> <path/to/task>"
    state.service.set_task_completed(_current(state), args[0], split_path(args[1]), completed)
    return f"Marked '{args[1]}' as {'done' if completed else 'open'} (including sub-tasks)."


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, True)


def cmd_undone(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, False)


def cmd_move(state: AppState, args: list[str]) -> str:
    """/move <list> <path> <target-list> [target/parent/path]"""
    if len(args) < 3:
        return "Usage: /move <list> <path/to/task> <target-list> [target/parent/path]"
    target_path = split_path(args[3]) if len(args) > 3 else ()
    state.service.move_task(_current(state), args[0], split_path(args[1]), args[2], target_path)
    return f"Moved '{args[1]}' to '{args[2]}'."


def cmd_where(state: AppState, args: list[str]) -> str:
    store = state.store
    return (
        "Storage:\n"
        f"  Directory: {store.storage_dir()}\n"
        f"  Documents: {store.count_projects()}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("projects", cmd_projects, help_text="List all projects.", aliases=["ls"])
registry.register("new", cmd_new, help_text="Create a project: /new <title> [description].")
registry.register("open", cmd_open, help_text="Open a project: /open <title>.")
registry.register("show", cmd_show, help_text="Print a project tree: /show [title].")
registry.register("delete", cmd_delete, help_text="Delete a project: /delete <title>.")
registry.register("addlist", cmd_addlist, help_text="Add a list: /addlist <name> [description].")
registry.register("rmlist", cmd_rmlist, help_text="Remove a list: /rmlist <name>.")
registry.register("add", cmd_add, help_text="Add a task: /add <list> <parent/.../title> [description].")
registry.register("rm", cmd_rm, help_text="Remove a task and its sub-tasks: /rm <list> <path>.")
registry.register("done", cmd_done, help_text="Complete a task and its sub-tasks: /done <list> <path>.")
registry.register("undone", cmd_undone, help_text="Reopen a task and its sub-tasks: /undone <list> <path>.")
registry.register("move", cmd_move, help_text="Move a task: /move <list> <path> <target-list> [parent].")
registry.register("where", cmd_where, help_text="Show the storage directory in use.")
