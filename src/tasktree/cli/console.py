# src/tasktree/cli/console.py

from __future__ import annotations

import logging

from ..core.state import AppState
from .commands import registry as command_registry

logger = logging.getLogger(__name__)

PROMPT = "tasktree> "


def _prompt(state: AppState) -> str:
    if state.current_project:
        return f"tasktree [{state.current_project}]> "
    return PROMPT


def run_console_loop(state: AppState) -> None:
    logger.info("Console started.")
    print("Type /help for commands. Use /exit to quit.\n")

    while True:
        try:
            user_input = input(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            print()
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command (see log file)."

        if response is None:
            response = "Commands start with '/'. Use /help to list available commands."
        print(response)

    logger.info("Console finished.")
