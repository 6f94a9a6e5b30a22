# src/tasktree/logging_setup.py

"""
Root logger wiring for the tasktree console.

The file under the log directory receives every record; stderr only
shows tasktree's own records at `console_level` and up, plus anything
at ERROR from third-party code, so the REPL output stays clean.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILENAME = "tasktree.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _OwnRecordsFilter(logging.Filter):
    """Pass records from the `prefix` logger tree; others need ERROR."""

    def __init__(self, prefix: str = "tasktree") -> None:
        super().__init__()
        self._prefix = prefix

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == self._prefix or record.name.startswith(self._prefix + "."):
            return True
        return record.levelno >= logging.ERROR


def _attach(
    root: logging.Logger,
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter,
    *filters: logging.Filter,
) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    for f in filters:
        handler.addFilter(f)
    root.addHandler(handler)


def setup_logging(
    *,
    log_dir: str | Path,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """Replace the root handlers with console + file output; returns the log file."""
    target = Path(log_dir)
    target.mkdir(parents=True, exist_ok=True)
    log_file = target / LOG_FILENAME

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    root.setLevel(logging.DEBUG)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    _attach(root, logging.StreamHandler(sys.stderr), console_level, formatter, _OwnRecordsFilter())
    _attach(root, logging.FileHandler(log_file, encoding="utf-8"), file_level, formatter)

    # warnings.warn() shows up as 'py.warnings'
    logging.captureWarnings(True)
    return log_file
