# src/tasktree/errors.py

"""
Error taxonomy shared by the model, store and service layers.

- ValidationError: a required field is empty/missing (never recoverable by the core).
- DuplicateKeyError / NotFoundError: expected conditions callers branch on.
- StorageError: file-system or decode failure, surfaced unmodified (no retry).
"""

from __future__ import annotations


class TaskTreeError(Exception):
    """Base class for every error raised by tasktree."""


class ValidationError(TaskTreeError, ValueError):
    pass


class DuplicateKeyError(TaskTreeError):
    pass


class NotFoundError(TaskTreeError, LookupError):
    pass


class StorageError(TaskTreeError, OSError):
    pass
