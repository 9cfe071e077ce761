"""
Loader errors for tree, run, answers and config files.

Validation failures are summarized per problem. When the raw payload is
available, each problem names the owning node or step id, so an error deep in
a nested ``children`` list reads ``children.1.children.0.value [L3]`` rather
than only the bare location.
"""

from __future__ import annotations

import os
from typing import Any, Iterable, Optional, Sequence

from pydantic import ValidationError

MAX_REPORTED_PROBLEMS = 3


def owner_id(data: Any, loc: Sequence[Any]) -> Optional[str]:
    """
    Id of the innermost mapping along ``loc`` that carries an ``id`` key.

    The final location entry is the failing field itself, so the walk stops
    one short of it. Returns None when the payload has no id on that path.
    """
    found: Optional[str] = None
    current = data
    for entry in list(loc)[:-1]:
        if isinstance(current, dict):
            current = current.get(entry)
        elif isinstance(current, list) and isinstance(entry, int) and 0 <= entry < len(current):
            current = current[entry]
        else:
            break
        if isinstance(current, dict) and isinstance(current.get("id"), str):
            found = current["id"]
    return found


def summarize_validation_errors(errors: Iterable[dict], data: Any = None) -> str:
    """One-line summary of pydantic errors, at most MAX_REPORTED_PROBLEMS shown."""
    error_list = list(errors)
    parts = []
    for err in error_list[:MAX_REPORTED_PROBLEMS]:
        loc = err.get("loc", ())
        where = ".".join(str(entry) for entry in loc) or "<root>"
        owner = owner_id(data, loc) if data is not None else None
        if owner:
            where = f"{where} [{owner}]"
        parts.append(f"{where}: {err.get('msg') or err.get('type') or 'validation error'}")
    hidden = len(error_list) - len(parts)
    if hidden > 0:
        parts.append(f"... ({hidden} more)")
    return "; ".join(parts)


class LoaderError(RuntimeError):
    """A file could not be turned into a tree, run, answers set or config."""

    def __init__(
        self,
        file_path: str,
        message: str,
        *,
        cause: Exception | None = None,
        data: Any = None,
    ):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        self.data = data
        super().__init__(str(self))

    @property
    def display_path(self) -> str:
        try:
            return os.path.relpath(self.file_path)
        except ValueError:  # pragma: no cover - different drive on Windows
            return self.file_path

    def __str__(self) -> str:
        text = f"{self.message} ({self.display_path})"
        if isinstance(self.cause, ValidationError):
            return f"{text}: {summarize_validation_errors(self.cause.errors(), self.data)}"
        if self.cause is not None:
            return f"{text}: {self.cause}"
        return text


__all__ = ["LoaderError", "MAX_REPORTED_PROBLEMS", "owner_id", "summarize_validation_errors"]
