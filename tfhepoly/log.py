"""Coloured console messages."""

from __future__ import annotations

import sys
from typing import Any

_INFO = "\x1b[32m[Info]\x1b[39m "
_WARN = "\x1b[33m[Warn]\x1b[39m "
_ERROR = "\x1b[31m[Error]\x1b[39m "


class LogError(RuntimeError):
    """Raised after an error message has been written."""


def _emit(prefix: str, args: tuple[Any, ...]) -> str:
    text = " ".join(str(arg) for arg in args)
    stream = sys.stdout
    stream.write(f"{prefix}{text}\n")
    stream.flush()
    return text


def debug(*args: Any) -> None:
    """Write the arguments, separated by spaces, without a prefix."""
    _emit("", args)


def info(*args: Any) -> None:
    """Write an informational message."""
    _emit(_INFO, args)


def warn(*args: Any) -> None:
    """Write a warning message."""
    _emit(_WARN, args)


def error(*args: Any) -> None:
    """Write an error message and raise LogError carrying it."""
    raise LogError(_emit(_ERROR, args))