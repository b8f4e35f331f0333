"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
Domain failures and defects map to distinct codes so scripts can tell
a user mistake from a bug.
"""

from __future__ import annotations

from taskwright.exceptions import ErrorKind

SUCCESS: int = 0
"""Clean exit — the task, or a bootstrap/version/help short-circuit, completed."""

GENERAL_ERROR: int = 1
"""A known TaskwrightError was reported."""

UNEXPECTED_ERROR: int = 2
"""An exception outside the known error kinds reached the error boundary."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""


def for_error_kind(kind: ErrorKind) -> int:
    """Return the process exit code for a classified failure."""
    if kind is ErrorKind.UNEXPECTED:
        return UNEXPECTED_ERROR
    return GENERAL_ERROR
