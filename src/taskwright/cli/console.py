"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--version``, error reporting) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from taskwright.exceptions import TaskwrightError, missing_dependency

_emoji_enabled: bool = False


def enable_emoji() -> None:
    """Turn on emoji in messages for the rest of the process."""
    global _emoji_enabled
    _emoji_enabled = True


def disable_emoji() -> None:
    global _emoji_enabled
    _emoji_enabled = False


def emoji(with_emoji: str, without_emoji: str = "") -> str:
    """Pick *with_emoji* when emoji are enabled, else *without_emoji*."""
    return with_emoji if _emoji_enabled else without_emoji


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``MISSING_DEPENDENCY``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise missing_dependency("rich") from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance, targeting stderr by default."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback.

    Keyword arguments (``style``, ``markup``, ``highlight``...) are
    forwarded to Rich and ignored by the plain fallback.
    """

    def __init__(self, *, stderr: bool = True) -> None:
        self._stderr = stderr

    def print(self, *objects: object, **kwargs: Any) -> None:
        """Render with Rich when available, else a plain print."""
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except TaskwrightError:
            print(*objects, file=sys.stderr if self._stderr else sys.stdout)
            return
        rich_console.print(*objects, **kwargs)


console = _ConsoleProxy()
"""Diagnostics, prompts and error reports (stderr)."""

output = _ConsoleProxy(stderr=False)
"""Task output such as help text (stdout)."""
