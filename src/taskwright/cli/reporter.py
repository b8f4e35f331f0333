"""Error classification and reporting for the CLI error boundary.

Output shape (stderr)::

    Error: Unrecognized task compile          <- one red summary line
    Hint: Run 'taskwright help' ...           <- only when the error has a hint

    For more info run taskwright again with --show-stack-traces.

With stack traces enabled, the last line is replaced by the full
traceback.  Unexpected errors get an apology and a request to report
the problem instead of a hint.
"""

from __future__ import annotations

import contextlib
import sys
import traceback

from taskwright.cli import exit_codes
from taskwright.cli.console import console
from taskwright.exceptions import ErrorKind, TaskwrightError

STACK_TRACES_HINT = "For more info run taskwright again with --show-stack-traces."
REPORT_REQUEST = (
    "This shouldn't have happened, please report it to help us improve taskwright."
)

_Line = tuple[str, str | None]


def classify_error(error: BaseException) -> ErrorKind:
    """Return the error's kind, or ``UNEXPECTED`` for foreign exceptions."""
    if isinstance(error, TaskwrightError):
        return error.kind
    return ErrorKind.UNEXPECTED


def _build_report(error: BaseException, kind: ErrorKind, show_stack_traces: bool) -> list[_Line]:
    lines: list[_Line] = []
    if kind is ErrorKind.UNEXPECTED:
        lines.append((f"An unexpected error occurred: {type(error).__name__}: {error}", "bold red"))
        lines.append((REPORT_REQUEST, None))
    else:
        lines.append((f"Error: {error}", "bold red"))
        hint = getattr(error, "hint", None)
        if hint:
            lines.append((f"Hint: {hint}", "yellow"))

    lines.append(("", None))

    if show_stack_traces:
        trace = "".join(traceback.format_exception(error)).rstrip()
        lines.append((trace, None))
    else:
        lines.append((STACK_TRACES_HINT, None))
    return lines


def report_error(error: BaseException, *, show_stack_traces: bool) -> int:
    """Print a report for *error* and return the matching exit code.

    This is the last line of defence: it never raises.  If Rich fails
    to render, the same lines are written to stderr as plain text.
    """
    kind = classify_error(error)
    lines = _build_report(error, kind, show_stack_traces)

    try:
        for text, style in lines:
            console.print(text, style=style, markup=False, highlight=False, soft_wrap=True)
    except Exception:  # noqa: BLE001
        with contextlib.suppress(OSError, ValueError):
            for text, _style in lines:
                print(text, file=sys.stderr)

    return exit_codes.for_error_kind(kind)
