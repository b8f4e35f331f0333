"""Error taxonomy for taskwright.

Every user-visible failure is a :class:`TaskwrightError` carrying an
:class:`ErrorKind` and a context payload.  The set of kinds is closed:
the CLI error boundary classifies failures by their kind instead of
walking an exception class hierarchy.

Kinds
-----
ErrorKind
├── UNRECOGNIZED_GLOBAL_OPTION   unknown ``--flag`` before the task name
├── INVALID_GLOBAL_OPTION_VALUE  missing or uncoercible global value
├── REPEATED_GLOBAL_OPTION       the same global option given twice
├── UNRECOGNIZED_TASK            task name not in the registry
├── INVALID_TASK_ARGUMENT        task argument missing, unknown or invalid
├── CONFIG_LOAD_FAILURE          config file missing or malformed
├── TASK_EXECUTION_FAILURE       a task body reported a known failure
├── PROJECT_CREATION_FAILURE     the project wizard could not write files
├── MISSING_DEPENDENCY           an optional UI package is not installed
└── UNEXPECTED                   classification of any foreign exception
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any


class ErrorKind(enum.Enum):
    """Closed set of failure kinds the CLI knows how to explain."""

    UNRECOGNIZED_GLOBAL_OPTION = "unrecognized-global-option"
    INVALID_GLOBAL_OPTION_VALUE = "invalid-global-option-value"
    REPEATED_GLOBAL_OPTION = "repeated-global-option"
    UNRECOGNIZED_TASK = "unrecognized-task"
    INVALID_TASK_ARGUMENT = "invalid-task-argument"
    CONFIG_LOAD_FAILURE = "config-load-failure"
    TASK_EXECUTION_FAILURE = "task-execution-failure"
    PROJECT_CREATION_FAILURE = "project-creation-failure"
    MISSING_DEPENDENCY = "missing-dependency"
    UNEXPECTED = "unexpected"


_MESSAGE_TEMPLATES: Mapping[ErrorKind, str] = MappingProxyType(
    {
        ErrorKind.UNRECOGNIZED_GLOBAL_OPTION: "Unrecognized command line argument {option}",
        ErrorKind.INVALID_GLOBAL_OPTION_VALUE: "Invalid value for {option}: {reason}",
        ErrorKind.REPEATED_GLOBAL_OPTION: "Option {option} was given more than once",
        ErrorKind.UNRECOGNIZED_TASK: "Unrecognized task {task}",
        ErrorKind.INVALID_TASK_ARGUMENT: "Invalid arguments for task {task}: {reason}",
        ErrorKind.CONFIG_LOAD_FAILURE: "Could not load config file {path}: {reason}",
        ErrorKind.TASK_EXECUTION_FAILURE: "Task {task} failed: {reason}",
        ErrorKind.PROJECT_CREATION_FAILURE: "Could not create project in {path}: {reason}",
        ErrorKind.MISSING_DEPENDENCY: "{package} is not installed. Install with: pip install {package}",
        ErrorKind.UNEXPECTED: "{reason}",
    }
)


class TaskwrightError(Exception):
    """A recognised, user-facing failure.

    Parameters
    ----------
    kind:
        Which failure this is.  Selects the message template.
    hint:
        Optional actionable guidance shown below the error message.
    **context:
        Values interpolated into the kind's message template.  Kept on
        :attr:`context` so callers and tests can inspect them.
    """

    def __init__(self, kind: ErrorKind, *, hint: str | None = None, **context: Any) -> None:
        self.kind: ErrorKind = kind
        self.context: Mapping[str, Any] = MappingProxyType(dict(context))
        self.hint: str | None = hint
        super().__init__(_MESSAGE_TEMPLATES[kind].format(**context))


def missing_dependency(package: str) -> TaskwrightError:
    """Build the error raised when an optional UI package cannot be imported."""
    return TaskwrightError(ErrorKind.MISSING_DEPENDENCY, package=package)
