"""Protocols (interfaces) consumed by the dispatch layer.

These define the contracts the task registry and the execution
environment must satisfy.  The CLI depends ONLY on these protocols,
so tests can substitute lightweight fakes.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from taskwright.core.models import Config, TaskDefinition


class TaskDefinitionSource(Protocol):
    """Contract for the task registry lookup."""

    def get_task_definitions(self) -> Mapping[str, TaskDefinition]:
        """Return every known task keyed by name.

        Unknown names are simply absent; callers decide how to report
        them.
        """
        ...  # pragma: no cover


class Environment(Protocol):
    """Contract for the execution environment that runs task bodies."""

    def run(self, task_name: str, task_arguments: Mapping[str, Any]) -> Any:
        """Run *task_name* with already-validated *task_arguments*.

        Blocks until the task completes.  Errors raised by the task body
        propagate unchanged.

        Raises
        ------
        TaskwrightError
            ``UNRECOGNIZED_TASK`` if *task_name* is not registered.
        """
        ...  # pragma: no cover


EnvironmentFactory = Callable[[Config, Mapping[str, Any], TaskDefinitionSource], Environment]
"""Signature of :func:`taskwright.core.environment.create_environment`."""
