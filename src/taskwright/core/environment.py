"""Runtime environment that executes task bodies.

Tasks receive the environment as their second argument, so a task can
read the resolved configuration and global arguments or run other tasks
through :meth:`RuntimeEnvironment.run`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from taskwright.core.models import Config
from taskwright.core.protocols import TaskDefinitionSource
from taskwright.exceptions import ErrorKind, TaskwrightError

logger = logging.getLogger(__name__)


def apply_config_defaults(
    global_args: Mapping[str, Any],
    supplied_args: frozenset[str],
    config: Config,
) -> Mapping[str, Any]:
    """Let the config file's ``default_network`` replace the built-in default.

    Values supplied on the command line or through the environment are
    never overridden.
    """
    if config.default_network is None or "network" in supplied_args:
        return global_args
    merged = dict(global_args)
    merged["network"] = config.default_network
    return MappingProxyType(merged)


class RuntimeEnvironment:
    """Executes registered tasks for a single CLI invocation."""

    def __init__(
        self,
        config: Config,
        global_args: Mapping[str, Any],
        tasks: TaskDefinitionSource,
    ) -> None:
        self.config: Config = config
        self.global_args: Mapping[str, Any] = MappingProxyType(dict(global_args))
        self.tasks: TaskDefinitionSource = tasks

    @property
    def network(self) -> str | None:
        return self.global_args.get("network")

    def run(self, task_name: str, task_arguments: Mapping[str, Any] | None = None) -> Any:
        """Run *task_name* and return whatever its action returns.

        Errors raised by the action propagate unchanged.

        Raises
        ------
        TaskwrightError
            ``UNRECOGNIZED_TASK`` if *task_name* is not registered.
        """
        definition = self.tasks.get_task_definitions().get(task_name)
        if definition is None:
            raise TaskwrightError(ErrorKind.UNRECOGNIZED_TASK, task=task_name)

        arguments = MappingProxyType(dict(task_arguments or {}))
        logger.debug("Running task %s with %s", task_name, dict(arguments))
        result = definition.action(arguments, self)
        logger.debug("Task %s finished", task_name)
        return result


def create_environment(
    config: Config,
    global_args: Mapping[str, Any],
    tasks: TaskDefinitionSource,
) -> RuntimeEnvironment:
    """Build the environment the dispatcher hands the selected task to."""
    return RuntimeEnvironment(config, global_args, tasks)
