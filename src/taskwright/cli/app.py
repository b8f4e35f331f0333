"""CLI application entry point and task dispatch for taskwright.

This module is the **sole error boundary** for the entire application.
Every failure raised while parsing arguments, loading the config,
resolving the task or running it bubbles up to :func:`main`, which
hands it to :func:`~taskwright.cli.reporter.report_error` and returns a
well-defined exit code.

Architecture notes
------------------
* Ambient process state (``sys.argv``, ``os.environ``, the working
  directory, whether stdout is a TTY) is read here and nowhere else; it
  is passed down explicitly so the rest of the code stays testable.
* Dispatch is an explicit sequence of :class:`DispatchState` steps;
  the first one that applies ends the invocation.
* The ``--show-stack-traces`` preference is captured by a pre-parse scan
  before anything can fail, then upgraded from the parsed arguments.
"""

from __future__ import annotations

import enum
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from taskwright.cli import exit_codes
from taskwright.cli.builtin_tasks import create_default_registry
from taskwright.cli.console import console, enable_emoji
from taskwright.cli.reporter import report_error
from taskwright.core.arguments_parser import ArgumentsParser, scan_show_stack_traces
from taskwright.core.env_variables import get_env_arguments
from taskwright.core.environment import apply_config_defaults, create_environment
from taskwright.core.params import GLOBAL_PARAM_DEFINITIONS, HELP_TASK_NAME
from taskwright.core.protocols import EnvironmentFactory, TaskDefinitionSource
from taskwright.exceptions import ErrorKind, TaskwrightError
from taskwright.infra.project import is_cwd_inside_project, load_config
from taskwright.logging_config import setup_logging
from taskwright.version import __version__

logger = logging.getLogger(__name__)


class DispatchState(enum.Enum):
    """Dispatch steps, in evaluation order."""

    BOOTSTRAP = "bootstrap"
    VERSION = "version"
    TASK_RESOLUTION = "task-resolution"
    HELP_INTERCEPT = "help-intercept"
    TASK_ARGUMENTS = "task-arguments"
    EXECUTION = "execution"


# ---------------------------------------------------------------------------
# Dispatch controller
# ---------------------------------------------------------------------------

class DispatchController:
    """Turns an argument vector into exactly one outcome.

    Parameters
    ----------
    environ:
        Snapshot of the process environment.
    cwd:
        Directory the CLI was started from.
    interactive:
        Whether stdout is attached to a terminal.
    tasks:
        Task registry lookup.
    environment_factory:
        Builds the execution environment for the selected task.
    show_stack_traces:
        Result of the pre-parse scan; upgraded once arguments are parsed.
    """

    def __init__(
        self,
        *,
        environ: Mapping[str, str],
        cwd: Path,
        interactive: bool,
        tasks: TaskDefinitionSource,
        environment_factory: EnvironmentFactory = create_environment,
        show_stack_traces: bool = False,
    ) -> None:
        self._environ = environ
        self._cwd = cwd
        self._interactive = interactive
        self._tasks = tasks
        self._environment_factory = environment_factory
        self._parser = ArgumentsParser()
        self.show_stack_traces: bool = show_stack_traces
        self.state: DispatchState | None = None

    def _enter(self, state: DispatchState) -> None:
        logger.debug("Dispatch state: %s", state.value)
        self.state = state

    def dispatch(self, argv: Sequence[str]) -> int:
        """Run the dispatch steps for *argv* and return the exit code.

        Errors are not caught here; they propagate to :func:`main`.
        """
        env_arguments = get_env_arguments(GLOBAL_PARAM_DEFINITIONS, self._environ)
        parsed = self._parser.parse_global_arguments(
            GLOBAL_PARAM_DEFINITIONS,
            env_arguments,
            argv,
        )
        global_args = parsed.global_args

        if global_args["emoji"]:
            enable_emoji()
        setup_logging(verbose=bool(global_args["verbose"]))
        self.show_stack_traces = self.show_stack_traces or bool(global_args["show_stack_traces"])

        self._enter(DispatchState.BOOTSTRAP)
        if not is_cwd_inside_project(self._cwd) and self._interactive:
            from taskwright.cli.project_creation import create_project

            create_project(self._cwd)
            return exit_codes.SUCCESS

        self._enter(DispatchState.VERSION)
        if global_args["version"]:
            print(__version__)
            return exit_codes.SUCCESS

        config = load_config(self._cwd, global_args["config"])
        global_args = apply_config_defaults(global_args, parsed.supplied_args, config)

        self._enter(DispatchState.TASK_RESOLUTION)
        task_name = parsed.task_name if parsed.task_name is not None else HELP_TASK_NAME
        task_definition = self._tasks.get_task_definitions().get(task_name)
        if task_definition is None:
            raise TaskwrightError(
                ErrorKind.UNRECOGNIZED_TASK,
                task=task_name,
                hint="Run 'taskwright help' to list the available tasks.",
            )

        env = self._environment_factory(config, global_args, self._tasks)

        # Help runs before the task's own arguments are validated so that
        # `--help <task>` works for tasks with required params.
        self._enter(DispatchState.HELP_INTERCEPT)
        if global_args["help"] and task_name != HELP_TASK_NAME:
            env.run(HELP_TASK_NAME, {"task": task_name})
            return exit_codes.SUCCESS

        self._enter(DispatchState.TASK_ARGUMENTS)
        task_arguments = self._parser.parse_task_arguments(
            task_definition,
            parsed.residual_tokens,
        )

        self._enter(DispatchState.EXECUTION)
        env.run(task_name, task_arguments)
        return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
    interactive: bool | None = None,
    tasks: TaskDefinitionSource | None = None,
    environment_factory: EnvironmentFactory = create_environment,
) -> int:
    """Run the taskwright CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Every other keyword likewise defaults to the real
        process state; tests pass them explicitly.

    Returns
    -------
    int
        OS process exit code.
    """
    if argv is None:
        argv = sys.argv[1:]
    if environ is None:
        environ = dict(os.environ)
    if cwd is None:
        cwd = Path.cwd()
    if interactive is None:
        interactive = sys.stdout.isatty()
    if tasks is None:
        tasks = create_default_registry()

    controller = DispatchController(
        environ=environ,
        cwd=cwd,
        interactive=interactive,
        tasks=tasks,
        environment_factory=environment_factory,
        show_stack_traces=scan_show_stack_traces(argv),
    )

    try:
        return controller.dispatch(argv)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        return exit_codes.KEYBOARD_INTERRUPT
    except Exception as exc:  # noqa: BLE001
        return report_error(exc, show_stack_traces=controller.show_stack_traces)


def cli() -> None:
    """Console-script entry point."""
    sys.exit(main())
