"""Built-in tasks shipped with the CLI.

Currently only ``help``: it prints the global options and the task list,
or the usage of a single task when given its name.  Output goes to
stdout through Rich tables, with a plain-text fallback when Rich is not
installed.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from typing import Any

from taskwright.cli.console import emoji, output
from taskwright.core.env_variables import param_name_to_env_variable
from taskwright.core.environment import RuntimeEnvironment
from taskwright.core.models import ParamDefinition, TaskDefinition, TaskParamDefinition
from taskwright.core.params import GLOBAL_PARAM_DEFINITIONS, HELP_TASK_NAME
from taskwright.core.registry import TaskRegistry
from taskwright.exceptions import ErrorKind, TaskwrightError
from taskwright.version import __version__

PROGRAM_NAME = "taskwright"

_Row = tuple[str, str]


# ---------------------------------------------------------------------------
# Usage strings and table rows (pure)
# ---------------------------------------------------------------------------

def _param_placeholder(param: TaskParamDefinition | ParamDefinition) -> str:
    return f"<{param.type.value.upper()}>"


def _named_param_usage(param: TaskParamDefinition) -> str:
    usage = param.cli_name if param.is_flag else f"{param.cli_name} {_param_placeholder(param)}"
    return usage if param.is_required else f"[{usage}]"


def _positional_param_usage(param: TaskParamDefinition) -> str:
    usage = f"...{param.name}" if param.is_variadic else param.name
    return usage if param.is_required else f"[{usage}]"


def task_usage(definition: TaskDefinition) -> str:
    """Return the one-line usage string for *definition*."""
    parts = [PROGRAM_NAME, "[GLOBAL OPTIONS]", definition.name]
    parts.extend(_named_param_usage(p) for p in definition.params)
    if definition.positional_params:
        parts.append("[--]")
        parts.extend(_positional_param_usage(p) for p in definition.positional_params)
    return " ".join(parts)


def global_option_rows(definitions: Mapping[str, ParamDefinition]) -> list[_Row]:
    rows: list[_Row] = []
    for definition in definitions.values():
        env_name = param_name_to_env_variable(definition.name)
        rows.append((definition.cli_name, f"{definition.description} (env: {env_name})"))
    return rows


def task_rows(tasks: Mapping[str, TaskDefinition]) -> list[_Row]:
    return [(name, tasks[name].description) for name in sorted(tasks)]


def _describe(param: TaskParamDefinition) -> str:
    description = param.description
    if not param.is_required and not param.is_flag and param.default is not None:
        description = f"{description} (default: {param.default})".strip()
    return description


def param_rows(params: Sequence[TaskParamDefinition], *, positional: bool) -> list[_Row]:
    return [(p.name if positional else p.cli_name, _describe(p)) for p in params]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_section(title: str, rows: Sequence[_Row]) -> None:
    if not rows:
        return
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        print(f"\n{title}:\n", file=sys.stdout)
        width = max(len(name) for name, _ in rows)
        for name, description in rows:
            print(f"  {name:<{width}}  {description}", file=sys.stdout)
        return

    table = Table(title=title, title_justify="left", show_header=False, box=None, pad_edge=False)
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Description")
    for name, description in rows:
        table.add_row(name, description)
    output.print()
    output.print(table)


def _print_global_help(tasks: Mapping[str, TaskDefinition]) -> None:
    output.print(f"{PROGRAM_NAME} version {__version__}", markup=False)
    output.print()
    output.print(
        f"Usage: {PROGRAM_NAME} [GLOBAL OPTIONS] <TASK> [TASK OPTIONS]",
        markup=False,
    )
    _render_section("GLOBAL OPTIONS", global_option_rows(GLOBAL_PARAM_DEFINITIONS))
    _render_section("AVAILABLE TASKS", task_rows(tasks))
    output.print()
    output.print(
        f"To get help for a specific task run: {PROGRAM_NAME} help [task]",
        markup=False,
    )


def _print_task_help(definition: TaskDefinition) -> None:
    output.print(f"{PROGRAM_NAME} version {__version__}", markup=False)
    output.print()
    output.print(f"Usage: {task_usage(definition)}", markup=False)
    _render_section("OPTIONS", param_rows(definition.params, positional=False))
    _render_section(
        "POSITIONAL ARGUMENTS",
        param_rows(definition.positional_params, positional=True),
    )
    output.print()
    output.print(f"{definition.name}: {definition.description}", markup=False)
    output.print()
    output.print(
        f"For global options help run: {PROGRAM_NAME} help",
        markup=False,
    )


# ---------------------------------------------------------------------------
# Task bodies
# ---------------------------------------------------------------------------

def help_action(arguments: Mapping[str, Any], env: RuntimeEnvironment) -> None:
    """Print global help, or the usage of ``arguments["task"]``.

    Raises
    ------
    TaskwrightError
        ``UNRECOGNIZED_TASK`` if the requested task does not exist.
    """
    tasks = env.tasks.get_task_definitions()
    task_name = arguments.get("task")
    if task_name is None:
        _print_global_help(tasks)
        return

    definition = tasks.get(task_name)
    if definition is None:
        raise TaskwrightError(
            ErrorKind.UNRECOGNIZED_TASK,
            task=task_name,
            hint=f"{emoji('💡 ')}Run '{PROGRAM_NAME} help' to list the available tasks.",
        )
    _print_task_help(definition)


HELP_TASK = TaskDefinition(
    name=HELP_TASK_NAME,
    description="Prints this message",
    action=help_action,
    positional_params=(
        TaskParamDefinition(
            name="task",
            description="An optional task to print more info about",
            is_optional=True,
        ),
    ),
)


def create_default_registry() -> TaskRegistry:
    """Return a fresh registry holding the built-in tasks."""
    return TaskRegistry([HELP_TASK])
