"""Domain models for taskwright.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and construction-time validation.  They
carry zero I/O and must remain pure across the entire lifecycle.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from taskwright.core.argument_types import ParamType

CLI_OPTION_PREFIX = "--"

TaskAction = Callable[[Mapping[str, Any], Any], Any]
"""A task body: called with ``(task_arguments, environment)``."""


def cli_option_name(name: str) -> str:
    """Return the command-line spelling of a parameter (``--show-stack-traces``)."""
    return CLI_OPTION_PREFIX + name.replace("_", "-")


def param_name_from_option(option: str) -> str:
    """Inverse of :func:`cli_option_name` for a ``--``-prefixed token."""
    return option[len(CLI_OPTION_PREFIX):].replace("-", "_")


def _frozen_mapping(data: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    return MappingProxyType(dict(data or {}))


# ---------------------------------------------------------------------------
# Global parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParamDefinition:
    """One row of the global Parameter Definition Table."""

    name: str
    """Snake-case parameter name (``show_stack_traces``)."""

    description: str

    type: ParamType = ParamType.STRING

    default: Any = None
    """Value used when neither the CLI nor the environment supplies one."""

    is_flag: bool = False
    """Flags are booleans that never consume a value token."""

    def __post_init__(self) -> None:
        if self.is_flag and self.type is not ParamType.BOOLEAN:
            raise ValueError(f"Flag parameter {self.name!r} must be boolean")

    @property
    def cli_name(self) -> str:
        return cli_option_name(self.name)


# ---------------------------------------------------------------------------
# Task definitions (owned by the registry, consumed by the parser)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TaskParamDefinition:
    """A single named or positional parameter in a task's schema."""

    name: str
    description: str = ""
    type: ParamType = ParamType.STRING
    default: Any = None
    is_optional: bool = False
    is_flag: bool = False
    is_variadic: bool = False

    def __post_init__(self) -> None:
        if self.is_flag and self.type is not ParamType.BOOLEAN:
            raise ValueError(f"Flag parameter {self.name!r} must be boolean")
        if self.is_flag and self.is_variadic:
            raise ValueError(f"Parameter {self.name!r} cannot be both flag and variadic")

    @property
    def cli_name(self) -> str:
        return cli_option_name(self.name)

    @property
    def is_required(self) -> bool:
        return not (self.is_optional or self.is_flag)


@dataclass(frozen=True, slots=True)
class TaskDefinition:
    """Schema and body of a runnable task.

    Named params are bound from ``--name value`` tokens; positional
    params are bound in declared order from the remaining tokens, with
    an optional variadic param last.
    """

    name: str
    description: str
    action: TaskAction
    params: tuple[TaskParamDefinition, ...] = ()
    positional_params: tuple[TaskParamDefinition, ...] = ()

    def __post_init__(self) -> None:
        names = [p.name for p in self.params + self.positional_params]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Task {self.name!r} declares {duplicates} more than once")

        for param in self.params:
            if param.is_variadic:
                raise ValueError(f"Named parameter {param.name!r} cannot be variadic")

        seen_optional = False
        for index, param in enumerate(self.positional_params):
            if param.is_flag:
                raise ValueError(f"Positional parameter {param.name!r} cannot be a flag")
            if param.is_variadic and index != len(self.positional_params) - 1:
                raise ValueError(f"Variadic parameter {param.name!r} must be the last one")
            if param.is_required and seen_optional:
                raise ValueError(
                    f"Required parameter {param.name!r} cannot follow an optional one"
                )
            seen_optional = seen_optional or param.is_optional

    def find_param(self, name: str) -> TaskParamDefinition | None:
        """Return the *named* param called *name*, or ``None``."""
        return next((p for p in self.params if p.name == name), None)


# ---------------------------------------------------------------------------
# Parse results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of the global parsing phase.

    ``global_args`` holds a value for every defined global parameter.
    ``residual_tokens`` is the untouched suffix of the argument vector
    after the task name.  ``supplied_args`` names the parameters set
    from the CLI or the environment rather than their defaults.
    """

    global_args: Mapping[str, Any]
    task_name: str | None = None
    residual_tokens: tuple[str, ...] = ()
    supplied_args: frozenset[str] = frozenset()


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Config:
    """Resolved project configuration.

    ``path`` is ``None`` when no config file exists; ``root`` is then
    the working directory the CLI was started from.
    """

    root: Path
    path: Path | None = None
    default_network: str | None = None
    data: Mapping[str, Any] = field(default_factory=_frozen_mapping)
