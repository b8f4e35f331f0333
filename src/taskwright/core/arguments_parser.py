"""Two-tier command-line parsing.

Grammar of the process argument vector::

    <global options>* <task name>? <task tokens>*

Phases
------
1. **Pre-parse scan** — :func:`scan_show_stack_traces` looks for the
   exact token ``--show-stack-traces`` anywhere in the vector, so a
   failure in the later phases can still be reported with a full trace.
2. **Global phase** — :meth:`ArgumentsParser.parse_global_arguments`
   consumes global options up to the first positional token (the task
   name) and merges defaults, environment values and CLI values.
3. **Task phase** — :meth:`ArgumentsParser.parse_task_arguments` binds
   the residual tokens to a task's schema.  Named bindings are resolved
   first (``--name value``, ``--name=value``, bare ``--flag``); every
   other token is positional.  A lone ``--`` ends named parsing.

The parser holds no per-call state: parsing the same input twice gives
equal results.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from taskwright.core.argument_types import coerce_value
from taskwright.core.env_variables import param_name_to_env_variable
from taskwright.core.models import (
    CLI_OPTION_PREFIX,
    ParamDefinition,
    ParseResult,
    TaskDefinition,
    TaskParamDefinition,
    param_name_from_option,
)
from taskwright.exceptions import ErrorKind, TaskwrightError

logger = logging.getLogger(__name__)

SHOW_STACK_TRACES_FLAG = "--show-stack-traces"
END_OF_OPTIONS = "--"


def scan_show_stack_traces(argv: Sequence[str]) -> bool:
    """Return ``True`` if ``--show-stack-traces`` appears anywhere in *argv*.

    Only the exact token counts; ``--show-stack-traces=true`` is left to
    the structured parser.
    """
    return SHOW_STACK_TRACES_FLAG in argv


def _is_option(token: str) -> bool:
    return token.startswith(CLI_OPTION_PREFIX)


class ArgumentsParser:
    """Stateless parser for global options and task arguments."""

    # ------------------------------------------------------------------
    # Global phase
    # ------------------------------------------------------------------

    def parse_global_arguments(
        self,
        param_definitions: Mapping[str, ParamDefinition],
        env_arguments: Mapping[str, Any],
        argv: Sequence[str],
    ) -> ParseResult:
        """Parse global options and locate the task name.

        Raises
        ------
        TaskwrightError
            ``UNRECOGNIZED_GLOBAL_OPTION`` for an unknown ``--`` token
            before the task name, ``REPEATED_GLOBAL_OPTION`` for an option
            given twice, ``INVALID_GLOBAL_OPTION_VALUE`` for a missing or
            uncoercible value (from the CLI or the environment).
        """
        cli_values: dict[str, Any] = {}
        task_name: str | None = None
        index = 0

        while index < len(argv):
            token = argv[index]
            if not _is_option(token):
                task_name = token
                index += 1
                break

            option, has_inline_value, inline_value = token.partition("=")
            definition = param_definitions.get(param_name_from_option(option))
            if definition is None:
                raise TaskwrightError(ErrorKind.UNRECOGNIZED_GLOBAL_OPTION, option=token)
            if definition.name in cli_values:
                raise TaskwrightError(ErrorKind.REPEATED_GLOBAL_OPTION, option=option)

            raw: Any
            if definition.is_flag:
                raw = inline_value if has_inline_value else True
                index += 1
            elif has_inline_value:
                raw = inline_value
                index += 1
            elif index + 1 < len(argv):
                raw = argv[index + 1]
                index += 2
            else:
                raise TaskwrightError(
                    ErrorKind.INVALID_GLOBAL_OPTION_VALUE,
                    option=option,
                    reason="a value is required",
                )
            cli_values[definition.name] = self._coerce_global(definition, raw, option)

        residual_tokens = tuple(argv[index:]) if task_name is not None else ()
        global_args = self._merge_global_arguments(param_definitions, env_arguments, cli_values)
        supplied = frozenset(cli_values) | frozenset(
            name for name in env_arguments if name in param_definitions
        )

        logger.debug(
            "Parsed global arguments: task=%s residual=%s supplied=%s",
            task_name,
            list(residual_tokens),
            sorted(supplied),
        )
        return ParseResult(
            global_args=MappingProxyType(global_args),
            task_name=task_name,
            residual_tokens=residual_tokens,
            supplied_args=supplied,
        )

    def _merge_global_arguments(
        self,
        param_definitions: Mapping[str, ParamDefinition],
        env_arguments: Mapping[str, Any],
        cli_values: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Overlay defaults ← environment ← CLI, one value per parameter."""
        merged: dict[str, Any] = {}
        for name, definition in param_definitions.items():
            if name in cli_values:
                merged[name] = cli_values[name]
            elif name in env_arguments:
                merged[name] = self._coerce_global(
                    definition,
                    env_arguments[name],
                    param_name_to_env_variable(name),
                )
            else:
                merged[name] = definition.default
        return merged

    @staticmethod
    def _coerce_global(definition: ParamDefinition, raw: Any, source: str) -> Any:
        try:
            return coerce_value(definition.type, raw)
        except ValueError as exc:
            raise TaskwrightError(
                ErrorKind.INVALID_GLOBAL_OPTION_VALUE,
                option=source,
                reason=f"{raw!r} is not valid ({exc})",
            ) from exc

    # ------------------------------------------------------------------
    # Task phase
    # ------------------------------------------------------------------

    def parse_task_arguments(
        self,
        task_definition: TaskDefinition,
        tokens: Sequence[str],
    ) -> dict[str, Any]:
        """Bind *tokens* to *task_definition*'s params.

        Every declared param appears in the result: supplied values are
        coerced to the param's type, missing optional params get a coerced
        copy of their default (``False`` for flags, ``[]`` for a variadic
        without one).  A stray ``--show-stack-traces`` before ``--`` is
        skipped unless the task declares a param of that name.

        Raises
        ------
        TaskwrightError
            ``INVALID_TASK_ARGUMENT`` for unknown or repeated options,
            missing values or required params, surplus positional tokens
            and values that fail type coercion.
        """
        named_values, positional_tokens = self._split_named_arguments(task_definition, tokens)

        arguments: dict[str, Any] = {}
        for param in task_definition.params:
            if param.name in named_values:
                arguments[param.name] = named_values[param.name]
            elif param.is_flag:
                arguments[param.name] = False
            elif param.is_required:
                raise self._invalid(task_definition, f"missing required param {param.cli_name}")
            else:
                arguments[param.name] = self._default_value(task_definition, param)

        arguments.update(self._bind_positional(task_definition, positional_tokens))
        return arguments

    def _split_named_arguments(
        self,
        task_definition: TaskDefinition,
        tokens: Sequence[str],
    ) -> tuple[dict[str, Any], list[str]]:
        """Consume ``--name`` tokens; return named values and the rest in order."""
        named_values: dict[str, Any] = {}
        positional_tokens: list[str] = []
        options_ended = False
        index = 0

        while index < len(tokens):
            token = tokens[index]
            if options_ended or not _is_option(token):
                positional_tokens.append(token)
                index += 1
                continue
            if token == END_OF_OPTIONS:
                options_ended = True
                index += 1
                continue

            option, has_inline_value, inline_value = token.partition("=")
            param = task_definition.find_param(param_name_from_option(option))
            if param is None and token == SHOW_STACK_TRACES_FLAG:
                # Already honoured by the pre-parse scan.
                index += 1
                continue
            if param is None:
                raise self._invalid(task_definition, f"unrecognized param {option}")
            if param.name in named_values:
                raise self._invalid(task_definition, f"param {option} was given more than once")

            raw: Any
            if param.is_flag:
                raw = inline_value if has_inline_value else True
                index += 1
            elif has_inline_value:
                raw = inline_value
                index += 1
            elif index + 1 < len(tokens):
                raw = tokens[index + 1]
                index += 2
            else:
                raise self._invalid(task_definition, f"missing value for param {option}")
            named_values[param.name] = self._coerce_task(task_definition, param, raw)

        return named_values, positional_tokens

    def _bind_positional(
        self,
        task_definition: TaskDefinition,
        positional_tokens: Sequence[str],
    ) -> dict[str, Any]:
        bound: dict[str, Any] = {}
        remaining = list(positional_tokens)

        for param in task_definition.positional_params:
            if param.is_variadic:
                if remaining:
                    bound[param.name] = [
                        self._coerce_task(task_definition, param, raw) for raw in remaining
                    ]
                    remaining = []
                elif param.is_required:
                    raise self._invalid(task_definition, f"missing required param {param.name}")
                else:
                    bound[param.name] = self._default_value(task_definition, param)
            elif remaining:
                bound[param.name] = self._coerce_task(task_definition, param, remaining.pop(0))
            elif param.is_required:
                raise self._invalid(task_definition, f"missing required param {param.name}")
            else:
                bound[param.name] = self._default_value(task_definition, param)

        if remaining:
            raise self._invalid(task_definition, f"unexpected argument {remaining[0]!r}")
        return bound

    def _default_value(
        self,
        task_definition: TaskDefinition,
        param: TaskParamDefinition,
    ) -> Any:
        """Return a fresh, coerced copy of *param*'s declared default.

        A variadic param always gets a list; a scalar default becomes a
        single-element list.
        """
        default = param.default
        if param.is_variadic:
            if default is None:
                return []
            values = default if isinstance(default, (list, tuple)) else [default]
            return [self._coerce_task(task_definition, param, copy.deepcopy(v)) for v in values]
        if default is None:
            return None
        return self._coerce_task(task_definition, param, copy.deepcopy(default))

    def _coerce_task(
        self,
        task_definition: TaskDefinition,
        param: TaskParamDefinition,
        raw: Any,
    ) -> Any:
        try:
            return coerce_value(param.type, raw)
        except ValueError as exc:
            raise self._invalid(
                task_definition,
                f"invalid {param.type.value} value {raw!r} for param {param.name} ({exc})",
            ) from exc

    @staticmethod
    def _invalid(task_definition: TaskDefinition, reason: str) -> TaskwrightError:
        return TaskwrightError(
            ErrorKind.INVALID_TASK_ARGUMENT,
            task=task_definition.name,
            reason=reason,
            hint=f"Run 'taskwright help {task_definition.name}' to see its usage.",
        )
