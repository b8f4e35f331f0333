"""Core layer — parsing, task schemas and task execution.

Rules
-----
* No ``print()`` calls.
* No reads of ambient process state (``os.environ``, cwd, TTY); callers
  pass snapshots in.
* No imports from ``cli`` or ``infra``.
"""

from taskwright.core.argument_types import ParamType, coerce_value
from taskwright.core.arguments_parser import ArgumentsParser, scan_show_stack_traces
from taskwright.core.environment import RuntimeEnvironment, create_environment
from taskwright.core.models import (
    Config,
    ParamDefinition,
    ParseResult,
    TaskDefinition,
    TaskParamDefinition,
)
from taskwright.core.params import GLOBAL_PARAM_DEFINITIONS
from taskwright.core.registry import TaskRegistry

__all__: list[str] = [
    "ArgumentsParser",
    "Config",
    "GLOBAL_PARAM_DEFINITIONS",
    "ParamDefinition",
    "ParamType",
    "ParseResult",
    "RuntimeEnvironment",
    "TaskDefinition",
    "TaskParamDefinition",
    "TaskRegistry",
    "coerce_value",
    "create_environment",
    "scan_show_stack_traces",
]
