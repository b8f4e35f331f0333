"""Global Parameter Definition Table.

Static, read-only, process-wide.  Each framework-level option is
defined exactly once here; the parser, the environment-variable
resolver and the help task all read from this table.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from taskwright.core.argument_types import ParamType
from taskwright.core.models import ParamDefinition

DEFAULT_NETWORK = "develop"
HELP_TASK_NAME = "help"

_DEFINITIONS: tuple[ParamDefinition, ...] = (
    ParamDefinition(
        name="network",
        description="The network to connect to.",
        type=ParamType.STRING,
        default=DEFAULT_NETWORK,
    ),
    ParamDefinition(
        name="config",
        description="A taskwright config file.",
        type=ParamType.STRING,
        default=None,
    ),
    ParamDefinition(
        name="show_stack_traces",
        description="Show stack traces.",
        type=ParamType.BOOLEAN,
        default=False,
        is_flag=True,
    ),
    ParamDefinition(
        name="version",
        description="Shows version and exit.",
        type=ParamType.BOOLEAN,
        default=False,
        is_flag=True,
    ),
    ParamDefinition(
        name="help",
        description="Shows this message.",
        type=ParamType.BOOLEAN,
        default=False,
        is_flag=True,
    ),
    ParamDefinition(
        name="emoji",
        description="Use emoji in messages.",
        type=ParamType.BOOLEAN,
        default=False,
        is_flag=True,
    ),
    ParamDefinition(
        name="verbose",
        description="Enables debug logging.",
        type=ParamType.BOOLEAN,
        default=False,
        is_flag=True,
    ),
)

GLOBAL_PARAM_DEFINITIONS: Mapping[str, ParamDefinition] = MappingProxyType(
    {definition.name: definition for definition in _DEFINITIONS}
)
