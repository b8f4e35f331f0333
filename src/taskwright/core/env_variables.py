"""Environment-variable fallbacks for global parameters.

Each global parameter ``name`` may be supplied through the variable
``TASKWRIGHT_<NAME>``.  The resolver takes an explicit environment
snapshot so it can be tested without touching :data:`os.environ`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from taskwright.core.argument_types import ParamType
from taskwright.core.models import ParamDefinition

ENV_VARIABLE_PREFIX = "TASKWRIGHT_"

_FALSY_BOOLEAN_VALUES = frozenset({"", "false"})


def param_name_to_env_variable(name: str) -> str:
    """Return the environment variable backing parameter *name*."""
    return ENV_VARIABLE_PREFIX + name.upper()


def get_env_arguments(
    param_definitions: Mapping[str, ParamDefinition],
    environ: Mapping[str, str],
) -> dict[str, Any]:
    """Collect global-argument overrides from *environ*.

    Boolean parameters are ``True`` when their variable is set to
    anything other than an empty string or ``false`` (case-insensitive).
    Other values are returned verbatim; the parser coerces them.
    Variables that are not set produce no entry.
    """
    overrides: dict[str, Any] = {}
    for name, definition in param_definitions.items():
        raw = environ.get(param_name_to_env_variable(name))
        if raw is None:
            continue
        if definition.type is ParamType.BOOLEAN:
            overrides[name] = raw.strip().lower() not in _FALSY_BOOLEAN_VALUES
        else:
            overrides[name] = raw
    return overrides
