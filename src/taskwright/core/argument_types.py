"""Argument value types and their string coercion rules.

Every function in this module is a **pure** transformation.  Coercion
failures raise :class:`ValueError`; the parser decides which domain
error that becomes (global option vs. task argument).
"""

from __future__ import annotations

import enum
import json
import re
from typing import Any


class ParamType(enum.Enum):
    """Value type of a global or task parameter."""

    STRING = "string"
    BOOLEAN = "boolean"
    INT = "int"
    FLOAT = "float"
    JSON = "json"


_DECIMAL_INT = re.compile(r"^[+-]?\d+$")
_HEX_INT = re.compile(r"^0x[0-9a-fA-F]+$")


def _coerce_boolean(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError("expected true or false")


def _coerce_int(raw: str) -> int:
    stripped = raw.strip()
    if _DECIMAL_INT.match(stripped):
        return int(stripped, 10)
    if _HEX_INT.match(stripped):
        return int(stripped, 16)
    raise ValueError("expected an integer")


def _coerce_float(raw: str) -> float:
    stripped = raw.strip()
    if _HEX_INT.match(stripped):
        return float(int(stripped, 16))
    try:
        return float(stripped)
    except ValueError:
        raise ValueError("expected a number") from None


def _coerce_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"expected valid JSON ({exc.msg})") from None


def coerce_value(param_type: ParamType, raw: object) -> Any:
    """Convert *raw* to a value of *param_type*.

    Only strings are coerced; values that are already typed (e.g. flag
    ``True`` or a default) pass through unchanged.

    Raises
    ------
    ValueError
        If *raw* is a string that does not parse as *param_type*.
    """
    if not isinstance(raw, str):
        return raw
    if param_type is ParamType.STRING:
        return raw
    if param_type is ParamType.BOOLEAN:
        return _coerce_boolean(raw)
    if param_type is ParamType.INT:
        return _coerce_int(raw)
    if param_type is ParamType.FLOAT:
        return _coerce_float(raw)
    return _coerce_json(raw)
