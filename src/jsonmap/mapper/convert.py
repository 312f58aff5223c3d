from __future__ import annotations

import json
import math
from copy import deepcopy
from typing import Any, List

from .errors import EnumMappingError
from .timefmt import convert_time
from .types import JSONValue, MappingRule

_TRUE_STRINGS = {"1", "t", "T", "TRUE", "true", "True"}


def to_text(v: Any) -> str:
    """Canonical text form of a JSON value (used for string casts and enum keys)."""
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (int, float)):
        return json.dumps(v)
    return json.dumps(v, separators=(",", ":"), ensure_ascii=False)


def to_float(v: Any) -> float:
    if isinstance(v, bool):
        return 1.0 if v else 0.0
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str):
        try:
            f = float(v.strip())
        except ValueError:
            return 0.0
        return f if math.isfinite(f) else 0.0
    return 0.0


def to_int(v: Any) -> int:
    if isinstance(v, bool):
        return int(v)
    if isinstance(v, int):
        return v
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            pass
    f = to_float(v)
    return int(f) if math.isfinite(f) else 0


def to_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v != 0
    if isinstance(v, str):
        return v.strip() in _TRUE_STRINGS
    return False


def _as_list(v: Any) -> List[Any]:
    return v if isinstance(v, list) else []


def apply_enum(value: Any, rule: MappingRule) -> JSONValue:
    """
    Substitute ``value`` through ``rule.enum_map``.

    Keys are compared against the canonical text of the value, both sides
    lower-cased when ``enum_ignore_case`` is set. The first matching entry wins.
    """
    text = to_text(value)
    lookup = text.lower() if rule.enum_ignore_case else text
    for key, mapped in rule.enum_map.items():
        candidate = str(key).lower() if rule.enum_ignore_case else str(key)
        if candidate == lookup:
            return deepcopy(mapped)
    if rule.has_enum_default:
        return deepcopy(rule.enum_default)
    raise EnumMappingError(f"enum value {text!r} has no mapping and no enum_default")


def convert_value(value: Any, rule: MappingRule) -> JSONValue:
    if rule.enum_map:
        return apply_enum(value, rule)

    t = rule.type
    if t == "string":
        return to_text(value)
    if t == "int":
        return to_int(value)
    if t == "float":
        return to_float(value)
    if t == "bool":
        return to_bool(value)
    if t == "[]string":
        return [to_text(x) for x in _as_list(value)]
    if t == "[]int":
        return [to_int(x) for x in _as_list(value)]
    if t == "time":
        return convert_time(
            value,
            time_format=rule.time_format,
            target_time_format=rule.target_time_format,
            timezone=rule.timezone,
        )
    # object, array and unknown types pass the value through unconverted
    return deepcopy(value)
