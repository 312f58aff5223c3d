from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .paths import ParsedPath, parse_path

# Closed set of values json.loads can produce.
JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]

TYPE_ALIASES = {
    "integer": "int",
    "number": "float",
    "boolean": "bool",
}

KNOWN_TYPES = (
    "string", "int", "float", "bool",
    "[]string", "[]int", "time", "object", "array",
)


def normalize_type(name: Optional[str]) -> str:
    t = (name or "").strip().lower()
    return TYPE_ALIASES.get(t, t)


@dataclass
class MappingRule:
    source_path: str
    target_path: str
    type: str = ""                          # see KNOWN_TYPES; anything else passes through
    default_value: JSONValue = None         # None means "no default"
    time_format: str = ""                   # strptime pattern tried first
    target_time_format: str = ""            # unix|unix_ms|strftime pattern|"" (ms)
    timezone: str = ""                      # zoneinfo name
    enum_map: Dict[str, JSONValue] = field(default_factory=dict)
    enum_ignore_case: bool = False
    enum_default: JSONValue = None

    source: ParsedPath = field(init=False, repr=False, compare=False)
    target: ParsedPath = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.type = normalize_type(self.type)
        self.enum_map = dict(self.enum_map or {})
        self.source = parse_path(self.source_path)
        self.target = parse_path(self.target_path)

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    @property
    def has_enum_default(self) -> bool:
        return self.enum_default is not None

    @property
    def is_collection(self) -> bool:
        return self.source.has_wildcard and self.target.has_wildcard


@dataclass
class MappingSpec:
    version: str = "1"
    mappings: List[MappingRule] = field(default_factory=list)

    def __iter__(self):
        return iter(self.mappings)

    def __len__(self) -> int:
        return len(self.mappings)
