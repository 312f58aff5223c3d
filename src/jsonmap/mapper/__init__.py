from . import errors
from . import paths
from . import types
from . import timefmt
from . import convert
from . import expand
from . import emit
from . import engine
from . import loader

from .engine import apply_rule, transform_document, transform_json
from .loader import build_spec, load_spec, load_spec_text
from .types import MappingRule, MappingSpec

__all__ = [
    "errors",
    "paths",
    "types",
    "timefmt",
    "convert",
    "expand",
    "emit",
    "engine",
    "loader",
    "apply_rule",
    "transform_document",
    "transform_json",
    "build_spec",
    "load_spec",
    "load_spec_text",
    "MappingRule",
    "MappingSpec",
]
