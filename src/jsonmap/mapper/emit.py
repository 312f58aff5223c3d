from __future__ import annotations

import json
from copy import deepcopy
from typing import Any, Dict, List, Optional

from .errors import DocumentWriteError
from .paths import INDEX, ParsedPath, Segment, parse_path


def is_raw_fragment(value: Any) -> bool:
    """A string that already holds a serialized JSON object or array."""
    if not isinstance(value, str):
        return False
    return (value.startswith("{") and value.endswith("}")) or (
        value.startswith("[") and value.endswith("]")
    )


def _prepare(value: Any) -> Any:
    if is_raw_fragment(value):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            # bracketed text such as "[draft]" is a plain string
            return value
    return deepcopy(value)


def _new_container(next_seg: Segment):
    return [] if next_seg.kind == INDEX else {}


def _pad(lst: List[Any], idx: int) -> None:
    while len(lst) <= idx:
        lst.append(None)


def _put(cur: Any, seg: Segment, value: Any, path: ParsedPath) -> None:
    if isinstance(cur, dict):
        cur[seg.token] = value
    elif isinstance(cur, list) and seg.kind == INDEX:
        _pad(cur, seg.index)
        cur[seg.index] = value
    else:
        raise DocumentWriteError(
            f"cannot set {seg.token!r} on {type(cur).__name__} node while writing {path}"
        )


def _descend(cur: Any, seg: Segment, next_seg: Segment, path: ParsedPath) -> Any:
    if isinstance(cur, dict):
        child = cur.get(seg.token)
    elif isinstance(cur, list) and seg.kind == INDEX:
        child = cur[seg.index] if seg.index < len(cur) else None
    else:
        raise DocumentWriteError(
            f"cannot descend into {type(cur).__name__} node at {seg.token!r} while writing {path}"
        )
    if child is None:
        child = _new_container(next_seg)
        _put(cur, seg, child, path)
    elif not isinstance(child, (dict, list)):
        raise DocumentWriteError(
            f"path conflict at {seg.token!r}: existing {type(child).__name__} value while writing {path}"
        )
    return child


def set_value(document: Dict[str, Any], path, value: Any) -> Dict[str, Any]:
    """
    Write ``value`` at a concrete ``path``, creating objects and arrays on the way.

    A digit segment creates an array (padded with nulls up to the index); any
    other segment creates an object. Raw JSON fragment strings are written as
    the structure they encode.

    Examples:
      set_value({}, "a.b", 1)               -> {"a": {"b": 1}}
      set_value({}, "people.1.name", "x")   -> {"people": [None, {"name": "x"}]}
      set_value({}, "ids", "[1,2,3]")       -> {"ids": [1, 2, 3]}
    """
    p = parse_path(path)
    if p.has_wildcard:
        raise DocumentWriteError(f"cannot write to unexpanded wildcard path: {p}")
    value = _prepare(value)
    cur: Any = document
    segs = p.segments
    for i, seg in enumerate(segs[:-1]):
        cur = _descend(cur, seg, segs[i + 1], p)
    _put(cur, segs[-1], value, p)
    return document


def dump_document(document: Any, indent: Optional[int] = None) -> str:
    if indent:
        return json.dumps(document, ensure_ascii=False, indent=indent)
    return json.dumps(document, ensure_ascii=False, separators=(",", ":"))
