"""
Mapping executor: applies an ordered rule list to a source JSON document.

Rules run strictly in order against a target document that starts as ``{}``.
The first hard failure aborts the run and surfaces as TransformError; a
collection element that fails to convert is logged and skipped.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, Union

from .convert import convert_value
from .emit import dump_document, set_value
from .errors import (
    ConversionError,
    DocumentWriteError,
    MappingError,
    SourceDocumentError,
    TransformError,
)
from .expand import expand_rule
from .paths import resolve
from .types import MappingRule, MappingSpec

logger = logging.getLogger(__name__)

Rules = Union[MappingSpec, Iterable[MappingRule]]


def _apply_plain(source: Any, target: Dict[str, Any], rule: MappingRule) -> None:
    value, present = resolve(source, rule.source)
    if not present:
        if rule.has_default:
            logger.debug("%s absent, writing default to %s", rule.source_path, rule.target_path)
            set_value(target, rule.target, rule.default_value)
        else:
            logger.debug("%s absent, rule skipped", rule.source_path)
        return
    set_value(target, rule.target, convert_value(value, rule))


def _apply_collection(source: Any, target: Dict[str, Any], rule: MappingRule) -> None:
    for element_rule in expand_rule(rule, source):
        try:
            _apply_plain(source, target, element_rule)
        except ConversionError as e:
            logger.warning("skipping element %s: %s", element_rule.source_path, e)


def apply_rule(source: Any, target: Dict[str, Any], rule: MappingRule) -> None:
    """Apply one rule; raises the underlying MappingError on hard failure."""
    if rule.source.has_wildcard or rule.target.has_wildcard:
        _apply_collection(source, target, rule)
    else:
        _apply_plain(source, target, rule)


def _wrap(rule: MappingRule, err: MappingError) -> TransformError:
    if isinstance(err, DocumentWriteError):
        where = f"target path: {rule.target_path}"
    else:
        where = f"source path: {rule.source_path}"
    return TransformError(
        f"mapping failed ({where}): {err}",
        source_path=rule.source_path,
        target_path=rule.target_path,
    )


def transform_document(source: Any, rules: Rules) -> Dict[str, Any]:
    """Build a fresh target document from ``source``. The source is not modified."""
    target: Dict[str, Any] = {}
    for n, rule in enumerate(rules):
        try:
            apply_rule(source, target, rule)
        except MappingError as e:
            logger.debug("rule #%d aborted the transformation: %s", n, e)
            raise _wrap(rule, e) from e
    return target


def transform_json(source_json: str, rules: Rules, *, indent: int = 0) -> str:
    """Transform JSON text into JSON text."""
    try:
        source = json.loads(source_json)
    except (json.JSONDecodeError, TypeError) as e:
        raise SourceDocumentError(f"source is not valid JSON: {e}") from e
    return dump_document(transform_document(source, rules), indent=indent or None)
