from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import ValidationError

from jsonmap.schemas.models import MappingConfig, RuleConfig

from .errors import ConfigError, MappingError
from .expand import split_rule
from .types import KNOWN_TYPES, MappingRule, MappingSpec

logger = logging.getLogger(__name__)


def build_rule(cfg: RuleConfig) -> MappingRule:
    rule = MappingRule(
        source_path=cfg.source_path,
        target_path=cfg.target_path,
        type=cfg.type,
        default_value=cfg.default_value,
        time_format=cfg.time_format,
        target_time_format=cfg.target_time_format,
        timezone=cfg.timezone,
        enum_map=cfg.enum_map,
        enum_ignore_case=cfg.enum_ignore_case,
        enum_default=cfg.enum_default,
    )
    if rule.type and rule.type not in KNOWN_TYPES:
        logger.warning(
            "unknown type %r for %s, value is passed through unconverted",
            cfg.type, rule.source_path,
        )
    if rule.source.has_wildcard or rule.target.has_wildcard:
        split_rule(rule)
    return rule


def build_spec(doc: Union[Dict[str, Any], List[Any], None]) -> MappingSpec:
    """
    Build a MappingSpec from a parsed config document.

    Accepts either {"version": ..., "mappings": [...]} or a bare list of rules.
    """
    if doc is None:
        doc = {}
    if isinstance(doc, list):
        doc = {"mappings": doc}
    if not isinstance(doc, dict):
        raise ConfigError(f"config must be a mapping or a list, got {type(doc).__name__}")
    try:
        cfg = MappingConfig.model_validate(doc)
    except ValidationError as e:
        raise ConfigError(f"invalid mapping config: {e}") from e

    rules: List[MappingRule] = []
    for i, rc in enumerate(cfg.mappings):
        try:
            rules.append(build_rule(rc))
        except MappingError as e:
            raise ConfigError(f"mappings[{i}]: {e}") from e
    return MappingSpec(version=cfg.version, mappings=rules)


def load_spec_text(text: str) -> MappingSpec:
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot parse mapping config: {e}") from e
    return build_spec(doc)


def load_spec(path: Union[str, Path]) -> MappingSpec:
    path = Path(path).expanduser()
    if not path.is_file():
        raise ConfigError(f"cannot read mapping config: {path}")
    return load_spec_text(path.read_text(encoding="utf-8"))
