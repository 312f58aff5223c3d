from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, List, Tuple

from .errors import PathSyntaxError
from .paths import ParsedPath, Segment, resolve_collection
from .types import MappingRule

logger = logging.getLogger(__name__)


def split_rule(rule: MappingRule) -> Tuple[ParsedPath, Tuple[Segment, ...]]:
    """Return (collection path, element suffix) for a collection rule."""
    if rule.source.wildcard_count != 1 or rule.target.wildcard_count != 1:
        raise PathSyntaxError(
            "collection mapping needs exactly one '#' in both paths: "
            f"{rule.source_path} -> {rule.target_path}"
        )
    return rule.source.split_wildcard()


def expand_rule(rule: MappingRule, source: Any) -> List[MappingRule]:
    """
    Rewrite a wildcard rule into one concrete rule per source array element.

    users.#.name -> people.#.fullName over a 2-element users array gives:
      users.0.name -> people.0.fullName
      users.1.name -> people.1.fullName

    The returned rules are copies; ``rule`` itself is left untouched.
    """
    collection_path, _ = split_rule(rule)
    collection = resolve_collection(source, collection_path)
    logger.debug("expanding %s over %d element(s)", rule.source_path, len(collection))
    return [
        replace(
            rule,
            source_path=str(rule.source.with_index(i)),
            target_path=str(rule.target.with_index(i)),
        )
        for i in range(len(collection))
    ]
