"""
Exception hierarchy for the mapping engine.

Hard failures are raised and abort a transformation. Soft failures
(a single collection element failing to convert) are logged by the
expander and never leave the engine.
"""

from __future__ import annotations

from typing import Optional


class MappingError(ValueError):
    """Base class for every error raised by jsonmap."""


class PathSyntaxError(MappingError):
    """A path expression or its wildcard layout is malformed."""


class CollectionPathError(MappingError):
    """The collection part of a wildcard path does not address an array."""


class ConversionError(MappingError):
    """A resolved value cannot be converted to the rule's target type."""


class EnumMappingError(ConversionError):
    """No enum_map entry matched and no enum_default is set."""


class TimeParseError(ConversionError):
    """A time value matched none of the candidate layouts."""


class TimezoneError(ConversionError):
    """The rule names a timezone the zone database does not know."""


class DocumentWriteError(MappingError):
    """A value cannot be written into the target document."""


class SourceDocumentError(MappingError):
    """The source text is not a JSON document."""


class ConfigError(MappingError):
    """The rule configuration cannot be loaded or is invalid."""


class TransformError(MappingError):
    """
    First hard failure of a transformation, with the failing rule's paths.

    The underlying error is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        source_path: Optional[str] = None,
        target_path: Optional[str] = None,
    ):
        super().__init__(message)
        self.source_path = source_path
        self.target_path = target_path
