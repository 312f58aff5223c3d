from __future__ import annotations
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RuleConfig(BaseModel):
    # Schema for one mapping rule as written in the YAML config
    model_config = ConfigDict(extra="forbid")

    source_path: str
    target_path: str
    type: str = Field(default="")
    default_value: Any = None
    time_format: str = Field(default="")
    target_time_format: str = Field(default="")
    timezone: str = Field(default="")
    enum_map: Dict[str, Any] = Field(default_factory=dict)
    enum_ignore_case: bool = False
    enum_default: Any = None

    @field_validator("type", "time_format", "target_time_format", "timezone", mode="before")
    @classmethod
    def _null_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("enum_map", mode="before")
    @classmethod
    def _stringify_enum_keys(cls, v):
        # YAML turns keys like 1 or true into non-strings
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(k): val for k, val in v.items()}
        return v


class MappingConfig(BaseModel):
    # Schema for the whole rule configuration document
    model_config = ConfigDict(extra="forbid")

    version: str = Field(default="1")
    mappings: List[RuleConfig] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def _version_text(cls, v):
        return "1" if v is None else str(v)
