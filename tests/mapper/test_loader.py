import logging

import pytest
import yaml

from jsonmap.mapper.errors import ConfigError
from jsonmap.mapper.loader import build_spec, load_spec, load_spec_text
from jsonmap.mapper.types import MappingSpec

CONFIG = '''
version: 2
mappings:
  - source_path: users.#.name
    target_path: people.#.fullName
    type: string
  - source_path: users.#.id
    target_path: people.#.id
    type: integer
  - source_path: status
    target_path: state
    type: string
    enum_map: { 1: one, Active: A }
    enum_ignore_case: true
    enum_default: U
  - source_path: created_at
    target_path: created
    type: time
    target_time_format: unix
    timezone: null
    default_value: 0
'''


def test_load_spec_text_builds_rules_in_order():
    spec = load_spec_text(CONFIG)
    assert isinstance(spec, MappingSpec)
    assert spec.version == "2"
    assert len(spec) == 4
    assert [r.source_path for r in spec] == ["users.#.name", "users.#.id", "status", "created_at"]


def test_rule_fields_are_normalized():
    spec = load_spec_text(CONFIG)
    first, second, third, fourth = spec.mappings
    assert first.is_collection
    assert second.type == "int"
    assert third.enum_map == {"1": "one", "Active": "A"}
    assert third.enum_ignore_case is True
    assert third.enum_default == "U"
    assert fourth.timezone == ""
    assert fourth.has_default and fourth.default_value == 0


def test_bare_list_is_accepted():
    spec = build_spec([{"source_path": "a", "target_path": "b"}])
    assert spec.version == "1"
    assert spec.mappings[0].type == ""


def test_empty_document_gives_empty_spec():
    assert len(load_spec_text("")) == 0


def test_load_spec_from_file(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(CONFIG, encoding="utf-8")
    assert len(load_spec(path)) == 4


@pytest.mark.parametrize(
    "doc, match",
    [
        ({"mappings": [{"source_path": "a"}]}, "target_path"),
        ({"mappings": [{"source_path": "a", "target_path": "b", "typo": 1}]}, "typo"),
        ({"mappings": [{"source_path": "a", "target_path": "b", "enum_ignore_case": "maybe"}]}, "enum_ignore_case"),
        ({"mappings": [{"source_path": "a..b", "target_path": "b"}]}, r"mappings\[0\]"),
        ({"mappings": [{"source_path": "a.#.b", "target_path": "c.d"}]}, r"mappings\[0\]"),
        ({"unknown": []}, "unknown"),
        ("just text", "config must be"),
    ],
)
def test_invalid_configs(doc, match):
    with pytest.raises(ConfigError, match=match):
        build_spec(doc)


def test_invalid_yaml():
    with pytest.raises(ConfigError, match="cannot parse"):
        load_spec_text("mappings: [unclosed")


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="cannot read"):
        load_spec(tmp_path / "nope.yml")


def test_build_spec_from_parsed_yaml():
    doc = yaml.safe_load(CONFIG)
    assert len(build_spec(doc)) == len(doc["mappings"])


def test_unknown_type_warns_but_loads(caplog):
    with caplog.at_level(logging.WARNING, logger="jsonmap"):
        spec = build_spec([
            {"source_path": "a", "target_path": "b", "type": "decimal"},
            {"source_path": "c", "target_path": "d", "type": "Integer"},
            {"source_path": "e", "target_path": "f"},
        ])
    assert [r.type for r in spec] == ["decimal", "int", ""]
    assert "'decimal'" in caplog.text
    assert "Integer" not in caplog.text
    assert len(caplog.records) == 1
