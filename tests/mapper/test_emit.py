import pytest

from jsonmap.mapper.emit import dump_document, is_raw_fragment, set_value
from jsonmap.mapper.errors import DocumentWriteError


def test_creates_intermediate_objects():
    assert set_value({}, "a.b.c", 1) == {"a": {"b": {"c": 1}}}


def test_digit_segments_create_padded_arrays():
    doc = set_value({}, "people.1.name", "x")
    assert doc == {"people": [None, {"name": "x"}]}
    set_value(doc, "people.0.name", "y")
    assert doc == {"people": [{"name": "y"}, {"name": "x"}]}


def test_digit_segment_on_existing_object_is_a_key():
    assert set_value({"m": {}}, "m.0", "v") == {"m": {"0": "v"}}


def test_overwrites_leaf_and_null_nodes():
    doc = {"a": None, "b": 1}
    set_value(doc, "a.x", 2)
    set_value(doc, "b", 3)
    assert doc == {"a": {"x": 2}, "b": 3}


@pytest.mark.parametrize(
    "value, expected",
    [
        ("[1,2,3]", [1, 2, 3]),
        ('{"k": "v"}', {"k": "v"}),
        ("{}", {}),
        ("plain", "plain"),
        ("[not closed", "[not closed"),
        (5, 5),
    ],
)
def test_raw_fragments_are_written_as_structure(value, expected):
    assert set_value({}, "out", value) == {"out": expected}


def test_is_raw_fragment():
    assert is_raw_fragment("[]")
    assert is_raw_fragment("{x}")
    assert not is_raw_fragment("{")
    assert not is_raw_fragment(["a"])


@pytest.mark.parametrize("text", ["[draft]", "{not json}", "[1, 2]]"])
def test_bracketed_text_that_is_not_json_stays_a_string(text):
    assert set_value({}, "out", text) == {"out": text}


def test_values_are_copied_into_the_document():
    default = {"k": [1]}
    doc = set_value({}, "d", default)
    doc["d"]["k"].append(2)
    assert default == {"k": [1]}


def test_conflicting_structure_fails():
    with pytest.raises(DocumentWriteError, match="a.b"):
        set_value({"a": 1}, "a.b", 2)
    with pytest.raises(DocumentWriteError):
        set_value({"a": [1]}, "a.name", 2)


def test_wildcard_paths_cannot_be_written():
    with pytest.raises(DocumentWriteError):
        set_value({}, "people.#.name", "x")


def test_dump_is_compact_and_ordered():
    doc = {"b": 1, "a": {"c": "é"}}
    assert dump_document(doc) == '{"b":1,"a":{"c":"é"}}'
    assert dump_document(doc, indent=2).startswith('{\n  "b": 1')
