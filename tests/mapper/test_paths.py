import pytest

from jsonmap.mapper.errors import CollectionPathError, PathSyntaxError
from jsonmap.mapper.paths import (
    INDEX,
    KEY,
    WILD,
    exists,
    iter_elements,
    parse_path,
    resolve,
    resolve_collection,
)

DOC = {
    "users": [
        {"name": "John", "tags": ["a", "b"], "nick": None},
        {"name": "Jane"},
    ],
    "meta": {"0": "zero-key", "a.b": 1},
}


def test_parse_segment_kinds():
    p = parse_path("users.#.tags.0")
    assert [s.kind for s in p.segments] == [KEY, WILD, KEY, INDEX]
    assert p.wildcard_count == 1
    assert str(p) == "users.#.tags.0"


def test_parse_escaped_dot():
    p = parse_path("meta.a\\.b")
    assert [s.token for s in p.segments] == ["meta", "a.b"]
    assert resolve(DOC, p) == (1, True)


@pytest.mark.parametrize("bad", ["", "   ", "a..b", ".a", "a."])
def test_parse_rejects_empty_segments(bad):
    with pytest.raises(PathSyntaxError):
        parse_path(bad)


def test_resolve_nested_and_index():
    assert resolve(DOC, "users.0.name") == ("John", True)
    assert resolve(DOC, "users.1.name") == ("Jane", True)
    assert resolve(DOC, "users.0.tags.1") == ("b", True)


def test_digit_segment_is_a_key_on_objects():
    assert resolve(DOC, "meta.0") == ("zero-key", True)


def test_missing_and_null_do_not_exist():
    assert resolve(DOC, "users.5.name") == (None, False)
    assert resolve(DOC, "users.0.email") == (None, False)
    assert resolve(DOC, "users.0.nick") == (None, False)
    assert resolve(DOC, "users.0.name.first") == (None, False)
    assert not exists(DOC, "nope")
    assert exists(DOC, "users.1")


def test_resolve_refuses_wildcards():
    with pytest.raises(PathSyntaxError):
        resolve(DOC, "users.#.name")


def test_split_and_index_wildcard():
    p = parse_path("users.#.tags.0")
    prefix, suffix = p.split_wildcard()
    assert str(prefix) == "users"
    assert [s.token for s in suffix] == ["tags", "0"]
    assert str(p.with_index(3)) == "users.3.tags.0"


def test_split_wildcard_needs_a_collection():
    with pytest.raises(PathSyntaxError):
        parse_path("#.name").split_wildcard()
    with pytest.raises(PathSyntaxError):
        parse_path("a.#.b.#").split_wildcard()


def test_collection_helpers():
    assert len(resolve_collection(DOC, "users")) == 2
    assert [i for i, _ in iter_elements(DOC, "users.0.tags")] == [0, 1]
    with pytest.raises(CollectionPathError, match="meta"):
        resolve_collection(DOC, "meta")
    with pytest.raises(CollectionPathError):
        resolve_collection(DOC, "missing")
