from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Tuple, Union

from .errors import CollectionPathError, PathSyntaxError

WILDCARD = "#"
KEY, INDEX, WILD = "key", "index", "wildcard"


@dataclass(frozen=True)
class Segment:
    token: str
    kind: str = KEY             # key|index|wildcard

    @property
    def index(self) -> int:
        return int(self.token)

    def render(self) -> str:
        return self.token.replace(".", "\\.")


@dataclass(frozen=True)
class ParsedPath:
    """
    A dotted path parsed once into segments.

    Digit-only segments are array indexes when they meet an array and plain
    keys when they meet an object; ``#`` marks "every element" of an array.
    """

    text: str
    segments: Tuple[Segment, ...]

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def wildcard_count(self) -> int:
        return sum(1 for s in self.segments if s.kind == WILD)

    @property
    def has_wildcard(self) -> bool:
        return self.wildcard_count > 0

    def split_wildcard(self) -> Tuple["ParsedPath", Tuple[Segment, ...]]:
        """Return (collection prefix, element suffix) around the single wildcard."""
        if self.wildcard_count != 1:
            raise PathSyntaxError(
                f"collection path must contain exactly one '{WILDCARD}' segment: {self.text}"
            )
        pos = next(i for i, s in enumerate(self.segments) if s.kind == WILD)
        if pos == 0:
            raise PathSyntaxError(f"collection path has no collection before '{WILDCARD}': {self.text}")
        return from_segments(self.segments[:pos]), self.segments[pos + 1:]

    def with_index(self, index: int) -> "ParsedPath":
        """Replace the wildcard segment with a concrete array index."""
        segs = tuple(
            Segment(str(index), INDEX) if s.kind == WILD else s
            for s in self.segments
        )
        return from_segments(segs)


def from_segments(segments) -> ParsedPath:
    segments = tuple(segments)
    return ParsedPath(".".join(s.render() for s in segments), segments)


def _tokenize(text: str) -> List[str]:
    tokens: List[str] = []
    cur = ""
    i = 0
    while i < len(text):
        c = text[i]
        if c == "\\" and i + 1 < len(text):
            cur += text[i + 1]
            i += 2
            continue
        if c == ".":
            tokens.append(cur)
            cur = ""
        else:
            cur += c
        i += 1
    tokens.append(cur)
    return tokens


def parse_path(text: Union[str, ParsedPath]) -> ParsedPath:
    if isinstance(text, ParsedPath):
        return text
    if not isinstance(text, str) or not text.strip():
        raise PathSyntaxError(f"path must be a non-empty string, got {text!r}")
    segments = []
    for tok in _tokenize(text.strip()):
        if tok == "":
            raise PathSyntaxError(f"empty segment in path: {text}")
        if tok == WILDCARD:
            segments.append(Segment(tok, WILD))
        elif tok.isdigit():
            segments.append(Segment(tok, INDEX))
        else:
            segments.append(Segment(tok, KEY))
    return ParsedPath(text.strip(), tuple(segments))


def _step(cur: Any, seg: Segment) -> Tuple[Any, bool]:
    if isinstance(cur, dict):
        if seg.token in cur:
            return cur[seg.token], True
        return None, False
    if isinstance(cur, list) and seg.kind == INDEX:
        idx = seg.index
        if 0 <= idx < len(cur):
            return cur[idx], True
    return None, False


def resolve(document: Any, path) -> Tuple[Any, bool]:
    """
    Look up a concrete path. Returns (value, exists).

    exists is False both for a missing segment and for a JSON null.
    """
    p = parse_path(path)
    cur = document
    for seg in p.segments:
        if seg.kind == WILD:
            raise PathSyntaxError(f"cannot resolve unexpanded wildcard path: {p}")
        cur, found = _step(cur, seg)
        if not found:
            return None, False
    return cur, cur is not None


def exists(document: Any, path) -> bool:
    return resolve(document, path)[1]


def resolve_collection(document: Any, path) -> List[Any]:
    value, _ = resolve(document, path)
    if not isinstance(value, list):
        raise CollectionPathError(f"collection path is not an array: {path}")
    return value


def iter_elements(document: Any, path) -> Iterator[Tuple[int, Any]]:
    yield from enumerate(resolve_collection(document, path))
