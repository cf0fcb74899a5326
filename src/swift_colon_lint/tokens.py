"""Token sources: where syntax tokens come from.

The rule never tokenizes on its own; it asks a SyntaxTokenSource for the
tokens intersecting each match.  TokenList is the in-memory implementation,
fed either by the built-in lexer or by a `sourcekitten syntax` JSON dump:

    sourcekitten syntax --file Foo.swift > Foo.tokens.json
"""

from __future__ import annotations
import json
from bisect import bisect_left, bisect_right
from pathlib import Path
from typing import Any, Iterable, Iterator, Protocol, Sequence

from .types import ByteRange, SyntaxKind, SyntaxToken


class SyntaxTokenSource(Protocol):
    """Anything that can answer token queries by byte range."""

    def tokens_intersecting(self, byte_range: ByteRange) -> Sequence[SyntaxToken]:
        """Tokens overlapping byte_range by at least one byte, in source order."""
        ...


class TokenList:
    """Sorted, non-overlapping tokens with bisection lookups."""

    def __init__(self, tokens: Iterable[SyntaxToken]) -> None:
        self._tokens = sorted((t for t in tokens if t.length > 0), key=lambda t: t.offset)
        self._starts = [t.offset for t in self._tokens]
        self._ends = [t.offset + t.length for t in self._tokens]

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[SyntaxToken]:
        return iter(self._tokens)

    def tokens_intersecting(self, byte_range: ByteRange) -> list[SyntaxToken]:
        if byte_range.length <= 0:
            return []
        lo = bisect_right(self._ends, byte_range.location)
        hi = bisect_left(self._starts, byte_range.end)
        return self._tokens[lo:hi]

    @classmethod
    def from_sourcekitten(cls, data: list[dict[str, Any]]) -> TokenList:
        """Build from the JSON array printed by `sourcekitten syntax`."""
        return cls(
            SyntaxToken(
                offset=int(item["offset"]),
                length=int(item["length"]),
                kind=SyntaxKind.from_sourcekit(item["type"]),
            )
            for item in data
        )

    @classmethod
    def from_json_file(cls, path: str | Path) -> TokenList:
        with open(path, encoding="utf-8") as f:
            return cls.from_sourcekitten(json.load(f))

    def to_sourcekitten(self) -> list[dict[str, Any]]:
        return [
            {"offset": t.offset, "length": t.length, "type": t.kind.sourcekit_name}
            for t in self._tokens
        ]
