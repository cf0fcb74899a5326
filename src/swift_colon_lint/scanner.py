"""Candidate scanning: regex matches correlated with syntax tokens."""

from __future__ import annotations
import re
from typing import Iterator

from .source import SourceText
from .tokens import SyntaxTokenSource
from .types import MatchCandidate


def iter_candidates(
    source: SourceText,
    pattern: re.Pattern,
    token_source: SyntaxTokenSource,
) -> Iterator[MatchCandidate]:
    """Yield one candidate per non-overlapping match, in source order.

    Every match is yielded, whatever its token count; the classifier
    decides what to do with the ones that don't pair up two tokens.
    """
    for m in pattern.finditer(source.contents):
        byte_range = source.char_range_to_byte_range(m.start(), m.end())
        tokens = tuple(token_source.tokens_intersecting(byte_range))
        yield MatchCandidate(byte_range=byte_range, tokens=tokens)
