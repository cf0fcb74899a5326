"""Candidate classification: decide whether a match is a real violation.

A match is only a colon-annotation of interest when it spans exactly two
tokens whose kinds look like `name: Type`.  Everything else (ternaries,
case labels, comments, strings, exempted dictionary types) is rejected.
"""

from __future__ import annotations
import unicodedata

from .source import SourceText
from .types import (
    COMMENT_AND_STRING_KINDS,
    MatchCandidate,
    Outcome,
    SyntaxKind,
    SyntaxToken,
)

_UPPERCASE_CATEGORIES = ("Lu", "Lt")

_IDENTIFIER = SyntaxKind.IDENTIFIER
_TYPE_IDENTIFIER = SyntaxKind.TYPE_IDENTIFIER
_KEYWORD = SyntaxKind.KEYWORD


def is_uppercase_letter(ch: str) -> bool:
    return unicodedata.category(ch) in _UPPERCASE_CATEGORIES


def is_type_like(token: SyntaxToken, source: SourceText) -> bool:
    """True if the token's text starts with an uppercase letter."""
    text = source.substring_with_byte_range(token.offset, token.length)
    if not text:
        return False
    return is_uppercase_letter(text[0])


def _both_type_identifiers(left: SyntaxToken, right: SyntaxToken, source: SourceText) -> bool:
    pair = (left.kind, right.kind)
    if pair == (_TYPE_IDENTIFIER, _TYPE_IDENTIFIER):
        return True
    if pair == (_TYPE_IDENTIFIER, _KEYWORD):
        return is_type_like(right, source)
    return False


def is_dictionary_type(left: SyntaxToken, right: SyntaxToken, source: SourceText) -> bool:
    """True for the `Key: Value` pair of a `[Key: Value]` type."""
    if not _both_type_identifiers(left, right, source):
        return False
    opening = source.first_non_whitespace_before(left.offset)
    closing = source.first_non_whitespace_after(right.offset + right.length)
    return opening == "[" and closing == "]"


def has_valid_kinds(left: SyntaxToken, right: SyntaxToken, source: SourceText) -> bool:
    pair = (left.kind, right.kind)
    if pair in ((_IDENTIFIER, _TYPE_IDENTIFIER), (_TYPE_IDENTIFIER, _TYPE_IDENTIFIER)):
        return True
    if pair in ((_IDENTIFIER, _KEYWORD), (_TYPE_IDENTIFIER, _KEYWORD)):
        return is_type_like(right, source)
    if pair == (_KEYWORD, _TYPE_IDENTIFIER):
        return is_type_like(left, source)
    return False


def classify(
    candidate: MatchCandidate,
    source: SourceText,
    *,
    apply_to_dictionaries: bool = True,
) -> Outcome:
    if len(candidate.tokens) != 2:
        return Outcome.REJECTED_TOKEN_COUNT

    left, right = candidate.tokens

    if not apply_to_dictionaries and is_dictionary_type(left, right, source):
        return Outcome.REJECTED_DICTIONARY

    valid = has_valid_kinds(left, right, source)

    # Comment and string kinds fail the kind table too; report them by name.
    if left.kind in COMMENT_AND_STRING_KINDS or right.kind in COMMENT_AND_STRING_KINDS:
        return Outcome.REJECTED_COMMENT_OR_STRING

    if not valid:
        return Outcome.REJECTED_KIND

    return Outcome.ACCEPTED
