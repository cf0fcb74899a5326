"""Core types."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

SOURCEKIT_PREFIX = "source.lang.swift.syntaxtype."


class SyntaxKind(Enum):
    """Token kinds, named after SourceKit's syntax types."""
    IDENTIFIER = "identifier"
    TYPE_IDENTIFIER = "typeidentifier"
    KEYWORD = "keyword"
    COMMENT = "comment"
    COMMENT_MARK = "comment.mark"
    COMMENT_URL = "comment.url"
    DOC_COMMENT = "doccomment"
    DOC_COMMENT_FIELD = "doccomment.field"
    STRING = "string"
    STRING_INTERPOLATION_ANCHOR = "string_interpolation_anchor"
    NUMBER = "number"
    ATTRIBUTE_BUILTIN = "attribute.builtin"
    ATTRIBUTE_ID = "attribute.id"
    BUILDCONFIG_KEYWORD = "buildconfig.keyword"
    BUILDCONFIG_ID = "buildconfig.id"
    POUND_DIRECTIVE_KEYWORD = "pounddirective.keyword"
    OBJECT_LITERAL = "objectliteral"
    PLACEHOLDER = "placeholder"
    OTHER = "other"

    @classmethod
    def from_sourcekit(cls, name: str) -> "SyntaxKind":
        """Map a SourceKit type name (prefixed or not) to a kind, OTHER if unknown."""
        if name.startswith(SOURCEKIT_PREFIX):
            name = name[len(SOURCEKIT_PREFIX):]
        try:
            return cls(name)
        except ValueError:
            return cls.OTHER

    @property
    def sourcekit_name(self) -> str:
        return SOURCEKIT_PREFIX + self.value


COMMENT_AND_STRING_KINDS = frozenset({
    SyntaxKind.COMMENT,
    SyntaxKind.COMMENT_MARK,
    SyntaxKind.COMMENT_URL,
    SyntaxKind.DOC_COMMENT,
    SyntaxKind.DOC_COMMENT_FIELD,
    SyntaxKind.STRING,
})


class Severity(Enum):
    WARNING = "warning"
    ERROR = "error"


class Outcome(Enum):
    """Why a candidate was accepted or rejected."""
    ACCEPTED = "accepted"
    REJECTED_TOKEN_COUNT = "rejected_token_count"
    REJECTED_DICTIONARY = "rejected_dictionary"
    REJECTED_KIND = "rejected_kind"
    REJECTED_COMMENT_OR_STRING = "rejected_comment_or_string"


@dataclass(frozen=True, slots=True)
class ByteRange:
    """Half-open range [location, location + length) of UTF-8 bytes."""
    location: int
    length: int

    @property
    def end(self) -> int:
        return self.location + self.length


@dataclass(frozen=True, slots=True)
class ReportRange:
    """Half-open range of characters in the decoded text."""
    location: int
    length: int

    @property
    def end(self) -> int:
        return self.location + self.length

    def union(self, other: ReportRange) -> ReportRange:
        start = min(self.location, other.location)
        return ReportRange(start, max(self.end, other.end) - start)


@dataclass(frozen=True, slots=True)
class SyntaxToken:
    """A single token reported by a token source."""
    offset: int            # bytes
    length: int            # bytes
    kind: SyntaxKind


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    """A regex match paired with the tokens intersecting it."""
    byte_range: ByteRange
    tokens: tuple[SyntaxToken, ...]

    @property
    def kinds(self) -> tuple[SyntaxKind, ...]:
        return tuple(t.kind for t in self.tokens)


@dataclass(frozen=True, slots=True)
class CandidateResult:
    """Classification result for one candidate."""
    candidate: MatchCandidate
    outcome: Outcome
    violation_range: ReportRange | None = None   # set only when accepted

    @property
    def accepted(self) -> bool:
        return self.outcome is Outcome.ACCEPTED


@dataclass(frozen=True, slots=True)
class StyleViolation:
    """A reportable violation with its location."""
    rule_id: str
    severity: Severity
    reason: str
    path: str | None
    line: int               # 1-based
    column: int             # 1-based
    range: ReportRange

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "reason": self.reason,
            "file": self.path,
            "line": self.line,
            "character": self.column,
            "location": self.range.location,
            "length": self.range.length,
        }
