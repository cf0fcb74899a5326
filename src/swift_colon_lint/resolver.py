"""Violation range resolution."""

from __future__ import annotations

from .source import SourceText
from .types import MatchCandidate, ReportRange


def resolve_violation_range(candidate: MatchCandidate, source: SourceText) -> ReportRange | None:
    """Widen the match so the report starts at the left token's first character.

    The match begins at the last character of the identifier; the anchor
    moves the start back to the token boundary.  None if either range can't
    be translated.
    """
    anchor = source.byte_range_to_report_range(candidate.tokens[0].offset, 0)
    match_range = source.byte_range_to_report_range(
        candidate.byte_range.location, candidate.byte_range.length
    )
    if anchor is None or match_range is None:
        return None
    return anchor.union(match_range)
