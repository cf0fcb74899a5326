"""ColonRule: the main API.  Staged: regex candidates first, then tokens.

Usage:
    from swift_colon_lint import ColonRule, ColonRuleConfig

    rule = ColonRule(ColonRuleConfig(apply_to_dictionaries=False))
    for violation in rule.validate(SourceText.from_path("Foo.swift")):
        print(violation.line, violation.column, violation.reason)

The rule holds no per-file state: every call rescans, so one instance can
be shared across threads and files.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterator

from .classifier import classify
from .lexer import SwiftLexer
from .patterns import build_pattern, compile_pattern
from .resolver import resolve_violation_range
from .scanner import iter_candidates
from .source import SourceText
from .tokens import SyntaxTokenSource
from .types import CandidateResult, Outcome, ReportRange, Severity, StyleViolation

logger = logging.getLogger(__name__)

RULE_ID = "colon"
RULE_NAME = "Colon Spacing"
REASON = (
    "Colons should be next to the identifier when specifying a type "
    "and next to the key in dictionary literals."
)


@dataclass
class ColonRuleConfig:
    """Configuration for the ColonRule."""
    strict_right_spacing: bool = False     # only `name:Type` is flagged on the right
    apply_to_dictionaries: bool = True     # False exempts `[Key: Value]` types
    severity: Severity = Severity.WARNING


def _as_source(text: str | SourceText) -> SourceText:
    return text if isinstance(text, SourceText) else SourceText(text)


class ColonRule:
    """Colon spacing rule for type annotations.

    Stage 1: regex candidates with their intersecting tokens
    Stage 2: classification over token kinds
    Stage 3: range widening for accepted candidates
    """

    def __init__(self, config: ColonRuleConfig | None = None) -> None:
        self.config = config or ColonRuleConfig()
        self.pattern = compile_pattern(self.config.strict_right_spacing)

    @property
    def pattern_text(self) -> str:
        return build_pattern(self.config.strict_right_spacing)

    def evaluate(
        self,
        text: str | SourceText,
        token_source: SyntaxTokenSource | None = None,
    ) -> Iterator[CandidateResult]:
        """Yield a result for every candidate, accepted or not."""
        source = _as_source(text)
        tokens = token_source if token_source is not None else SwiftLexer(source)

        for candidate in iter_candidates(source, self.pattern, tokens):
            outcome = classify(
                candidate, source,
                apply_to_dictionaries=self.config.apply_to_dictionaries,
            )
            if outcome is not Outcome.ACCEPTED:
                logger.debug(
                    "%s: candidate at byte %d rejected (%s)",
                    source.path or "<text>", candidate.byte_range.location, outcome.value,
                )
                yield CandidateResult(candidate, outcome)
                continue

            violation_range = resolve_violation_range(candidate, source)
            if violation_range is None:
                logger.debug(
                    "%s: candidate at byte %d has no reportable range",
                    source.path or "<text>", candidate.byte_range.location,
                )
                continue
            yield CandidateResult(candidate, outcome, violation_range)

    def find_violations(
        self,
        text: str | SourceText,
        token_source: SyntaxTokenSource | None = None,
    ) -> Iterator[ReportRange]:
        for result in self.evaluate(text, token_source):
            if result.accepted:
                yield result.violation_range

    def validate(
        self,
        text: str | SourceText,
        token_source: SyntaxTokenSource | None = None,
    ) -> list[StyleViolation]:
        """Violations with line/column, ready for reporting."""
        source = _as_source(text)
        violations: list[StyleViolation] = []
        for rng in self.find_violations(source, token_source):
            line, column = source.location(rng.location)
            violations.append(StyleViolation(
                rule_id=RULE_ID,
                severity=self.config.severity,
                reason=REASON,
                path=source.path,
                line=line,
                column=column,
                range=rng,
            ))
        return violations


def find_violations(
    text: str | SourceText,
    config: ColonRuleConfig | None = None,
    token_source: SyntaxTokenSource | None = None,
) -> Iterator[ReportRange]:
    """Lazily yield violation ranges; recomputed on every call."""
    return ColonRule(config).find_violations(text, token_source)
