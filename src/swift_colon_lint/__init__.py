"""swift-colon-lint: colon spacing checks for Swift type annotations."""

from .rule import ColonRule, ColonRuleConfig, find_violations
from .source import SourceText
from .tokens import SyntaxTokenSource, TokenList
from .lexer import SwiftLexer
from .config import ConfigurationError, load_config, load_from_yaml
from .types import (
    ByteRange, CandidateResult, MatchCandidate, Outcome, ReportRange,
    Severity, StyleViolation, SyntaxKind, SyntaxToken,
)

__all__ = [
    "ColonRule", "ColonRuleConfig", "find_violations",
    "SourceText",
    "SyntaxTokenSource", "TokenList", "SwiftLexer",
    "ConfigurationError", "load_config", "load_from_yaml",
    "ByteRange", "CandidateResult", "MatchCandidate", "Outcome", "ReportRange",
    "Severity", "StyleViolation", "SyntaxKind", "SyntaxToken",
]
__version__ = "0.1.0"
