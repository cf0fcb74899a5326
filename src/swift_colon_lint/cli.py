"""CLI interface for swift-colon-lint.

Usage:
    # Lint files or directories (recursing into *.swift)
    swift-colon-lint lint Sources/ --format json

    # Lint with a SourceKitten token dump instead of the built-in lexer
    sourcekitten syntax --file Foo.swift > Foo.json
    swift-colon-lint lint Foo.swift --tokens Foo.json

    # Lint stdin (JSON output)
    echo 'let x:Int = 1' | swift-colon-lint lint-text

    # Show every candidate and why it was accepted or rejected
    swift-colon-lint explain Foo.swift

    # Dump the built-in lexer's tokens in SourceKitten's format
    swift-colon-lint tokens Foo.swift

Exit status: 0 clean or warnings only, 1 usage/config/input error,
2 if any violation has error severity.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterator

from .config import ConfigurationError, load_from_yaml
from .lexer import SwiftLexer
from .rule import RULE_NAME, ColonRule, ColonRuleConfig
from .source import SourceText
from .tokens import TokenList
from .types import Severity, StyleViolation

logger = logging.getLogger(__name__)


class CliError(Exception):
    """Reported on stderr with exit status 1."""


def _build_rule(args: argparse.Namespace) -> ColonRule:
    config = ColonRuleConfig()
    if args.config:
        try:
            config = load_from_yaml(args.config)
        except OSError as e:
            raise CliError(f"cannot read config {args.config}: {e}") from e
    if args.strict_right_spacing:
        config.strict_right_spacing = True
    if args.ignore_dictionaries:
        config.apply_to_dictionaries = False
    if args.severity:
        config.severity = Severity(args.severity)
    return ColonRule(config)


def _iter_swift_files(paths: list[str]) -> Iterator[Path]:
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            yield from sorted(path.rglob("*.swift"))
        else:
            yield path


def _load_source(path: Path) -> SourceText:
    try:
        return SourceText.from_path(path)
    except (OSError, UnicodeDecodeError) as e:
        raise CliError(f"cannot read {path}: {e}") from e


def _load_tokens(path: str) -> TokenList:
    try:
        return TokenList.from_json_file(path)
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise CliError(f"cannot load tokens from {path}: {e}") from e


def _format_text(v: StyleViolation) -> str:
    return (
        f"{v.path or '<stdin>'}:{v.line}:{v.column}: {v.severity.value}: "
        f"{RULE_NAME} Violation: {v.reason} ({v.rule_id})"
    )


def _exit_status(violations: list[StyleViolation]) -> int:
    return 2 if any(v.severity is Severity.ERROR for v in violations) else 0


def cmd_lint(args: argparse.Namespace) -> int:
    """Lint Swift files and directories."""
    rule = _build_rule(args)
    files = list(_iter_swift_files(args.paths))
    if args.tokens and len(files) != 1:
        raise CliError("--tokens needs exactly one input file")
    token_source = _load_tokens(args.tokens) if args.tokens else None

    violations: list[StyleViolation] = []
    for path in files:
        try:
            source = _load_source(path)
        except CliError as e:
            # Keep going over the rest of a directory tree
            if len(files) == 1:
                raise
            logger.warning("skipping %s", e)
            continue
        violations.extend(rule.validate(source, token_source))

    if args.format == "json":
        json.dump([v.to_dict() for v in violations], sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    else:
        for v in violations:
            sys.stdout.write(_format_text(v) + "\n")
    return _exit_status(violations)


def cmd_lint_text(args: argparse.Namespace) -> int:
    """Lint Swift source from stdin."""
    rule = _build_rule(args)
    violations = rule.validate(SourceText(sys.stdin.read()))
    json.dump([v.to_dict() for v in violations], sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")
    return _exit_status(violations)


def cmd_explain(args: argparse.Namespace) -> int:
    """Print every candidate with its outcome."""
    rule = _build_rule(args)
    source = _load_source(Path(args.path))
    token_source = _load_tokens(args.tokens) if args.tokens else None
    for result in rule.evaluate(source, token_source):
        rng = result.candidate.byte_range
        snippet = source.substring_with_byte_range(rng.location, rng.length) or ""
        line, column = source.location(source.char_index(rng.location) or 0)
        kinds = ",".join(k.value for k in result.candidate.kinds) or "-"
        sys.stdout.write(f"{line}:{column}\t{result.outcome.value}\t{kinds}\t{snippet!r}\n")
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    """Dump the built-in lexer's tokens as SourceKitten JSON."""
    source = _load_source(Path(args.path))
    json.dump(SwiftLexer(source).tokens.to_sourcekitten(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def cmd_pattern(args: argparse.Namespace) -> int:
    """Print the active search pattern."""
    sys.stdout.write(_build_rule(args).pattern_text + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="swift-colon-lint",
        description="Colon spacing checks for Swift type annotations",
    )
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--strict-right-spacing", action="store_true",
                        help="Only flag a missing space after the colon")
    parser.add_argument("--ignore-dictionaries", action="store_true",
                        help="Exempt [Key: Value] dictionary types")
    parser.add_argument("--severity", choices=[s.value for s in Severity],
                        help="Override the configured severity")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    p = sub.add_parser("lint", help="Lint files or directories")
    p.add_argument("paths", nargs="+")
    p.add_argument("--format", choices=["text", "json"], default="text")
    p.add_argument("--tokens", help="SourceKitten syntax JSON for the single input file")
    sub.add_parser("lint-text", help="Lint Swift source (stdin)")
    p = sub.add_parser("explain", help="Show every candidate and its outcome")
    p.add_argument("path")
    p.add_argument("--tokens", help="SourceKitten syntax JSON for the file")
    p = sub.add_parser("tokens", help="Dump lexer tokens as SourceKitten JSON")
    p.add_argument("path")
    sub.add_parser("pattern", help="Print the search pattern")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "lint": cmd_lint,
        "lint-text": cmd_lint_text,
        "explain": cmd_explain,
        "tokens": cmd_tokens,
        "pattern": cmd_pattern,
    }
    try:
        return cmds[args.command](args)
    except (CliError, ConfigurationError) as e:
        sys.stderr.write(f"swift-colon-lint: {e}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
