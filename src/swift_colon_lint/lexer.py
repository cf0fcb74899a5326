"""Built-in Swift tokenizer producing SourceKit-like syntax tokens.

This is not a parser.  It recognises comments, string literals, numbers,
keywords, attributes, `#` directives and identifiers, and emits nothing for
punctuation or operators, which is what SourceKit's syntax map does too.

SourceKit knows which identifiers sit in type position; this lexer guesses.
A capitalised identifier is a type identifier unless it is a ternary
operand, is called as `Foo(...)`, or has a member read as `Foo.bar`.
Use a `sourcekitten syntax` dump (see tokens.py) when exact kinds matter.

Usage:
    lexer = SwiftLexer(SourceText(text))
    tokens = list(lexer.tokenize())
"""

from __future__ import annotations
import re
from typing import Iterator

from .classifier import is_uppercase_letter
from .source import SourceText
from .tokens import TokenList
from .types import ByteRange, SyntaxKind, SyntaxToken

KEYWORDS = frozenset({
    # declarations
    "associatedtype", "class", "deinit", "enum", "extension", "fileprivate",
    "func", "import", "init", "inout", "internal", "let", "open", "operator",
    "private", "precedencegroup", "protocol", "public", "rethrows", "static",
    "struct", "subscript", "typealias", "var",
    # statements
    "break", "case", "catch", "continue", "default", "defer", "do", "else",
    "fallthrough", "for", "guard", "if", "in", "repeat", "return", "throw",
    "switch", "where", "while",
    # expressions and types
    "as", "await", "false", "is", "nil", "self", "super", "throws", "true",
    "try", "_", "Any", "Self", "Type", "Protocol",
    # declaration modifiers
    "convenience", "dynamic", "final", "indirect", "lazy", "mutating",
    "nonmutating", "override", "required", "unowned", "weak", "some", "any",
    "infix", "prefix", "postfix", "nonisolated",
})

BUILD_CONFIG_KEYWORDS = frozenset({"if", "elseif", "else", "endif"})
POUND_DIRECTIVE_KEYWORDS = frozenset({"warning", "error", "sourceLocation"})

_IDENT = re.compile(r"[^\W\d]\w*")
_DOLLAR_IDENT = re.compile(r"\$\w+")
_RAW_STRING_START = re.compile(r'#+"')
_NUMBER = re.compile(
    r"0x[0-9a-fA-F_]+(?:\.[0-9a-fA-F_]+)?(?:[pP][+-]?\d+)?"
    r"|0o[0-7_]+"
    r"|0b[01_]+"
    r"|\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d[\d_]*)?"
)


def _block_comment_end(text: str, start: int) -> int:
    """Index just past the `*/` closing the (nested) comment opened at start."""
    depth = 0
    i = start
    n = len(text)
    while i < n:
        if text.startswith("/*", i):
            depth += 1
            i += 2
        elif text.startswith("*/", i):
            depth -= 1
            i += 2
            if depth == 0:
                return i
        else:
            i += 1
    return n


def _string_end(text: str, start: int) -> int:
    """Index just past the string literal opened at start.

    Handles single-line, triple-quoted and raw `#"..."#` forms.  Interpolated
    segments are skipped as part of the literal.  An unterminated single-line
    literal ends at the newline.
    """
    i = start
    hashes = 0
    while text[i] == "#":
        hashes += 1
        i += 1
    multiline = text.startswith('"""', i)
    delimiter = ('"""' if multiline else '"') + "#" * hashes
    escape = "\\" + "#" * hashes
    i += 3 if multiline else 1
    n = len(text)
    while i < n:
        if text.startswith(escape, i):
            j = i + len(escape)
            if j < n and text[j] == "(":
                i = _interpolation_end(text, j)
            else:
                i = j + 1
            continue
        if text.startswith(delimiter, i):
            return i + len(delimiter)
        if text[i] == "\n" and not multiline:
            return i
        i += 1
    return n


def _interpolation_end(text: str, open_paren: int) -> int:
    depth = 0
    i = open_paren
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            i = _string_end(text, i)
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return n


def _word_kind(word: str) -> SyntaxKind:
    if word in KEYWORDS:
        return SyntaxKind.KEYWORD
    if is_uppercase_letter(word[0]):
        return SyntaxKind.TYPE_IDENTIFIER
    return SyntaxKind.IDENTIFIER


def _used_as_value(text: str, end: int) -> bool:
    """True if the word ending at end is called or has a member read.

    `Foo(...)` and `Foo.shared` are expressions; `Foo.Bar` stays a type.
    Only spaces and tabs are skipped, so the next line is never consulted.
    """
    n = len(text)
    j = end
    while j < n and text[j] in " \t":
        j += 1
    if j >= n:
        return False
    if text[j] == "(":
        return True
    return text[j] == "." and j + 1 < n and not is_uppercase_letter(text[j + 1])


def _is_ternary_mark(text: str, i: int) -> bool:
    # `a ? b : c` has whitespace around the `?`; `Int?` and `a ?? b` do not.
    return 0 < i < len(text) - 1 and text[i - 1].isspace() and text[i + 1].isspace()


class SwiftLexer:
    """SyntaxTokenSource over a SourceText, tokenized on first query."""

    def __init__(self, source: SourceText) -> None:
        self.source = source
        self._tokens: TokenList | None = None

    @property
    def tokens(self) -> TokenList:
        if self._tokens is None:
            self._tokens = TokenList(self.tokenize())
        return self._tokens

    def tokens_intersecting(self, byte_range: ByteRange) -> list[SyntaxToken]:
        return self.tokens.tokens_intersecting(byte_range)

    def _token(self, start: int, end: int, kind: SyntaxKind) -> SyntaxToken:
        offset = self.source.byte_offset(start)
        return SyntaxToken(offset, self.source.byte_offset(end) - offset, kind)

    def tokenize(self) -> Iterator[SyntaxToken]:
        """Yield tokens in source order.

        Besides the word itself, a capitalised identifier's kind depends on
        where it sits.  The operands of a ternary and identifiers that are
        called or dereferenced are plain identifiers, as in SourceKit.
        """
        text = self.source.contents
        n = len(text)
        i = 0
        depth = 0
        ternaries: list[int] = []     # bracket depth of each open `?`
        operand_next = False
        while i < n:
            ch = text[i]

            if ch.isspace():
                i += 1
                continue

            scanned = _scan_token(text, i)
            if scanned is None:
                # Punctuation and operators carry no token
                if ch in "([{":
                    depth += 1
                elif ch in ")]}":
                    depth = max(depth - 1, 0)
                    while ternaries and ternaries[-1] > depth:
                        ternaries.pop()
                elif ch == "?" and _is_ternary_mark(text, i):
                    ternaries.append(depth)
                    operand_next = True
                elif ch == ":" and ternaries and ternaries[-1] == depth:
                    ternaries.pop()
                    operand_next = True
                i += 1
                continue

            end, kind = scanned
            if kind is SyntaxKind.TYPE_IDENTIFIER and (operand_next or _used_as_value(text, end)):
                kind = SyntaxKind.IDENTIFIER
            if kind not in (SyntaxKind.COMMENT, SyntaxKind.DOC_COMMENT):
                operand_next = False
            yield self._token(i, end, kind)
            i = end


def _scan_token(text: str, i: int) -> tuple[int, SyntaxKind] | None:
    """End and kind of the token starting at i, None for punctuation."""
    ch = text[i]

    # Comments
    if text.startswith("//", i):
        end = text.find("\n", i)
        end = len(text) if end == -1 else end
        kind = SyntaxKind.DOC_COMMENT if text.startswith("///", i) else SyntaxKind.COMMENT
        return end, kind
    if text.startswith("/*", i):
        end = _block_comment_end(text, i)
        doc = text.startswith("/**", i) and not text.startswith("/**/", i)
        return end, SyntaxKind.DOC_COMMENT if doc else SyntaxKind.COMMENT

    # String literals
    if ch == '"' or (ch == "#" and _RAW_STRING_START.match(text, i)):
        return _string_end(text, i), SyntaxKind.STRING

    if ch.isdigit():
        m = _NUMBER.match(text, i)
        return (m.end() if m else i + 1), SyntaxKind.NUMBER

    if ch == "`":
        end = text.find("`", i + 1)
        if end != -1 and "\n" not in text[i:end]:
            return end + 1, SyntaxKind.IDENTIFIER

    if ch == "$":
        m = _DOLLAR_IDENT.match(text, i)
        if m:
            return m.end(), SyntaxKind.IDENTIFIER

    if ch == "@":
        m = _IDENT.match(text, i + 1)
        if m:
            return m.end(), SyntaxKind.ATTRIBUTE_BUILTIN

    if ch == "#":
        m = _IDENT.match(text, i + 1)
        if m:
            name = m.group()
            if name in BUILD_CONFIG_KEYWORDS:
                return m.end(), SyntaxKind.BUILDCONFIG_KEYWORD
            if name in POUND_DIRECTIVE_KEYWORDS:
                return m.end(), SyntaxKind.POUND_DIRECTIVE_KEYWORD
            return m.end(), SyntaxKind.KEYWORD

    m = _IDENT.match(text, i)
    if m:
        return m.end(), _word_kind(m.group())
    return None
