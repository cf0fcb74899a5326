"""Source text with UTF-8 byte <-> character offset translation.

Token sources report byte offsets into the UTF-8 encoding of a file, while
regex matches and reported ranges use character indices into the decoded
string.  SourceText owns both views and converts between them.
"""

from __future__ import annotations
from bisect import bisect_right
from pathlib import Path

from .types import ByteRange, ReportRange


def _utf8_width(ch: str) -> int:
    cp = ord(ch)
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if cp < 0x10000:
        return 3
    return 4


class SourceText:
    """Immutable file contents, read-only to the rule."""

    def __init__(self, contents: str, path: str | None = None) -> None:
        self.contents = contents
        self.path = path
        self.data = contents.encode("utf-8")

        # char index -> byte offset (len + 1 entries, last one is len(data))
        char_to_byte = [0] * (len(contents) + 1)
        # byte offset -> char index, -1 inside a multi-byte sequence
        byte_to_char = [-1] * (len(self.data) + 1)
        offset = 0
        for i, ch in enumerate(contents):
            char_to_byte[i] = offset
            byte_to_char[offset] = i
            offset += _utf8_width(ch)
        char_to_byte[len(contents)] = offset
        byte_to_char[offset] = len(contents)
        self._char_to_byte = char_to_byte
        self._byte_to_char = byte_to_char

        self._line_starts = [0]
        for i, ch in enumerate(contents):
            if ch == "\n":
                self._line_starts.append(i + 1)

    @classmethod
    def from_path(cls, path: str | Path) -> SourceText:
        # newline="" keeps CRLF intact so byte offsets match the file on disk
        with open(path, encoding="utf-8", newline="") as f:
            return cls(f.read(), path=str(path))

    # --- offset translation ---

    def byte_offset(self, char_index: int) -> int:
        return self._char_to_byte[char_index]

    def char_index(self, byte_offset: int) -> int | None:
        """Character index starting at byte_offset, None if not on a boundary."""
        if byte_offset < 0 or byte_offset >= len(self._byte_to_char):
            return None
        index = self._byte_to_char[byte_offset]
        return index if index >= 0 else None

    def char_range_to_byte_range(self, start: int, end: int) -> ByteRange:
        lo = self._char_to_byte[start]
        return ByteRange(lo, self._char_to_byte[end] - lo)

    def byte_range_to_report_range(self, offset: int, length: int) -> ReportRange | None:
        start = self.char_index(offset)
        end = self.char_index(offset + length)
        if start is None or end is None:
            return None
        return ReportRange(start, end - start)

    def substring_with_byte_range(self, offset: int, length: int) -> str | None:
        rng = self.byte_range_to_report_range(offset, length)
        if rng is None:
            return None
        return self.contents[rng.location:rng.end]

    # --- neighbour scans ---

    def first_non_whitespace_before(self, byte_offset: int) -> str | None:
        """First non-whitespace character strictly before byte_offset."""
        index = self.char_index(byte_offset)
        if index is None:
            return None
        for i in range(index - 1, -1, -1):
            if not self.contents[i].isspace():
                return self.contents[i]
        return None

    def first_non_whitespace_after(self, byte_offset: int) -> str | None:
        """First non-whitespace character at or after byte_offset.

        byte_offset is an exclusive end, so the character at it is the first
        one following the token.
        """
        index = self.char_index(byte_offset)
        if index is None:
            return None
        for i in range(index, len(self.contents)):
            if not self.contents[i].isspace():
                return self.contents[i]
        return None

    # --- reporting ---

    def location(self, char_index: int) -> tuple[int, int]:
        """1-based (line, column) of a character index."""
        line = bisect_right(self._line_starts, char_index)
        return line, char_index - self._line_starts[line - 1] + 1
