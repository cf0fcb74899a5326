"""Search pattern for badly spaced type-annotation colons.

The pattern only matches the abnormal shapes: whitespace before the colon
(any amount, in both modes), or a colon followed by zero spaces, or by two
or more unless right spacing is strict.  A single space after the colon is
the desired style and never produces a candidate.
"""

from __future__ import annotations
import re
from functools import lru_cache

_STRICT_RIGHT_SPACING = r"(?:\s{0})"
_LOOSE_RIGHT_SPACING = r"(?:\s{0}|\s{2,})"


def build_pattern(strict_right_spacing: bool = False) -> str:
    right = _STRICT_RIGHT_SPACING if strict_right_spacing else _LOOSE_RIGHT_SPACING
    return (
        r"(\w)"              # last character of the identifier
        r"(?:"
        r"\s+:\s*"           # whitespace, then the colon, then any whitespace
        r"|"
        r":" + right +       # or the colon right after the identifier
        r")"
        r"([\[(]*\S)"        # start of the type, possibly behind [ or (
    )


@lru_cache(maxsize=None)
def compile_pattern(strict_right_spacing: bool = False) -> re.Pattern:
    return re.compile(build_pattern(strict_right_spacing))
