"""
Text Utilities

Small, pure string helpers shared by the matcher, extractor and
suggestion engine.
"""

import math
import re
from typing import List

_PLACEHOLDER_RE = re.compile(r"\{[^}]+\}")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    return _WHITESPACE_RE.sub(" ", (text or "").strip().lower())


def words(text: str) -> List[str]:
    """Split normalized text into words (empty text gives an empty list)."""
    cleaned = normalize(text)
    return cleaned.split(" ") if cleaned else []


def strip_placeholders(text: str) -> str:
    """
    Remove ``{placeholder}`` tokens from an example phrase.

    "open blog {topic}" -> "open blog"
    """
    return normalize(_PLACEHOLDER_RE.sub("", text or ""))


def has_placeholder(text: str) -> bool:
    return bool(_PLACEHOLDER_RE.search(text or ""))


def levenshtein(a: str, b: str) -> int:
    """
    Classic edit distance (insert, delete, substitute; each cost 1).

    Args:
        a: First string
        b: Second string

    Returns:
        Number of edits needed to turn ``a`` into ``b``
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], previous[j], current[j - 1]) + 1)
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """
    Normalized edit-distance similarity in [0, 1].

    1 - distance / max(len(a), len(b)); two empty strings are identical.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / longest


def to_percent(score: float) -> int:
    """Convert a 0-1 score to a 0-100 integer, rounding half up."""
    return int(math.floor(score * 100 + 0.5))
