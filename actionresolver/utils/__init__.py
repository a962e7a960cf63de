"""Utility helpers."""

from actionresolver.utils.text_utils import (
    has_placeholder,
    levenshtein,
    normalize,
    similarity,
    strip_placeholders,
    to_percent,
    words,
)

__all__ = [
    "has_placeholder",
    "levenshtein",
    "normalize",
    "similarity",
    "strip_placeholders",
    "to_percent",
    "words",
]
