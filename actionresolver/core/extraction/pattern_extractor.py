"""
Pattern Extractor

Uses the action's example phrases as templates:

- ``"open blog {topic}"`` becomes ``^open blog (.+?)$``; the captured text
  is the argument (confidence 95).
- ``"search for"`` matched as a word prefix of ``"search for red shoes"``
  makes the trailing text one string argument (confidence 90).

Placeholder templates are tried before plain prefixes. The original casing
of the query is preserved in the extracted values.
"""

import re
from typing import Optional

from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.extraction.base import ExtractionResult, ExtractorStrategy
from actionresolver.core.priorities import StrategyPriority
from actionresolver.utils.text_utils import has_placeholder, words

PLACEHOLDER_CONFIDENCE = 95
PREFIX_CONFIDENCE = 90

_PLACEHOLDER_RE = re.compile(r"\{[^}]+\}")


def template_to_regex(example: str) -> re.Pattern:
    """Compile an example phrase into a full-match regex, one group per placeholder."""
    literals = [re.escape(part) for part in _PLACEHOLDER_RE.split(example.strip())]
    pattern = r"(.+?)".join(literals)
    pattern = re.sub(r"(\\ )+", r"\\s+", pattern)
    return re.compile(pattern, re.IGNORECASE)


class PatternExtractor(ExtractorStrategy):
    """Example-template extraction."""

    name = "pattern"
    priority = StrategyPriority.HIGH

    async def extract(self, query: str, action: ActionDescriptor) -> Optional[ExtractionResult]:
        text = (query or "").strip()
        if not text:
            return None

        for example in action.examples:
            if not has_placeholder(example):
                continue
            match = template_to_regex(example).fullmatch(text)
            if match:
                arguments = [group.strip() for group in match.groups()]
                return ExtractionResult(
                    arguments=arguments,
                    confidence=PLACEHOLDER_CONFIDENCE,
                    reasoning=f'Matched template "{example}"',
                )

        query_words = text.split()
        lowered = [w.lower() for w in query_words]
        for example in action.examples:
            if has_placeholder(example):
                continue
            example_words = words(example)
            if not example_words or len(lowered) <= len(example_words):
                continue
            if lowered[:len(example_words)] == example_words:
                trailing = " ".join(query_words[len(example_words):])
                return ExtractionResult(
                    arguments=[trailing],
                    confidence=PREFIX_CONFIDENCE,
                    reasoning=f'Trailing text after "{example}"',
                )
        return None
