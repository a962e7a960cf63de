"""
Entity Extractor

Scans the query for simple entities and appends them in a fixed order:
the first run of digits (as an int), a non-empty double-quoted string,
then a color/theme word.
"""

import re
from typing import Any, List, Optional

from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.extraction.base import ExtractionResult, ExtractorStrategy
from actionresolver.core.priorities import StrategyPriority

ENTITY_CONFIDENCE = 70

DESCRIPTIVE_WORDS = ("red", "blue", "green", "dark", "light", "black", "white")

_INTEGER_RE = re.compile(r"\d+")
_QUOTED_RE = re.compile(r'"([^"]+)"')
_DESCRIPTIVE_RE = re.compile(r"\b(" + "|".join(DESCRIPTIVE_WORDS) + r")\b", re.IGNORECASE)


class EntityExtractor(ExtractorStrategy):
    """Number, quoted string and color-word extraction."""

    name = "entity"
    priority = StrategyPriority.NORMAL

    async def extract(self, query: str, action: ActionDescriptor) -> Optional[ExtractionResult]:
        text = query or ""
        arguments: List[Any] = []
        found: List[str] = []

        number = _INTEGER_RE.search(text)
        if number:
            arguments.append(int(number.group(0)))
            found.append("number")

        quoted = _QUOTED_RE.search(text)
        if quoted:
            arguments.append(quoted.group(1))
            found.append("string")

        descriptive = _DESCRIPTIVE_RE.search(text)
        if descriptive:
            arguments.append(descriptive.group(1).lower())
            found.append("descriptor")

        if not arguments:
            return None
        return ExtractionResult(
            arguments=arguments,
            confidence=ENTITY_CONFIDENCE,
            reasoning=f"Found entities: {', '.join(found)}",
        )
