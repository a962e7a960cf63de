"""
Fuzzy Matcher

Scores a query against each action with three checks and keeps the best:

1. Levenshtein similarity with the action name.
2. Levenshtein similarity with each example, placeholders stripped, plus a
   "prefix + trailing words" pattern check: when the query starts with the
   example's words, the trailing words are taken as a parameter and the
   score is boosted to ``base + weight * pattern_words / query_words``.
3. Ratio of query words found in the action description.

Scores below ``fuzzy_min_score`` are dropped. A fuzzy score may reach 100;
the ActionMatcher keeps the higher of the exact and fuzzy confidence for an
action.
"""

import logging
from typing import List, Optional, Tuple

from actionresolver.config.settings import DEFAULT_SETTINGS, ResolverSettings
from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.matching.base import ActionMatch, MatcherStrategy
from actionresolver.core.priorities import StrategyPriority
from actionresolver.core.scope import ScopeContext
from actionresolver.utils.text_utils import (
    normalize,
    similarity,
    strip_placeholders,
    to_percent,
    words,
)

logger = logging.getLogger("ActionResolver.FuzzyMatcher")


class FuzzyMatcher(MatcherStrategy):
    """Edit-distance, parameter-pattern and keyword-overlap matching."""

    name = "fuzzy"
    priority = StrategyPriority.NORMAL

    def __init__(self, settings: Optional[ResolverSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS

    async def match(
        self,
        query: str,
        actions: List[ActionDescriptor],
        context: Optional[ScopeContext] = None,
    ) -> List[ActionMatch]:
        lowered = normalize(query)
        if not lowered:
            return []
        query_words = lowered.split(" ")

        matches: List[ActionMatch] = []
        for action in actions:
            score, reason, arguments = self._score(lowered, query_words, action)
            if score >= self.settings.fuzzy_min_score:
                confidence = to_percent(score)
                logger.debug(f"Fuzzy match {action.id}: {confidence}% ({reason})")
                matches.append(ActionMatch(
                    action,
                    confidence,
                    arguments=arguments,
                    reasoning=f"Fuzzy match: {reason}",
                ))
        return matches

    def _score(
        self, lowered: str, query_words: List[str], action: ActionDescriptor
    ) -> Tuple[float, str, List[str]]:
        best = similarity(lowered, normalize(action.name))
        reason = f'name "{action.name}"'
        arguments: List[str] = []

        for example in action.examples:
            stripped = strip_placeholders(example)
            example_score = similarity(lowered, stripped)
            if example_score > best:
                best, reason, arguments = example_score, f'example "{example}"', []

            pattern_words = stripped.split(" ") if stripped else []
            if pattern_words and query_words[:len(pattern_words)] == pattern_words:
                pattern_score = (
                    self.settings.pattern_base_score
                    + self.settings.pattern_weight * len(pattern_words) / len(query_words)
                )
                if pattern_score > best:
                    best = pattern_score
                    reason = f'"{example}" (pattern match with parameter)'
                    trailing = " ".join(query_words[len(pattern_words):])
                    arguments = [trailing] if trailing else []

        description_words = set(words(action.description))
        if description_words:
            overlap = sum(1 for w in query_words if w in description_words) / len(query_words)
            if overlap > best:
                best, reason, arguments = overlap, "keyword overlap", []

        return best, reason, arguments
