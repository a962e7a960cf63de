"""
Exact Matcher

Case-insensitive equality between the query and an action's name (100)
or one of its example phrases (95).
"""

from typing import List, Optional

from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.matching.base import ActionMatch, MatcherStrategy
from actionresolver.core.priorities import StrategyPriority
from actionresolver.core.scope import ScopeContext
from actionresolver.utils.text_utils import normalize

NAME_CONFIDENCE = 100
EXAMPLE_CONFIDENCE = 95


class ExactMatcher(MatcherStrategy):
    """Exact name or example match."""

    name = "exact"
    priority = StrategyPriority.CRITICAL

    async def match(
        self,
        query: str,
        actions: List[ActionDescriptor],
        context: Optional[ScopeContext] = None,
    ) -> List[ActionMatch]:
        lowered = normalize(query)
        if not lowered:
            return []

        matches: List[ActionMatch] = []
        for action in actions:
            if lowered == normalize(action.name):
                matches.append(ActionMatch(action, NAME_CONFIDENCE, reasoning="Exact name match"))
                continue
            for example in action.examples:
                if lowered == normalize(example):
                    matches.append(ActionMatch(
                        action,
                        EXAMPLE_CONFIDENCE,
                        reasoning=f'Exact example match: "{example}"',
                    ))
                    break
        return matches
