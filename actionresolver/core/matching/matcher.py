"""
Action Matcher

Runs every registered matching strategy over the in-scope actions, merges
their results by action id and returns the best candidates.
"""

import logging
from typing import Any, Dict, List, Optional

from actionresolver.config.settings import DEFAULT_SETTINGS, ResolverSettings
from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.execution.base_executor import maybe_await
from actionresolver.core.matching.base import ActionMatch, MatcherStrategy
from actionresolver.core.matching.exact_matcher import ExactMatcher
from actionresolver.core.matching.fuzzy_matcher import FuzzyMatcher
from actionresolver.core.priorities import priority_value
from actionresolver.core.scope import ScopeContext

logger = logging.getLogger("ActionResolver.Matcher")


def _checked(matches: Any) -> List[ActionMatch]:
    """Materialize a strategy result, rejecting anything but a list of ActionMatch."""
    if matches is None:
        raise TypeError("strategy returned None instead of a list of matches")
    checked = list(matches)
    for match in checked:
        if not isinstance(match, ActionMatch):
            raise TypeError(f"strategy returned {type(match).__name__}, expected ActionMatch")
    return checked


class ActionMatcher:
    """
    Strategy-based matcher.

    Strategies are kept sorted by priority (highest first). A strategy that
    raises is logged and skipped; the others still contribute.
    """

    def __init__(
        self,
        strategies: Optional[List[MatcherStrategy]] = None,
        settings: Optional[ResolverSettings] = None,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        self._strategies: List[MatcherStrategy] = []
        if strategies is None:
            strategies = [ExactMatcher(), FuzzyMatcher(self.settings)]
        for strategy in strategies:
            self.register_strategy(strategy)

    @property
    def strategies(self) -> List[MatcherStrategy]:
        return list(self._strategies)

    def register_strategy(self, strategy: MatcherStrategy) -> None:
        """
        Add a strategy, keeping priority order (stable for equal priorities).

        Args:
            strategy: Strategy instance to register
        """
        self._strategies.append(strategy)
        self._strategies.sort(key=priority_value, reverse=True)
        logger.debug(
            f"Registered matcher strategy '{strategy.name}' "
            f"(priority {priority_value(strategy)})"
        )

    async def find_matches(
        self,
        query: str,
        actions: List[ActionDescriptor],
        context: Optional[ScopeContext] = None,
        top_n: Optional[int] = None,
    ) -> List[ActionMatch]:
        """
        Find the best matches for ``query`` among ``actions``.

        Args:
            query: Free-text command
            actions: Actions to consider
            context: Current scope
            top_n: Maximum matches to return (defaults to candidate_limit)

        Returns:
            Matches sorted by descending confidence, one per action
        """
        if top_n is None:
            top_n = self.settings.candidate_limit
        if not query or not query.strip() or not actions:
            return []

        best: Dict[str, ActionMatch] = {}
        for strategy in self._strategies:
            try:
                matches = _checked(await maybe_await(strategy.match(query, actions, context)))
            except Exception as e:
                logger.error(f"Matcher strategy '{strategy.name}' failed: {e}", exc_info=True)
                continue
            for match in matches:
                current = best.get(match.action.id)
                if current is None or match.confidence > current.confidence:
                    best[match.action.id] = match

        ranked = sorted(best.values(), key=lambda m: m.confidence, reverse=True)
        logger.debug(f"'{query}' -> {[(m.action.id, m.confidence) for m in ranked[:top_n]]}")
        return ranked[:top_n]
