"""
Base Matcher Strategy

All matching strategies inherit from this base class. A strategy scores a
free-text query against a list of actions and returns the matches it is
confident about.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.priorities import StrategyPriority
from actionresolver.core.scope import ScopeContext


@dataclass
class ActionMatch:
    """
    One scored pairing of a query with an action.

    Attributes:
        action: The matched action
        confidence: 0-100, ordinal only
        arguments: Arguments the strategy already pulled out of the query
        reasoning: Why the strategy matched (for debugging)
    """
    action: ActionDescriptor
    confidence: int
    arguments: List[Any] = field(default_factory=list)
    reasoning: Optional[str] = None


class MatcherStrategy(ABC):
    """
    Base class for matching strategies.

    Subclasses set ``name`` and ``priority``; the matcher runs strategies
    in descending priority and merges their results.
    """

    name: str = "base"
    priority: Union[StrategyPriority, int] = StrategyPriority.NORMAL

    @abstractmethod
    async def match(
        self,
        query: str,
        actions: List[ActionDescriptor],
        context: Optional[ScopeContext] = None,
    ) -> List[ActionMatch]:
        """
        Score ``query`` against ``actions``.

        Args:
            query: Free-text command
            actions: Candidate actions (already scope-filtered)
            context: Current scope, for strategies that use it

        Returns:
            Matches this strategy is confident about (any order)
        """
        pass
