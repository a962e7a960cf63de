"""
Base Extractor Strategy

Extraction strategies pull positional arguments for an already chosen
action out of the query text. They never raise for a non-matching query;
they return None instead.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.priorities import StrategyPriority


@dataclass
class ExtractionResult:
    """Ordered argument values with an overall 0-100 confidence."""
    arguments: List[Any] = field(default_factory=list)
    confidence: int = 0
    reasoning: Optional[str] = None

    @classmethod
    def empty(cls) -> "ExtractionResult":
        return cls(arguments=[], confidence=0, reasoning="No arguments extracted")


class ExtractorStrategy(ABC):
    """Base class for argument extraction strategies."""

    name: str = "base"
    priority: Union[StrategyPriority, int] = StrategyPriority.NORMAL

    @abstractmethod
    async def extract(self, query: str, action: ActionDescriptor) -> Optional[ExtractionResult]:
        """
        Extract arguments for ``action`` from ``query``.

        Args:
            query: Free-text command
            action: The action the query resolved to

        Returns:
            ExtractionResult, or None if this strategy found nothing
        """
        pass
