"""
Argument Extractor

Tries extraction strategies in priority order and returns the first result
confident enough to use.
"""

import logging
from typing import List, Optional

from actionresolver.config.settings import DEFAULT_SETTINGS, ResolverSettings
from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.execution.base_executor import maybe_await
from actionresolver.core.extraction.base import ExtractionResult, ExtractorStrategy
from actionresolver.core.extraction.entity_extractor import EntityExtractor
from actionresolver.core.extraction.pattern_extractor import PatternExtractor
from actionresolver.core.priorities import priority_value

logger = logging.getLogger("ActionResolver.Extractor")


class ArgumentExtractor:
    """
    Strategy-based argument extraction.

    Never raises: a failing strategy is logged and skipped, and when nothing
    qualifies an empty result with confidence 0 is returned.
    """

    def __init__(
        self,
        strategies: Optional[List[ExtractorStrategy]] = None,
        settings: Optional[ResolverSettings] = None,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        self._strategies: List[ExtractorStrategy] = []
        if strategies is None:
            strategies = [PatternExtractor(), EntityExtractor()]
        for strategy in strategies:
            self.register_strategy(strategy)

    @property
    def strategies(self) -> List[ExtractorStrategy]:
        return list(self._strategies)

    def register_strategy(self, strategy: ExtractorStrategy) -> None:
        self._strategies.append(strategy)
        self._strategies.sort(key=priority_value, reverse=True)

    async def extract(self, query: str, action: ActionDescriptor) -> ExtractionResult:
        """
        Extract arguments for ``action`` from ``query``.

        Strategies may be sync or async. One that raises or returns
        something other than an ExtractionResult is logged and skipped.

        Args:
            query: Free-text command
            action: The chosen action

        Returns:
            First result with confidence >= extraction_min_confidence, or an
            empty result
        """
        threshold = self.settings.extraction_min_confidence
        for strategy in self._strategies:
            try:
                result = await maybe_await(strategy.extract(query, action))
                if result is None:
                    continue
                if not isinstance(result, ExtractionResult):
                    raise TypeError(
                        f"returned {type(result).__name__}, expected ExtractionResult"
                    )
                accepted = result.confidence >= threshold
            except Exception as e:
                logger.warning(f"Extractor strategy '{strategy.name}' failed: {e}")
                continue
            if accepted:
                logger.debug(
                    f"Extracted {result.arguments} for {action.id} "
                    f"via {strategy.name} ({result.confidence}%)"
                )
                return result
        return ExtractionResult.empty()
