"""
Action Executor

Picks the first executor strategy that claims an action, runs it, and
normalizes every result (returned or raised) into an ExecutionOutcome with
the elapsed time attached. Nothing raised by an action escapes ``execute``.

There is no timeout: a hung action blocks the caller.
"""

import logging
import time
from typing import Any, Callable, List, Optional

from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.execution.base_executor import BaseExecutor, ExecutionOutcome
from actionresolver.core.execution.direct_executor import DirectCallExecutor
from actionresolver.core.execution.dom_executor import DomExecutor, ElementLocator
from actionresolver.core.execution.navigation_executor import NavigateHandler, NavigationExecutor

logger = logging.getLogger("ActionResolver.Executor")


class ActionExecutor:
    """First-match dispatch over executor strategies."""

    def __init__(
        self,
        strategies: Optional[List[BaseExecutor]] = None,
        navigate: Optional[NavigateHandler] = None,
        element_locator: Optional[ElementLocator] = None,
        route_resolver: Optional[Callable[[str], Optional[str]]] = None,
    ):
        if strategies is None:
            strategies = [
                DirectCallExecutor(),
                NavigationExecutor(navigate=navigate, route_resolver=route_resolver),
                DomExecutor(locator=element_locator),
            ]
        self._strategies: List[BaseExecutor] = list(strategies)

    @property
    def strategies(self) -> List[BaseExecutor]:
        return list(self._strategies)

    def register_strategy(self, strategy: BaseExecutor, first: bool = False) -> None:
        """
        Add an executor strategy.

        Args:
            strategy: Executor to add
            first: Try it before the existing strategies
        """
        if first:
            self._strategies.insert(0, strategy)
        else:
            self._strategies.append(strategy)
        logger.info(f"Registered executor: {strategy.name}")

    def get_executor(self, action: ActionDescriptor) -> Optional[BaseExecutor]:
        for strategy in self._strategies:
            if strategy.can_execute(action):
                return strategy
        return None

    async def execute(
        self, action: ActionDescriptor, args: Optional[List[Any]] = None
    ) -> ExecutionOutcome:
        """
        Execute ``action`` with positional ``args``.

        Returns:
            ExecutionOutcome; failures are reported, never raised
        """
        args = list(args or [])
        start = time.perf_counter()
        strategy = self.get_executor(action)

        if strategy is None:
            message = f"No execution strategy available for action: {action.name}"
            logger.warning(message)
            outcome = ExecutionOutcome(success=False, message=message, error=message)
        else:
            try:
                outcome = await strategy.execute(action, args)
            except Exception as e:
                logger.error(f"Action {action.id} failed via {strategy.name}: {e}", exc_info=True)
                outcome = ExecutionOutcome(
                    success=False,
                    message=f"Failed to execute {action.name}: {e}",
                    error=str(e),
                )

        outcome.elapsed_ms = (time.perf_counter() - start) * 1000
        if outcome.success:
            logger.info(f"Executed {action.id} ({outcome.elapsed_ms:.1f} ms)")
        else:
            logger.debug(f"Action {action.id} did not succeed: {outcome.message}")
        return outcome
