"""
Navigation Executor

Runs navigation actions. The action's own callable is preferred; otherwise
the target route is handed to an injected ``navigate`` handler.
"""

import logging
from typing import Any, Callable, List, Optional

from actionresolver.core.actions import ActionDescriptor, Navigation
from actionresolver.core.execution.base_executor import (
    BaseExecutor,
    ExecutionOutcome,
    NavigationUnavailableError,
    invocation_of,
    maybe_await,
)
from actionresolver.core.execution.direct_executor import call_direct

logger = logging.getLogger("ActionResolver.NavigationExecutor")

NavigateHandler = Callable[[str], Any]


class NavigationExecutor(BaseExecutor):
    """
    Executor for navigation actions.

    Args:
        navigate: Callable taking a route; may return an awaitable
        route_resolver: Maps a container label to its route (e.g.
            ``ActionCatalog.route_for``); unresolved targets are used as-is
    """

    name = "navigation"

    def __init__(
        self,
        navigate: Optional[NavigateHandler] = None,
        route_resolver: Optional[Callable[[str], Optional[str]]] = None,
    ):
        self.navigate = navigate
        self.route_resolver = route_resolver

    def can_execute(self, action: ActionDescriptor) -> bool:
        return isinstance(invocation_of(action), Navigation)

    def resolve_target(self, target: Optional[str]) -> Optional[str]:
        if target and self.route_resolver is not None:
            return self.route_resolver(target) or target
        return target

    async def execute(self, action: ActionDescriptor, args: List[Any]) -> ExecutionOutcome:
        invocation: Navigation = invocation_of(action)
        if invocation.call is not None:
            return await call_direct(invocation.call, action, args)

        target = self.resolve_target(invocation.target)
        if not target:
            raise NavigationUnavailableError(f"No navigation target for action: {action.name}")
        if self.navigate is None:
            raise NavigationUnavailableError(
                f"No navigation handler available for action: {action.name}"
            )

        try:
            await maybe_await(self.navigate(target))
        except Exception as e:
            logger.error(f"Navigation to {target} failed: {e}")
            raise
        return ExecutionOutcome(
            success=True,
            message=f"Navigated to {target}",
            data={"target": target},
        )
