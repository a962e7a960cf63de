"""
Base Executor Interface

Abstract base class for all action executors.
Implements strategy pattern for the different invocation mechanisms.
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional

from actionresolver.core.actions import ActionDescriptor, ActionInvocation


class ExecutionError(Exception):
    """Raised inside an executor; always converted to a failed outcome."""


class ElementNotFoundError(ExecutionError):
    """The UI element an action operates is not present."""


class UnsupportedElementError(ExecutionError):
    """The UI element exists but cannot be operated by a DOM action."""


class NavigationUnavailableError(ExecutionError):
    """A navigation action ran with no navigation handler and no callable."""


@dataclass
class ExecutionOutcome:
    """Standardized execution result."""
    success: bool
    message: str
    data: Any = None
    error: Optional[str] = None
    elapsed_ms: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "error": self.error,
            "elapsed_ms": self.elapsed_ms,
        }


def normalize_result(result: Any, action: ActionDescriptor) -> ExecutionOutcome:
    """
    Normalize whatever an action returned into an ExecutionOutcome.

    Outcomes pass through; dicts or objects carrying both ``success`` and
    ``message`` are converted field by field; anything else is wrapped as a
    success with the value as payload.
    """
    if isinstance(result, ExecutionOutcome):
        return result
    if isinstance(result, dict) and "success" in result and "message" in result:
        return ExecutionOutcome(
            success=bool(result["success"]),
            message=str(result["message"]),
            data=result.get("data"),
            error=result.get("error"),
        )
    if hasattr(result, "success") and hasattr(result, "message"):
        return ExecutionOutcome(
            success=bool(result.success),
            message=str(result.message),
            data=getattr(result, "data", None),
            error=getattr(result, "error", None),
        )
    return ExecutionOutcome(
        success=True,
        message=f"Executed {action.name}",
        data=result,
    )


async def maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def invocation_of(action: ActionDescriptor) -> Optional[ActionInvocation]:
    """The action's resolved invocation, resolving it now if registration did not."""
    if action.invocation is None:
        action.invocation = action.resolve_invocation()
    return action.invocation


class BaseExecutor(ABC):
    """
    Abstract base class for all action executors.

    Each executor handles one invocation variant:
    - DirectCallExecutor: Python callables
    - NavigationExecutor: route changes
    - DomExecutor: live UI elements
    """

    name: str = "base"

    @abstractmethod
    def can_execute(self, action: ActionDescriptor) -> bool:
        """
        Check if this executor can handle the given action.

        Args:
            action: Action to execute

        Returns:
            True if this executor can handle the action
        """
        pass

    @abstractmethod
    async def execute(self, action: ActionDescriptor, args: List[Any]) -> ExecutionOutcome:
        """
        Execute an action.

        Args:
            action: Action to execute
            args: Positional arguments

        Returns:
            ExecutionOutcome with execution outcome

        Raises:
            Exception: Anything the action raises; the ActionExecutor
                converts it into a failed outcome
        """
        pass
