"""
DOM Executor

Operates live UI elements: button-like elements are activated, text
inputs receive the first argument as their value followed by ``input``
and ``change`` events.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from actionresolver.core.actions import ActionDescriptor, DomAction
from actionresolver.core.execution.base_executor import (
    BaseExecutor,
    ElementNotFoundError,
    ExecutionOutcome,
    UnsupportedElementError,
    invocation_of,
    maybe_await,
)

CLICKABLE_TAGS = frozenset({"button", "a"})
TEXT_INPUT_TAGS = frozenset({"input", "textarea"})


class UIElement(ABC):
    """A live, interactable element as seen by the host application."""

    tag_name: str = ""
    value: Any = None

    @abstractmethod
    def click(self) -> Any:
        pass

    @abstractmethod
    def dispatch_event(self, event: str) -> Any:
        pass


class ElementLocator(ABC):
    """Looks up live UI elements by identifier."""

    @abstractmethod
    def find(self, element_id: str) -> Optional[UIElement]:
        pass


class DomExecutor(BaseExecutor):
    """Executor for element-bound actions without an owning instance."""

    name = "dom"

    def __init__(self, locator: Optional[ElementLocator] = None):
        self.locator = locator

    def can_execute(self, action: ActionDescriptor) -> bool:
        return isinstance(invocation_of(action), DomAction)

    async def execute(self, action: ActionDescriptor, args: List[Any]) -> ExecutionOutcome:
        element_id = invocation_of(action).element_id
        element = self.locator.find(element_id) if self.locator is not None else None
        if element is None:
            raise ElementNotFoundError(f"Element not found: {element_id}")

        tag = (element.tag_name or "").lower()
        if tag in CLICKABLE_TAGS:
            await maybe_await(element.click())
            return ExecutionOutcome(
                success=True,
                message=f"Clicked {action.name}",
                data={"element_id": element_id},
            )

        if tag in TEXT_INPUT_TAGS:
            if not args:
                raise ValueError(f"No value provided for input: {element_id}")
            element.value = str(args[0])
            await maybe_await(element.dispatch_event("input"))
            await maybe_await(element.dispatch_event("change"))
            return ExecutionOutcome(
                success=True,
                message=f"Set {action.name} to {element.value}",
                data={"element_id": element_id, "value": element.value},
            )

        raise UnsupportedElementError(f"Unsupported element type: {tag or 'unknown'}")
