"""
Execution Module

Executor strategies for the different invocation variants and the
ActionExecutor that dispatches between them.
"""

from actionresolver.core.execution.base_executor import (
    BaseExecutor,
    ElementNotFoundError,
    ExecutionError,
    ExecutionOutcome,
    NavigationUnavailableError,
    UnsupportedElementError,
    normalize_result,
)
from actionresolver.core.execution.direct_executor import DirectCallExecutor
from actionresolver.core.execution.dom_executor import DomExecutor, ElementLocator, UIElement
from actionresolver.core.execution.executor import ActionExecutor
from actionresolver.core.execution.navigation_executor import NavigationExecutor

__all__ = [
    "ActionExecutor",
    "BaseExecutor",
    "DirectCallExecutor",
    "DomExecutor",
    "ElementLocator",
    "ElementNotFoundError",
    "ExecutionError",
    "ExecutionOutcome",
    "NavigationExecutor",
    "NavigationUnavailableError",
    "UIElement",
    "UnsupportedElementError",
    "normalize_result",
]
