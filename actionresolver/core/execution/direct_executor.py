"""
Direct Call Executor

Invokes a Python callable with positional arguments, awaiting coroutines.
"""

import inspect
from typing import Any, List

from actionresolver.core.actions import ActionDescriptor, DirectCall
from actionresolver.core.execution.base_executor import (
    BaseExecutor,
    ExecutionOutcome,
    invocation_of,
    maybe_await,
    normalize_result,
)


async def call_direct(call: DirectCall, action: ActionDescriptor, args: List[Any]) -> ExecutionOutcome:
    """
    Run a DirectCall and normalize its result.

    A plain function paired with an instance is called with the instance as
    its first argument; bound methods are called as-is.
    """
    target = call.target
    if call.instance is not None and not inspect.ismethod(target):
        result = target(call.instance, *args)
    else:
        result = target(*args)
    return normalize_result(await maybe_await(result), action)


class DirectCallExecutor(BaseExecutor):
    """Executor for actions backed by a callable."""

    name = "direct"

    def can_execute(self, action: ActionDescriptor) -> bool:
        return isinstance(invocation_of(action), DirectCall)

    async def execute(self, action: ActionDescriptor, args: List[Any]) -> ExecutionOutcome:
        return await call_direct(invocation_of(action), action, args)
