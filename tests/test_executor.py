"""
Tests for ActionExecutor and the direct, navigation and DOM strategies.
"""

import asyncio
from typing import Any, List

import pytest

from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.catalog import ActionCatalog
from actionresolver.core.execution import (
    ActionExecutor,
    ElementLocator,
    ExecutionOutcome,
    UIElement,
)


def run_async(coro):
    """Helper to run async coroutines inside plain pytest tests."""
    return asyncio.run(coro)


# ---------------------------------------------------------------------------
# Helpers / Fakes
# ---------------------------------------------------------------------------

class FakeElement(UIElement):
    def __init__(self, tag_name: str):
        self.tag_name = tag_name
        self.value = None
        self.clicks = 0
        self.events: List[str] = []

    def click(self) -> Any:
        self.clicks += 1

    def dispatch_event(self, event: str) -> Any:
        self.events.append(event)


class FakeLocator(ElementLocator):
    def __init__(self, **elements):
        self.elements = elements

    def find(self, element_id):
        return self.elements.get(element_id)


class Recorder:
    """Navigation handler that records the routes it was sent to."""

    def __init__(self):
        self.routes: List[str] = []

    async def __call__(self, route):
        self.routes.append(route)


# ---------------------------------------------------------------------------
# Direct calls
# ---------------------------------------------------------------------------

def test_sync_handler_result_is_wrapped_as_success():
    action = ActionDescriptor(id="add", name="add numbers", handler=lambda a, b: a + b)
    outcome = run_async(ActionExecutor().execute(action, [2, 3]))

    assert outcome.success is True
    assert outcome.data == 5
    assert outcome.message == "Executed add numbers"
    assert outcome.elapsed_ms is not None and outcome.elapsed_ms >= 0


def test_async_handler_is_awaited():
    async def fetch(name):
        await asyncio.sleep(0)
        return {"user": name}

    action = ActionDescriptor(id="fetch", name="fetch user", handler=fetch)
    outcome = run_async(ActionExecutor().execute(action, ["ada"]))
    assert outcome.success is True
    assert outcome.data == {"user": "ada"}


def test_result_with_success_and_message_passes_through():
    action = ActionDescriptor(
        id="f", name="fail softly",
        handler=lambda: {"success": False, "message": "nope", "error": "E42"},
    )
    outcome = run_async(ActionExecutor().execute(action))
    assert outcome.success is False
    assert outcome.message == "nope"
    assert outcome.error == "E42"


def test_raised_exception_becomes_failed_outcome():
    def explode():
        raise RuntimeError("kaboom")

    action = ActionDescriptor(id="x", name="explode", handler=explode)
    outcome = run_async(ActionExecutor().execute(action))
    assert outcome.success is False
    assert outcome.error == "kaboom"
    assert "kaboom" in outcome.message


def test_unbound_function_with_instance_receives_instance():
    class Counter:
        def __init__(self):
            self.count = 0

        def bump(self, by):
            self.count += by
            return self.count

    counter = Counter()
    action = ActionDescriptor(id="b", name="bump", handler=Counter.bump, instance=counter)
    outcome = run_async(ActionExecutor().execute(action, [4]))
    assert outcome.data == 4
    assert counter.count == 4


def test_no_strategy_available_is_a_failure_not_an_exception():
    action = ActionDescriptor(id="o", name="orphan")
    outcome = run_async(ActionExecutor().execute(action))
    assert outcome.success is False
    assert outcome.message == "No execution strategy available for action: orphan"


def test_returned_outcome_is_used_as_is():
    action = ActionDescriptor(
        id="r", name="ready", handler=lambda: ExecutionOutcome(True, "all good", data=1)
    )
    outcome = run_async(ActionExecutor().execute(action))
    assert outcome.message == "all good"
    assert outcome.data == 1


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

def test_navigation_calls_injected_handler_with_route():
    recorder = Recorder()
    action = ActionDescriptor(id="n", name="open blog", category="navigation", route="/blog")
    outcome = run_async(ActionExecutor(navigate=recorder).execute(action))

    assert outcome.success is True
    assert recorder.routes == ["/blog"]
    assert outcome.data == {"target": "/blog"}


def test_navigation_resolves_container_label_to_route():
    catalog = ActionCatalog()
    catalog.register_container("Settings", "/settings")
    action = catalog.register(
        ActionDescriptor(id="n", name="open settings", category="navigation", scope="Settings")
    )
    recorder = Recorder()
    executor = ActionExecutor(navigate=recorder, route_resolver=catalog.route_for)

    run_async(executor.execute(action))
    assert recorder.routes == ["/settings"]


def test_navigation_prefers_the_action_callable():
    calls = []
    recorder = Recorder()
    action = ActionDescriptor(
        id="n", name="go to profile", route="/profile", handler=lambda: calls.append("called")
    )
    outcome = run_async(ActionExecutor(navigate=recorder).execute(action))

    assert outcome.success is True
    assert calls == ["called"]
    assert recorder.routes == []


def test_navigation_without_handler_fails():
    action = ActionDescriptor(id="n", name="open blog", category="navigation", route="/blog")
    outcome = run_async(ActionExecutor().execute(action))
    assert outcome.success is False
    assert "No navigation handler" in outcome.message


def test_navigation_rejection_becomes_failed_outcome():
    async def reject(route):
        raise ConnectionError(f"cannot reach {route}")

    action = ActionDescriptor(id="n", name="open blog", category="navigation", route="/blog")
    outcome = run_async(ActionExecutor(navigate=reject).execute(action))
    assert outcome.success is False
    assert "cannot reach /blog" in outcome.error


# ---------------------------------------------------------------------------
# DOM / UI elements
# ---------------------------------------------------------------------------

def test_button_is_clicked():
    button = FakeElement("BUTTON")
    action = ActionDescriptor(id="s", name="save", element_id="save-btn")
    executor = ActionExecutor(element_locator=FakeLocator(**{"save-btn": button}))

    outcome = run_async(executor.execute(action))
    assert outcome.success is True
    assert button.clicks == 1


def test_text_input_receives_value_and_change_events():
    field = FakeElement("input")
    action = ActionDescriptor(id="q", name="search box", element_id="q")
    executor = ActionExecutor(element_locator=FakeLocator(q=field))

    outcome = run_async(executor.execute(action, ["hello"]))
    assert outcome.success is True
    assert field.value == "hello"
    assert field.events == ["input", "change"]


def test_unsupported_element_type_fails():
    action = ActionDescriptor(id="d", name="panel", element_id="panel")
    executor = ActionExecutor(element_locator=FakeLocator(panel=FakeElement("div")))

    outcome = run_async(executor.execute(action))
    assert outcome.success is False
    assert "Unsupported element type: div" in outcome.message


def test_missing_element_fails():
    action = ActionDescriptor(id="s", name="save", element_id="save-btn")
    outcome = run_async(ActionExecutor(element_locator=FakeLocator()).execute(action))
    assert outcome.success is False
    assert "Element not found: save-btn" in outcome.message


# ---------------------------------------------------------------------------
# Known limitation: no built-in timeout
# ---------------------------------------------------------------------------

def test_hung_action_blocks_until_caller_times_out():
    async def hang():
        await asyncio.Event().wait()

    action = ActionDescriptor(id="h", name="hang forever", handler=hang)

    async def scenario():
        await asyncio.wait_for(ActionExecutor().execute(action), timeout=0.05)

    with pytest.raises(asyncio.TimeoutError):
        run_async(scenario())
