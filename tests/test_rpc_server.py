"""
Tests for the JSON-RPC style ActionRPCServer.
"""

import asyncio
import io
import json
import threading

from actionresolver.core.actions import ActionDescriptor
from actionresolver.core.catalog import ActionCatalog
from actionresolver.core.rpc_server import (
    ACTION_EXECUTION_FAILED,
    ACTION_NOT_FOUND,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ActionRPCServer,
)
from actionresolver.core.scope import ScopeContext, StaticScopeProvider


def run_async(coro):
    """Helper to run async coroutines inside plain pytest tests."""
    return asyncio.run(coro)


def make_server(scope=None):
    received = []

    def greet(name, punctuation="!"):
        received.append((name, punctuation))
        return f"Hello {name}{punctuation}"

    catalog = ActionCatalog()
    catalog.register(ActionDescriptor(
        id="greet", name="greet", description="Say hello", handler=greet,
        input_schema={"type": "object", "properties": {"name": {"type": "string"}}},
    ))
    catalog.register(ActionDescriptor(
        id="publish", name="publish", scope="/blog", handler=lambda: "published",
    ))
    catalog.register(ActionDescriptor(
        id="fail", name="fail", handler=lambda: {"success": False, "message": "refused"},
    ))
    provider = StaticScopeProvider(scope or ScopeContext())
    return ActionRPCServer(catalog, scope_provider=provider), received


def call(server, method, params=None, request_id=1):
    request = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        request["params"] = params
    return run_async(server.handle(request))


def test_initialize_reports_server_info():
    server, _ = make_server()
    response = call(server, "initialize")
    assert response["id"] == 1
    assert response["result"]["serverInfo"]["name"] == "actionresolver"
    assert "tools" in response["result"]["capabilities"]


def test_list_uses_scope_dot_name_and_filters_by_scope():
    server, _ = make_server()
    names = [t["name"] for t in call(server, "tools/list")["result"]["tools"]]
    assert "global.greet" in names
    assert "/blog.publish" not in names

    server, _ = make_server(ScopeContext.create(current_path="/blog"))
    names = [t["name"] for t in call(server, "tools/list")["result"]["tools"]]
    assert "/blog.publish" in names


def test_list_includes_schema_and_annotations():
    server, _ = make_server()
    tools = {t["name"]: t for t in call(server, "tools/list")["result"]["tools"]}
    greet = tools["global.greet"]
    assert greet["inputSchema"]["properties"]["name"]["type"] == "string"
    assert greet["annotations"]["container"] == "global"
    assert tools["global.fail"]["inputSchema"] == {"type": "object", "properties": {}, "required": []}


def test_call_passes_argument_values_positionally():
    server, received = make_server()
    response = call(server, "tools/call", {
        "name": "global.greet",
        "arguments": {"name": "Ada", "punctuation": "?"},
    })

    assert received == [("Ada", "?")]
    payload = json.loads(response["result"]["content"][0]["text"])
    assert payload["success"] is True
    assert payload["result"] == "Hello Ada?"


def test_call_unknown_action():
    server, _ = make_server()
    response = call(server, "tools/call", {"name": "global.missing"})
    assert response["error"]["code"] == ACTION_NOT_FOUND


def test_call_bad_name_format():
    server, _ = make_server()
    response = call(server, "tools/call", {"name": "greet"})
    assert response["error"]["code"] == INVALID_PARAMS


def test_call_bad_arguments_type():
    server, _ = make_server()
    response = call(server, "tools/call", {"name": "global.greet", "arguments": "Ada"})
    assert response["error"]["code"] == INVALID_PARAMS


def test_call_failed_execution_is_structured_error():
    server, _ = make_server()
    response = call(server, "tools/call", {"name": "global.fail"})
    assert response["error"]["code"] == ACTION_EXECUTION_FAILED
    assert response["error"]["message"] == "refused"


def test_call_raising_action_is_structured_error():
    server, _ = make_server()
    response = call(server, "tools/call", {"name": "global.greet", "arguments": {}})
    assert response["error"]["code"] == ACTION_EXECUTION_FAILED


def test_unknown_method_and_invalid_request():
    server, _ = make_server()
    assert call(server, "resources/list")["error"]["code"] == METHOD_NOT_FOUND
    assert run_async(server.handle({"id": 3}))["error"]["code"] == INVALID_REQUEST
    assert run_async(server.handle(["not", "a", "dict"]))["error"]["code"] == INVALID_REQUEST


def test_notifications_get_no_response():
    server, _ = make_server()
    assert call(server, "notifications/initialized") is None


def test_parse_error():
    server, _ = make_server()
    response = json.loads(run_async(server.handle_message("{not json")))
    assert response["error"]["code"] == PARSE_ERROR
    assert response["id"] is None


def test_serve_stdio_answers_each_request_line():
    server, _ = make_server()
    stdin = io.StringIO(
        json.dumps({"jsonrpc": "2.0", "id": 1, "method": "initialize"}) + "\n"
        + "\n"
        + json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}) + "\n"
        + json.dumps({"jsonrpc": "2.0", "id": 2, "method": "tools/list"}) + "\n"
    )
    stdout = io.StringIO()

    run_async(server.serve_stdio(stdin=stdin, stdout=stdout))

    lines = [json.loads(line) for line in stdout.getvalue().splitlines()]
    assert [line["id"] for line in lines] == [1, 2]


class GatedInput:
    """Input stream whose first line only arrives once ``gate`` is set."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.gate = threading.Event()
        self.opened_in_time = None

    def readline(self):
        if self.opened_in_time is None:
            self.opened_in_time = self.gate.wait(timeout=5)
        return self.lines.pop(0) if self.lines else ""


def test_serve_stdio_keeps_the_event_loop_free_while_reading():
    server, _ = make_server()
    stdin = GatedInput([json.dumps({"jsonrpc": "2.0", "id": 1, "method": "initialize"}) + "\n"])
    stdout = io.StringIO()

    async def open_gate():
        await asyncio.sleep(0.01)
        stdin.gate.set()

    async def scenario():
        await asyncio.gather(server.serve_stdio(stdin=stdin, stdout=stdout), open_gate())

    run_async(scenario())

    assert stdin.opened_in_time is True
    assert json.loads(stdout.getvalue())["id"] == 1
