"""
Action RPC Server

JSON-RPC 2.0 style adapter exposing the catalog to external agents:

- ``initialize``: server info and capabilities
- ``tools/list``: actions visible in the current scope, named
  ``<scope>.<actionName>`` (``global`` when the action has no scope)
- ``tools/call``: ``{"name": ..., "arguments": {...}}``; the argument values
  are passed positionally to the ActionExecutor

Errors are returned as structured error objects, never raised.
Notifications (``notifications/*``) produce no response.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional, TextIO

from actionresolver.core.actions import GLOBAL_SCOPE, ActionDescriptor
from actionresolver.core.catalog import ActionCatalog
from actionresolver.core.execution.executor import ActionExecutor
from actionresolver.core.scope import ScopeProvider, StaticScopeProvider

logger = logging.getLogger("ActionResolver.RPCServer")

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
ACTION_NOT_FOUND = -1
ACTION_EXECUTION_FAILED = -2

SEPARATOR = "."


def qualified_name(action: ActionDescriptor) -> str:
    """``<scope>.<actionName>``, with ``global`` for unscoped actions."""
    return f"{action.scope or GLOBAL_SCOPE}{SEPARATOR}{action.name}"


def error_response(
    request_id: Any, code: int, message: str, data: Any = None
) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error}


def result_response(request_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


class ActionRPCServer:
    """
    Request/response adapter over an ActionCatalog and ActionExecutor.

    Args:
        catalog: Catalog to expose
        executor: Executor for ``tools/call`` (a default one when None)
        scope_provider: Scope used to filter ``tools/list``
        name: Server name reported by ``initialize``
        version: Server version reported by ``initialize``
    """

    def __init__(
        self,
        catalog: ActionCatalog,
        executor: Optional[ActionExecutor] = None,
        scope_provider: Optional[ScopeProvider] = None,
        name: str = "actionresolver",
        version: str = "1.0.0",
    ):
        self.catalog = catalog
        self.executor = executor or ActionExecutor(route_resolver=catalog.route_for)
        self.scope_provider = scope_provider or StaticScopeProvider()
        self.name = name
        self.version = version

    async def handle(self, request: Any) -> Optional[Dict[str, Any]]:
        """
        Handle one decoded request.

        Returns:
            Response dict, or None for notifications
        """
        if not isinstance(request, dict) or not isinstance(request.get("method"), str):
            request_id = request.get("id") if isinstance(request, dict) else None
            return error_response(request_id, INVALID_REQUEST, "Invalid request")

        method = request["method"]
        request_id = request.get("id")
        params = request.get("params") or {}

        if method.startswith("notifications/"):
            logger.debug(f"Received notification: {method}")
            return None

        try:
            if method == "initialize":
                return self._initialize(request_id)
            if method == "tools/list":
                return self._list_actions(request_id)
            if method == "tools/call":
                return await self._call_action(request_id, params)
            return error_response(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")
        except Exception as e:
            logger.error(f"Error handling {method}: {e}", exc_info=True)
            return error_response(request_id, INTERNAL_ERROR, str(e) or "Internal error")

    async def handle_message(self, message: str) -> Optional[str]:
        """Handle one JSON-encoded request and return the encoded response."""
        try:
            request = json.loads(message)
        except json.JSONDecodeError as e:
            return json.dumps(error_response(None, PARSE_ERROR, f"Parse error: {e}"))
        response = await self.handle(request)
        if response is None:
            return None
        return json.dumps(response, default=str)

    def _initialize(self, request_id: Any) -> Dict[str, Any]:
        return result_response(request_id, {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": {"name": self.name, "version": self.version},
            "capabilities": {"tools": {}},
        })

    def _list_actions(self, request_id: Any) -> Dict[str, Any]:
        visible = self.catalog.resolve_for_context(self.scope_provider.get_current_scope())
        tools: List[Dict[str, Any]] = []
        for scope, actions in self.catalog.grouped_by_scope(visible).items():
            for action in actions:
                tools.append(self._describe(scope, action))
        return result_response(request_id, {"tools": tools})

    @staticmethod
    def _describe(scope: str, action: ActionDescriptor) -> Dict[str, Any]:
        return {
            "name": f"{scope}{SEPARATOR}{action.name}",
            "description": action.description or f"Action: {action.name}",
            "inputSchema": action.input_schema or {
                "type": "object",
                "properties": {},
                "required": [],
            },
            "annotations": {
                "container": scope,
                "id": action.id,
                "category": action.category,
                "elementId": action.element_id,
                "dangerLevel": action.danger_level.value if action.danger_level else None,
                "requiresApproval": action.effective_requires_approval,
                "examples": list(action.examples),
            },
        }

    def find_action(self, name: str) -> Optional[ActionDescriptor]:
        for action in self.catalog.all():
            if qualified_name(action) == name:
                return action
        return None

    async def _call_action(self, request_id: Any, params: Any) -> Dict[str, Any]:
        if not isinstance(params, dict):
            return error_response(request_id, INVALID_PARAMS, "Params must be an object")

        name = params.get("name")
        if not name or not isinstance(name, str):
            return error_response(request_id, INVALID_PARAMS, "Missing action name")
        scope, _, action_name = name.partition(SEPARATOR)
        if not scope or not action_name:
            return error_response(
                request_id,
                INVALID_PARAMS,
                f"Invalid action name format: {name}. Expected: scope.actionName",
            )

        arguments = params.get("arguments")
        if arguments is None:
            args: List[Any] = []
        elif isinstance(arguments, dict):
            args = list(arguments.values())
        elif isinstance(arguments, list):
            args = list(arguments)
        else:
            return error_response(request_id, INVALID_PARAMS, "Arguments must be an object or array")

        action = self.find_action(name)
        if action is None:
            return error_response(request_id, ACTION_NOT_FOUND, f"Action not found: {name}")

        outcome = await self.executor.execute(action, args)
        if not outcome.success:
            return error_response(
                request_id,
                ACTION_EXECUTION_FAILED,
                outcome.message or "Action execution failed",
                {"error": outcome.error, "elapsed_ms": outcome.elapsed_ms},
            )

        payload = {
            "success": True,
            "result": outcome.data,
            "elapsed_ms": outcome.elapsed_ms,
            "message": outcome.message,
        }
        return result_response(request_id, {
            "content": [{"type": "text", "text": json.dumps(payload, indent=2, default=str)}],
        })

    async def serve_stdio(
        self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None
    ) -> None:
        """
        Serve newline-delimited JSON requests until end of input.

        Logging goes to stderr; stdout carries responses only.
        """
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        loop = asyncio.get_running_loop()
        logger.info(f"Serving {self.name} v{self.version} on stdio")

        while True:
            # readline blocks, so it runs in a worker thread to keep the loop free
            line = await loop.run_in_executor(None, stdin.readline)
            if not line:
                break
            line = line.strip()
            if not line:
                continue
            response = await self.handle_message(line)
            if response is not None:
                stdout.write(response + "\n")
                stdout.flush()
        logger.info("Input closed; server stopped")
