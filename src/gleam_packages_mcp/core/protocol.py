"""JSON-RPC 2.0 dispatcher implementing the MCP method and tool routing contract.

Transport-level failures (a body that is not JSON) are reported as plain HTTP
statuses; everything after that is a JSON-RPC envelope with HTTP 200, except
the ``notifications/initialized`` notification which gets an empty 204.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from gleam_packages_mcp.__version__ import __version__
from gleam_packages_mcp.core.errors import (
    FetchError,
    GleamPackagesError,
    InterfaceDecodeError,
    NotFoundError,
    PackageDecodeError,
    ToolArgumentError,
)
from gleam_packages_mcp.core.tools import PACKAGES_RESOURCE, TOOLS, TOOLS_BY_NAME, PackageDocsService

logger = logging.getLogger(__name__)

MCP_VERSION = "2024-11-05"
SERVER_NAME = "gleam-packages-mcp"
NOTIFICATION_ID = "notification"


class JSONRPCErrorCode(Enum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


@dataclass(frozen=True)
class HttpReply:
    """What the transport should send back: status, body and content type."""

    status_code: int
    body: str = ""
    media_type: str = "application/json"
    headers: dict[str, str] = field(default_factory=dict)


class JSONRPCError(Exception):
    def __init__(self, code: JSONRPCErrorCode, message: str, data: Any = None) -> None:
        self.code = code
        self.message = message
        self.data = data
        super().__init__(message)

    def to_json(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


def normalize_id(raw: Any) -> str:
    """Coerce a request id to a string; absent ids become ``"notification"``."""
    if raw is None:
        return NOTIFICATION_ID
    if isinstance(raw, bool):
        raise JSONRPCError(JSONRPCErrorCode.INVALID_REQUEST, "Invalid Request: id must be a string or number")
    if isinstance(raw, str):
        return raw
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, float):
        return str(int(raw)) if raw.is_integer() else repr(raw)
    raise JSONRPCError(JSONRPCErrorCode.INVALID_REQUEST, "Invalid Request: id must be a string or number")


def success(message_id: str, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": message_id, "result": result}


def failure(message_id: str | None, error: JSONRPCError) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": message_id, "error": error.to_json()}


def _execution_message(exc: GleamPackagesError) -> str:
    if isinstance(exc, NotFoundError):
        return f"Not found: {exc.url}"
    if isinstance(exc, FetchError):
        return f"Failed to fetch {exc.url}: {exc.kind} error{': ' + exc.detail if exc.detail else ''}"
    if isinstance(exc, (InterfaceDecodeError, PackageDecodeError)):
        return f"Failed to decode response: {exc}"
    return str(exc)


class MCPDispatcher:
    """Routes one JSON-RPC request at a time; holds no per-request state."""

    def __init__(self, service: PackageDocsService, logger_instance: logging.Logger | None = None) -> None:
        self.service = service
        self.logger = logger_instance or logger
        self._methods = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "resources/list": self._resources_list,
            "resources/read": self._resources_read,
        }

    async def handle_body(self, body: str | bytes) -> HttpReply:
        """Handle a raw HTTP request body."""
        try:
            message = json.loads(body)
        except (ValueError, RecursionError):
            self.logger.warning("Rejected request body that is not valid JSON")
            return HttpReply(status_code=400, body="Invalid JSON", media_type="text/plain")

        response = await self.handle_message(message)
        if response is None:
            return HttpReply(status_code=204)
        return HttpReply(status_code=200, body=json.dumps(response))

    async def handle_message(self, message: Any) -> dict[str, Any] | None:
        """Handle a decoded JSON-RPC message; returns ``None`` for ``notifications/initialized``."""
        message_id: str | None = None
        try:
            method, message_id, params = self._parse_envelope(message)
            if method == "notifications/initialized":
                return None
            handler = self._methods.get(method)
            if handler is None:
                raise JSONRPCError(JSONRPCErrorCode.METHOD_NOT_FOUND, f"Method not found: {method}")
            self.logger.debug("Dispatching %s (id=%s)", method, message_id)
            return success(message_id, await handler(params))
        except JSONRPCError as exc:
            return failure(message_id, exc)

    def _parse_envelope(self, message: Any) -> tuple[str, str, Any]:
        if not isinstance(message, dict):
            raise JSONRPCError(JSONRPCErrorCode.INVALID_REQUEST, "Invalid Request: expected a JSON object")
        message_id = normalize_id(message.get("id"))
        if message.get("jsonrpc") != "2.0":
            raise JSONRPCError(JSONRPCErrorCode.INVALID_REQUEST, "Invalid Request: jsonrpc must be \"2.0\"")
        method = message.get("method")
        if not isinstance(method, str):
            raise JSONRPCError(JSONRPCErrorCode.INVALID_REQUEST, "Invalid Request: method must be a string")
        return method, message_id, message.get("params")

    # -- methods --

    async def _initialize(self, _params: Any) -> dict[str, Any]:
        return {
            "protocolVersion": MCP_VERSION,
            "capabilities": {"tools": {}, "resources": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    async def _tools_list(self, _params: Any) -> dict[str, Any]:
        return {"tools": [spec.definition() for spec in TOOLS]}

    async def _tools_call(self, params: Any) -> dict[str, Any]:
        if (
            not isinstance(params, dict)
            or not isinstance(params.get("name"), str)
            or not isinstance(params.get("arguments"), dict)
        ):
            raise JSONRPCError(JSONRPCErrorCode.INVALID_PARAMS, "Invalid params for tools/call")
        name = params["name"]
        spec = TOOLS_BY_NAME.get(name)
        if spec is None:
            raise JSONRPCError(JSONRPCErrorCode.INVALID_PARAMS, f"Unknown tool: {name}")
        try:
            result = await self.service.call(spec, params["arguments"])
        except ToolArgumentError as exc:
            raise JSONRPCError(JSONRPCErrorCode.INVALID_PARAMS, str(exc)) from exc
        except GleamPackagesError as exc:
            self.logger.warning("Tool %s failed: %s", name, exc)
            raise JSONRPCError(JSONRPCErrorCode.INTERNAL_ERROR, _execution_message(exc)) from exc
        except Exception as exc:
            self.logger.exception("Unexpected error in tool %s", name)
            raise JSONRPCError(JSONRPCErrorCode.INTERNAL_ERROR, f"Internal error: {exc}") from exc
        return result.to_json()

    async def _resources_list(self, _params: Any) -> dict[str, Any]:
        return {"resources": [PACKAGES_RESOURCE]}

    async def _resources_read(self, params: Any) -> dict[str, Any]:
        if not isinstance(params, dict) or not isinstance(params.get("uri"), str):
            raise JSONRPCError(JSONRPCErrorCode.INVALID_PARAMS, "Invalid params for resources/read")
        uri = params["uri"]
        if uri != PACKAGES_RESOURCE["uri"]:
            raise JSONRPCError(JSONRPCErrorCode.INVALID_PARAMS, f"Unknown resource: {uri}")
        try:
            packages = await self.service.read_packages_resource()
        except GleamPackagesError as exc:
            self.logger.warning("Reading %s failed: %s", uri, exc)
            raise JSONRPCError(JSONRPCErrorCode.INTERNAL_ERROR, _execution_message(exc)) from exc
        except Exception as exc:
            self.logger.exception("Unexpected error reading %s", uri)
            raise JSONRPCError(JSONRPCErrorCode.INTERNAL_ERROR, f"Internal error: {exc}") from exc
        return {
            "contents": [
                {
                    "uri": uri,
                    "mimeType": PACKAGES_RESOURCE["mimeType"],
                    "text": json.dumps({"packages": packages}),
                }
            ]
        }
