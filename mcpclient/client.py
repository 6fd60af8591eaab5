"""An MCP client that speaks JSON-RPC over a pluggable transport."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Mapping
from typing import Any

from .protocol import (
    JSONRPC_VERSION,
    JSONRPCNotification,
    JSONRPCRequest,
    NotificationHandler,
    Transport,
)


class ClientError(Exception):
    """Base class for client failures."""


class NotInitializedError(ClientError):
    """A request was made before the session was initialized."""


class TransportError(ClientError):
    """The transport failed to deliver a message."""


class ServerError(ClientError):
    """The server answered a request with a JSON-RPC error."""

    def __init__(self, message: str, code: int = 0, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data


def _paginated_params(cursor: str | None) -> dict[str, Any]:
    return {"cursor": cursor} if cursor else {}


class Client:
    """Client side of an MCP session over a transport."""

    def __init__(
        self,
        transport: Transport | None,
        *,
        client_capabilities: Mapping[str, Any] | None = None,
        session: bool = False,
    ) -> None:
        self._transport = transport
        self._initialized = session
        self._handlers: list[NotificationHandler] = []
        self._handlers_lock = threading.Lock()
        self._ids = itertools.count(1)
        self._ids_lock = threading.Lock()
        self._client_capabilities: dict[str, Any] = dict(client_capabilities or {})
        self._server_capabilities: dict[str, Any] = {}

    def __enter__(self) -> Client:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def start(self) -> None:
        """Open the transport and begin dispatching notifications."""
        if self._transport is None:
            raise ClientError("transport is nil")
        self._transport.start()
        self._transport.set_notification_handler(self._dispatch)

    def close(self) -> None:
        """Close the underlying transport."""
        if self._transport is None:
            raise ClientError("transport is nil")
        self._transport.close()

    def on_notification(self, handler: NotificationHandler) -> None:
        """Register a handler; handlers run in the order they were added."""
        with self._handlers_lock:
            self._handlers.append(handler)

    def _dispatch(self, notification: JSONRPCNotification) -> None:
        with self._handlers_lock:
            handlers = list(self._handlers)
        for handler in handlers:
            handler(notification)

    def _next_id(self) -> int:
        with self._ids_lock:
            return next(self._ids)

    def _send_request(self, method: str, params: Any) -> Any:
        if not self._initialized and method != "initialize":
            raise NotInitializedError("client not initialized")
        if self._transport is None:
            raise ClientError("transport is nil")
        request = JSONRPCRequest(id=self._next_id(), method=method, params=params)
        try:
            response = self._transport.send_request(request)
        except ClientError:
            raise
        except Exception as exc:
            raise TransportError(f"transport error: {exc}") from exc
        if response.error is not None:
            raise ServerError(response.error.message, response.error.code, response.error.data)
        return response.result

    def _request_object(self, method: str, params: Any) -> dict[str, Any]:
        result = self._send_request(method, params)
        if not isinstance(result, Mapping):
            raise ClientError(
                f"failed to unmarshal response: expected an object, got {type(result).__name__}"
            )
        return dict(result)

    def initialize(
        self,
        protocol_version: str,
        client_info: Mapping[str, Any],
        capabilities: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Negotiate the session with the server and return its result."""
        params = {
            "protocolVersion": protocol_version,
            "clientInfo": dict(client_info),
            "capabilities": dict(capabilities or {}),
        }
        result = self._request_object("initialize", params)
        capabilities_result = result.get("capabilities") or {}
        self._server_capabilities = dict(capabilities_result)

        notification = JSONRPCNotification(
            method="notifications/initialized", jsonrpc=JSONRPC_VERSION
        )
        try:
            self._transport.send_notification(notification)
        except Exception as exc:
            raise TransportError(f"failed to send initialized notification: {exc}") from exc

        self._initialized = True
        return result

    def ping(self) -> None:
        self._send_request("ping", None)

    def _list_page(self, method: str, cursor: str | None) -> dict[str, Any]:
        return self._request_object(method, _paginated_params(cursor))

    def _list_all(self, method: str, key: str, cursor: str | None) -> dict[str, Any]:
        result = self._list_page(method, cursor)
        items = list(result.get(key) or [])
        next_cursor = result.get("nextCursor") or ""
        while next_cursor:
            page = self._list_page(method, next_cursor)
            items.extend(page.get(key) or [])
            next_cursor = page.get("nextCursor") or ""
        result[key] = items
        result.pop("nextCursor", None)
        return result

    def list_resources_by_page(self, cursor: str | None = None) -> dict[str, Any]:
        return self._list_page("resources/list", cursor)

    def list_resources(self, cursor: str | None = None) -> dict[str, Any]:
        return self._list_all("resources/list", "resources", cursor)

    def list_resource_templates_by_page(self, cursor: str | None = None) -> dict[str, Any]:
        return self._list_page("resources/templates/list", cursor)

    def list_resource_templates(self, cursor: str | None = None) -> dict[str, Any]:
        return self._list_all("resources/templates/list", "resourceTemplates", cursor)

    def read_resource(self, uri: str) -> dict[str, Any]:
        return self._request_object("resources/read", {"uri": uri})

    def subscribe(self, uri: str) -> None:
        self._send_request("resources/subscribe", {"uri": uri})

    def unsubscribe(self, uri: str) -> None:
        self._send_request("resources/unsubscribe", {"uri": uri})

    def list_prompts_by_page(self, cursor: str | None = None) -> dict[str, Any]:
        return self._list_page("prompts/list", cursor)

    def list_prompts(self, cursor: str | None = None) -> dict[str, Any]:
        return self._list_all("prompts/list", "prompts", cursor)

    def get_prompt(self, name: str, arguments: Mapping[str, str] | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"name": name}
        if arguments:
            params["arguments"] = dict(arguments)
        return self._request_object("prompts/get", params)

    def list_tools_by_page(self, cursor: str | None = None) -> dict[str, Any]:
        return self._list_page("tools/list", cursor)

    def list_tools(self, cursor: str | None = None) -> dict[str, Any]:
        return self._list_all("tools/list", "tools", cursor)

    def call_tool(self, name: str, arguments: Any = None) -> dict[str, Any]:
        params: dict[str, Any] = {"name": name}
        if arguments:
            params["arguments"] = arguments
        return self._request_object("tools/call", params)

    def set_level(self, level: str) -> None:
        self._send_request("logging/setLevel", {"level": str(level)})

    def complete(self, ref: Mapping[str, Any], argument: Mapping[str, Any]) -> dict[str, Any]:
        params = {"ref": dict(ref), "argument": dict(argument)}
        return self._request_object("completion/complete", params)

    @property
    def transport(self) -> Transport | None:
        return self._transport

    @property
    def server_capabilities(self) -> dict[str, Any]:
        return self._server_capabilities

    @property
    def client_capabilities(self) -> dict[str, Any]:
        return self._client_capabilities

    @property
    def session_id(self) -> str:
        if self._transport is None:
            return ""
        return self._transport.session_id

    @property
    def is_initialized(self) -> bool:
        return self._initialized