"""JSON-RPC 2.0 message types and the transport interface used by the client."""

from __future__ import annotations

import abc
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Union

JSONRPC_VERSION = "2.0"

RequestId = Union[int, str]


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class JSONRPCRequest:
    """A request that expects a response carrying the same id."""

    id: RequestId
    method: str
    params: Any = None
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id, "method": self.method}
        if self.params is not None:
            data["params"] = self.params
        return data


@dataclass(frozen=True)
class JSONRPCNotification:
    """A one-way message without an id."""

    method: str
    params: Any = None
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "method": self.method}
        if self.params is not None:
            data["params"] = self.params
        return data

    @classmethod
    def from_dict(cls, data: Any) -> JSONRPCNotification:
        data = _require_mapping(data, "notification")
        method = data.get("method")
        if not isinstance(method, str):
            raise ValueError("notification has no method")
        return cls(
            method=method,
            params=data.get("params"),
            jsonrpc=data.get("jsonrpc", JSONRPC_VERSION),
        )


@dataclass(frozen=True)
class JSONRPCError:
    """The error member of a failed response."""

    code: int
    message: str
    data: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> JSONRPCError:
        data = _require_mapping(data, "error")
        code = data.get("code", 0)
        if not isinstance(code, int) or isinstance(code, bool):
            raise ValueError("error code must be an integer")
        message = data.get("message", "")
        if not isinstance(message, str):
            raise ValueError("error message must be a string")
        return cls(code=code, message=message, data=data.get("data"))


@dataclass(frozen=True)
class JSONRPCResponse:
    """A response to a request: either a result or an error."""

    id: RequestId | None
    result: Any = None
    error: JSONRPCError | None = None
    jsonrpc: str = JSONRPC_VERSION

    @classmethod
    def from_dict(cls, data: Any) -> JSONRPCResponse:
        data = _require_mapping(data, "response")
        raw_error = data.get("error")
        error = JSONRPCError.from_dict(raw_error) if raw_error is not None else None
        return cls(
            id=data.get("id"),
            result=data.get("result"),
            error=error,
            jsonrpc=data.get("jsonrpc", JSONRPC_VERSION),
        )


NotificationHandler = Callable[[JSONRPCNotification], None]


class Transport(abc.ABC):
    """A bidirectional channel to an MCP server."""

    @abc.abstractmethod
    def start(self) -> None:
        """Open the connection."""

    @abc.abstractmethod
    def close(self) -> None:
        """Close the connection and release its resources."""

    @abc.abstractmethod
    def send_request(self, request: JSONRPCRequest) -> JSONRPCResponse:
        """Send a request and wait for its response."""

    @abc.abstractmethod
    def send_notification(self, notification: JSONRPCNotification) -> None:
        """Send a notification; no response is expected."""

    @abc.abstractmethod
    def set_notification_handler(self, handler: NotificationHandler) -> None:
        """Register the callable that receives server notifications."""

    @property
    def session_id(self) -> str:
        """The session id, or an empty string for transports without sessions."""
        return ""