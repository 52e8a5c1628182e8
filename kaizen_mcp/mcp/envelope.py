"""
JSON-RPC 2.0 envelopes exchanged over the MCP stdio transport.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import EnvelopeDecodeError
from .protocol import JSONRPC_VERSION


@dataclass(frozen=True)
class RpcError:
    """JSON-RPC error object."""
    code: int
    message: str
    data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        error: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RpcError":
        return cls(code=raw.get("code"), message=raw.get("message", ""), data=raw.get("data"))


@dataclass(frozen=True)
class Request:
    """
    Decoded JSON-RPC request.

    ``has_id`` is False only when the ``id`` member is absent. Such a request is
    a notification and is never answered; ``"id": null`` still expects a
    response.
    """
    method: str
    params: Any = None
    id: Any = None
    has_id: bool = False
    jsonrpc: str = JSONRPC_VERSION

    @property
    def is_notification(self) -> bool:
        return not self.has_id


@dataclass(frozen=True)
class Response:
    """JSON-RPC response carrying exactly one of ``result`` or ``error``."""
    id: Any
    result: Any = None
    error: Optional[RpcError] = None
    jsonrpc: str = field(default=JSONRPC_VERSION)

    def __post_init__(self):
        if (self.error is None) == (self.result is None):
            raise ValueError("a response carries exactly one of a result or an error")

    @classmethod
    def success(cls, msg_id: Any, result: Any) -> "Response":
        return cls(id=msg_id, result={} if result is None else result)

    @classmethod
    def failure(cls, msg_id: Any, code: int, message: str, data: Any = None) -> "Response":
        return cls(id=msg_id, error=RpcError(code=code, message=message, data=data))

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            message["error"] = self.error.to_dict()
        else:
            message["result"] = self.result
        return message


def _load_object(payload: bytes) -> Dict[str, Any]:
    try:
        message = json.loads(payload.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise EnvelopeDecodeError(f"payload is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise EnvelopeDecodeError(f"payload is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise EnvelopeDecodeError("payload is nested too deeply") from exc
    if not isinstance(message, dict):
        raise EnvelopeDecodeError(f"expected a JSON object, got {type(message).__name__}")
    return message


def decode_request(payload: bytes) -> Request:
    """Decode one frame payload into a Request."""
    message = _load_object(payload)

    method = message.get("method", "")
    if not isinstance(method, str):
        raise EnvelopeDecodeError("method must be a string")
    jsonrpc = message.get("jsonrpc", JSONRPC_VERSION)
    if not isinstance(jsonrpc, str):
        raise EnvelopeDecodeError("jsonrpc must be a string")

    return Request(
        method=method,
        params=message.get("params"),
        id=message.get("id"),
        has_id="id" in message,
        jsonrpc=jsonrpc,
    )


def encode_response(response: Response) -> bytes:
    """
    Serialize a Response as compact UTF-8 JSON.

    Strings holding lone surrogates cannot be written as UTF-8; such responses
    fall back to ASCII escapes, which carry the same JSON value.
    """
    message = response.to_dict()
    try:
        return json.dumps(message, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError:
        return json.dumps(message, separators=(",", ":")).encode("ascii")


def decode_response(payload: bytes) -> Response:
    """Decode a response payload, as written by ``encode_response``."""
    message = _load_object(payload)
    raw_error = message.get("error")
    if isinstance(raw_error, dict):
        return Response(id=message.get("id"), error=RpcError.from_dict(raw_error))
    if message.get("result") is None:
        raise EnvelopeDecodeError("response carries neither a result nor an error")
    return Response(id=message.get("id"), result=message["result"])
