import json
import time
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Type

from kaizen_mcp.sdk.errors import KaizenError

from .arguments import (
    AkumaExplainArguments,
    AkumaQueryArguments,
    AkumaSchemaArguments,
    EnzanBurnArguments,
    EnzanSummaryArguments,
    SozoGenerateArguments,
    SozoSchemasArguments,
    ToolArguments,
)
from .definitions import ToolName
from .envelope import RpcError
from .errors import ToolArgumentError
from .protocol import INVALID_PARAMS
from .state import ServerContext

logger = logging.getLogger("Kaizen.mcp.handlers")


@dataclass(frozen=True)
class ToolCall:
    """Decoded params of a tools/call request."""
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_params(cls, params: Any) -> "ToolCall":
        """Raise ValueError when params do not have the tools/call shape."""
        if not isinstance(params, dict):
            raise ValueError("params must be an object")
        name = params.get("name", "")
        if not isinstance(name, str):
            raise ValueError("name must be a string")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ValueError("arguments must be an object")
        return cls(name=name, arguments=arguments)


@dataclass(frozen=True)
class ToolResult:
    """
    Outcome of one tool call, always sent as a successful RPC result.

    A failed tool sets ``is_error`` and carries a readable message instead of
    structured data.
    """
    text: str
    data: Optional[Dict[str, Any]] = None
    is_error: bool = False

    @classmethod
    def ok(cls, data: Dict[str, Any]) -> "ToolResult":
        return cls(text=json.dumps(data, indent=2, ensure_ascii=False), data=data)

    @classmethod
    def failed(cls, message: str) -> "ToolResult":
        return cls(text=message or "tool call failed", is_error=True)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            result["isError"] = True
        else:
            result["structuredContent"] = self.data
        return result


ToolHandler = Callable[[ServerContext, Dict[str, Any], Optional[float]], Dict[str, Any]]


def _api_handler(contract: Type[ToolArguments]) -> ToolHandler:
    """Build a handler that validates ``contract`` and forwards it to the API."""

    def handle(ctx: ServerContext, arguments: Dict[str, Any], deadline: Optional[float]) -> Dict[str, Any]:
        parsed = contract.from_arguments(arguments)
        return ctx.client.execute(contract.verb, contract.path, parsed.to_payload(), deadline=deadline)

    handle.__name__ = f"handle_{contract.__name__}"
    return handle


TOOL_HANDLERS: Dict[ToolName, ToolHandler] = {
    ToolName.AKUMA_QUERY: _api_handler(AkumaQueryArguments),
    ToolName.AKUMA_EXPLAIN: _api_handler(AkumaExplainArguments),
    ToolName.AKUMA_SCHEMA: _api_handler(AkumaSchemaArguments),
    ToolName.ENZAN_SUMMARY: _api_handler(EnzanSummaryArguments),
    ToolName.ENZAN_BURN: _api_handler(EnzanBurnArguments),
    ToolName.SOZO_GENERATE: _api_handler(SozoGenerateArguments),
    ToolName.SOZO_SCHEMAS: _api_handler(SozoSchemasArguments),
}

_unhandled = set(ToolName) - set(TOOL_HANDLERS)
if _unhandled:
    raise RuntimeError(f"No handler registered for tools: {sorted(t.value for t in _unhandled)}")
del _unhandled


def run_tool(ctx: ServerContext, tool: ToolName, arguments: Dict[str, Any]) -> ToolResult:
    """Run one tool within the configured deadline, folding failures into the result."""
    started = time.monotonic()
    deadline = started + ctx.config.server.tool_call_timeout
    try:
        data = TOOL_HANDLERS[tool](ctx, arguments, deadline)
        result = ToolResult.ok(data)
    except ToolArgumentError as e:
        result = ToolResult.failed(str(e))
    except KaizenError as e:
        logger.warning("Tool '%s' failed: %s", tool.value, e)
        result = ToolResult.failed(str(e))

    elapsed_ms = (time.monotonic() - started) * 1000.0
    logger.info(
        "tools/call name=%s outcome=%s elapsed_ms=%.1f",
        tool.value,
        "tool_error" if result.is_error else "ok",
        elapsed_ms,
    )
    return result


def handle_tool_call(ctx: ServerContext, params: Any) -> Any:
    """
    Resolve and run a tools/call request.

    Returns the tool result document, or an RpcError when the call itself is
    malformed or names an unknown tool.
    """
    try:
        call = ToolCall.from_params(params)
    except ValueError as e:
        return RpcError(code=INVALID_PARAMS, message="invalid tool call params", data=str(e))

    tool = ToolName.lookup(call.name)
    if tool is None:
        return RpcError(code=INVALID_PARAMS, message="unknown tool", data=call.name)

    return run_tool(ctx, tool, call.arguments).to_dict()
