import logging
from typing import Any, BinaryIO, Dict, Optional

from .definitions import tool_definitions
from .envelope import Request, Response, RpcError, decode_request
from .errors import EnvelopeDecodeError
from .framing import FrameReader, FrameWriter
from .handlers import handle_tool_call
from .protocol import (
    INTERNAL_ERROR,
    METHOD_INITIALIZE,
    METHOD_NOT_FOUND,
    METHOD_PING,
    METHOD_TOOLS_CALL,
    METHOD_TOOLS_LIST,
    NOTIFICATION_METHODS,
    PROTOCOL_VERSION,
    SERVER_NAME,
    SERVER_VERSION,
)
from .state import ServerContext

logger = logging.getLogger("Kaizen.mcp.server")


def initialize_result() -> Dict[str, Any]:
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {
            "tools": {},
        },
        "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
    }


class McpServer:
    """
    Handles JSON-RPC communication over stdio, one request at a time.

    Each frame is decoded, dispatched and answered before the next frame is
    read. Framing and write failures propagate out of ``serve``; malformed
    individual messages are logged and skipped.
    """

    def __init__(self, ctx: ServerContext, stdin: BinaryIO, stdout: BinaryIO):
        self.ctx = ctx
        self.reader = FrameReader(stdin)
        self.writer = FrameWriter(stdout)

    def serve(self) -> None:
        """Run until the input stream ends."""
        while True:
            payload = self.reader.next_frame()
            if payload is None:
                logger.info("Input stream closed; stopping MCP server")
                return

            try:
                request = decode_request(payload)
            except EnvelopeDecodeError as exc:
                logger.warning("Dropping invalid JSON-RPC payload: %s", exc)
                continue

            response = self.dispatch(request)
            if response is not None:
                self.writer.write_response(response)

    def dispatch(self, request: Request) -> Optional[Response]:
        """Route one request. Returns None when no response must be sent."""
        if request.method in NOTIFICATION_METHODS:
            return None

        try:
            outcome = self._route(request)
        except Exception:
            logger.exception("Unexpected error while handling '%s'", request.method)
            outcome = RpcError(code=INTERNAL_ERROR, message="internal error")

        if request.is_notification:
            if isinstance(outcome, RpcError):
                logger.debug("Suppressing error for notification '%s': %s", request.method, outcome.message)
            return None

        if isinstance(outcome, RpcError):
            return Response(id=request.id, error=outcome)
        return Response.success(request.id, outcome)

    def _route(self, request: Request) -> Any:
        method = request.method
        if method == METHOD_INITIALIZE:
            return initialize_result()
        if method == METHOD_PING:
            return {}
        if method == METHOD_TOOLS_LIST:
            return {"tools": tool_definitions()}
        if method == METHOD_TOOLS_CALL:
            return handle_tool_call(self.ctx, request.params)
        return RpcError(code=METHOD_NOT_FOUND, message="method not found", data=method)
