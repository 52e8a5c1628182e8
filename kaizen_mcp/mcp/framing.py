"""
Stdio framing for the MCP transport.

Inbound messages use either framing, detected per message:

- Content-Length framed JSON-RPC (LSP/MCP-style clients)::

      Content-Length: 42\\r\\n
      \\r\\n
      {"jsonrpc":"2.0","id":1,"method":"ping"}

- newline-delimited JSON, one object per line (local smoke tests)

Outbound messages are always Content-Length framed.
"""

import logging
from typing import BinaryIO, List, Optional

from .envelope import Response, encode_response
from .errors import FramingError, TransportClosedError, TruncatedFrameError

logger = logging.getLogger("Kaizen.mcp.framing")

CONTENT_LENGTH_HEADER = "content-length"
READ_CHUNK_SIZE = 1 << 20


def parse_content_length(headers: List[str]) -> int:
    """Return the positive Content-Length declared in a header block."""
    for header in headers:
        name, sep, value = header.partition(":")
        if not sep:
            continue
        if name.strip().lower() != CONTENT_LENGTH_HEADER:
            continue
        raw_length = value.strip()
        if not (raw_length.isascii() and raw_length.isdigit()) or int(raw_length) <= 0:
            raise FramingError(f"invalid Content-Length value: {raw_length!r}")
        return int(raw_length)
    raise FramingError("missing Content-Length header")


class FrameReader:
    """Extracts one message payload per call from a binary stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def next_frame(self) -> Optional[bytes]:
        """
        Read the next message payload.

        Returns None when the stream ends between messages or inside a header
        block. Raises FramingError when the stream holds a malformed header
        block or a truncated payload.
        """
        first_line = self.stream.readline()
        trimmed = first_line.strip()

        if not first_line.endswith(b"\n"):
            # End of stream reached before a line terminator.
            if not trimmed:
                return None
            if trimmed.startswith(b"{"):
                return trimmed
            logger.warning("Ignoring unterminated trailing input: %r", first_line[:64])
            return None

        if not trimmed:
            raise FramingError("received empty message")
        if trimmed.startswith(b"{"):
            return trimmed

        headers = [self._decode_header(first_line)]
        while True:
            line = self.stream.readline()
            if not line.endswith(b"\n"):
                logger.warning("Stream ended inside a header block: %r", headers)
                return None
            clean = self._decode_header(line)
            if not clean:
                break
            headers.append(clean)

        length = parse_content_length(headers)
        return self._read_exact(length)

    @staticmethod
    def _decode_header(line: bytes) -> str:
        return line.rstrip(b"\r\n").decode("latin-1")

    def _read_exact(self, length: int) -> bytes:
        chunks = []
        remaining = length
        while remaining > 0:
            chunk = self.stream.read(min(remaining, READ_CHUNK_SIZE))
            if not chunk:
                raise TruncatedFrameError(
                    f"failed to read payload: got {length - remaining}/{length} bytes"
                )
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)


def frame_bytes(body: bytes) -> bytes:
    """Prefix a message body with its Content-Length header block."""
    return b"Content-Length: " + str(len(body)).encode("ascii") + b"\r\n\r\n" + body


class FrameWriter:
    """Writes Content-Length framed responses to a binary stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def write_response(self, response: Response) -> None:
        """Serialize, frame and flush one response before returning."""
        framed = frame_bytes(encode_response(response))
        try:
            self.stream.write(framed)
            self.stream.flush()
        except (BrokenPipeError, OSError) as exc:
            logger.warning("MCP stdio transport closed while sending: %s", exc)
            raise TransportClosedError(f"failed to write response: {exc}") from exc
