"""
Kaizen MCP transport and dispatch exceptions.
"""


class TransportError(Exception):
    """Stream-level failure. Terminates the serve loop."""


class FramingError(TransportError):
    """The input stream does not hold a well-formed frame."""


class TruncatedFrameError(FramingError):
    """The stream ended before the declared payload was read."""


class TransportClosedError(TransportError):
    """The output stream was closed while writing a response."""


class EnvelopeDecodeError(ValueError):
    """A frame payload is not a decodable JSON-RPC message."""


class ToolArgumentError(ValueError):
    """A tool call is missing a required argument."""
