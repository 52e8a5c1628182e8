"""
Kaizen MCP: stdio bridge between MCP clients and the Kaizen API
"""

from kaizen_mcp.sdk import (
    KaizenAPIError,
    KaizenClient,
    KaizenConnectionError,
    KaizenError,
)
from kaizen_mcp.version import __version__

__all__ = [
    "__version__",
    "KaizenClient",
    "KaizenError",
    "KaizenConnectionError",
    "KaizenAPIError",
]
