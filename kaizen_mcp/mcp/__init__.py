"""
Kaizen MCP stdio server: framing, JSON-RPC envelopes and tool dispatch.
"""

from kaizen_mcp.mcp.server import McpServer
from kaizen_mcp.mcp.state import ServerContext

__all__ = ["McpServer", "ServerContext"]
