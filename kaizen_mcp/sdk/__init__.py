from kaizen_mcp.sdk.client import KaizenClient
from kaizen_mcp.sdk.errors import (
    KaizenAPIError,
    KaizenConfigError,
    KaizenConnectionError,
    KaizenError,
    KaizenTimeoutError,
)

__all__ = [
    "KaizenClient",
    "KaizenError",
    "KaizenConfigError",
    "KaizenConnectionError",
    "KaizenTimeoutError",
    "KaizenAPIError",
]
