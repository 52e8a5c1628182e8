"""
Kaizen MCP Configuration
------------------------
Loads the bridge configuration from environment variables.

Only the API credential is required for tool calls; a missing key does not
prevent startup, it makes every tool call fail with a readable message.
"""

import os
import logging
from typing import Optional
from pydantic import BaseModel, Field

logger = logging.getLogger("Kaizen.Config")

DEFAULT_API_BASE_URL = "http://localhost:8080"
DEFAULT_API_TIMEOUT_SEC = 60.0
DEFAULT_TOOL_CALL_TIMEOUT_SEC = 60.0
DEFAULT_LOG_LEVEL = "INFO"


def _get_env(name: str, fallback: str = "") -> str:
    value = os.environ.get(name, "").strip()
    return value or fallback


def _parse_positive_float_env(name: str, default: float) -> float:
    raw = _get_env(name)
    if not raw:
        return default
    try:
        value = float(raw)
        if value <= 0 or value != value or value == float("inf"):
            raise ValueError
        return value
    except ValueError:
        logger.warning(
            "Invalid %s value '%s'; expected positive float. Using %.1f.",
            name,
            raw,
            default,
        )
        return default


class ApiConfig(BaseModel):
    """Kaizen REST API connection settings."""
    base_url: str = DEFAULT_API_BASE_URL
    api_key: str = ""
    timeout: float = DEFAULT_API_TIMEOUT_SEC


class ServerConfig(BaseModel):
    """MCP stdio server settings."""
    tool_call_timeout: float = DEFAULT_TOOL_CALL_TIMEOUT_SEC


class LoggingConfig(BaseModel):
    """Log destination. stdout is reserved for the protocol."""
    level: str = DEFAULT_LOG_LEVEL
    file: Optional[str] = None


class KaizenConfig(BaseModel):
    """Root configuration for the Kaizen MCP bridge."""
    api: ApiConfig = Field(default_factory=ApiConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "KaizenConfig":
        """
        Load configuration from environment variables.

        Environment variables override defaults:
        - KAIZEN_API_BASE_URL: Kaizen API base URL
        - KAIZEN_API_KEY: Bearer credential for the Kaizen API
        - KAIZEN_API_TIMEOUT_SEC: HTTP timeout per request
        - KAIZEN_MCP_TOOL_CALL_TIMEOUT_SEC: Wall-clock budget per tool call
        - KAIZEN_MCP_LOG_LEVEL: Logging level name
        - KAIZEN_MCP_LOG_FILE: Append logs to this file instead of stderr
        """
        return cls(
            api=ApiConfig(
                base_url=_get_env("KAIZEN_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
                api_key=_get_env("KAIZEN_API_KEY"),
                timeout=_parse_positive_float_env("KAIZEN_API_TIMEOUT_SEC", DEFAULT_API_TIMEOUT_SEC),
            ),
            server=ServerConfig(
                tool_call_timeout=_parse_positive_float_env(
                    "KAIZEN_MCP_TOOL_CALL_TIMEOUT_SEC",
                    DEFAULT_TOOL_CALL_TIMEOUT_SEC,
                ),
            ),
            logging=LoggingConfig(
                level=_get_env("KAIZEN_MCP_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
                file=_get_env("KAIZEN_MCP_LOG_FILE") or None,
            ),
        )
