"""
Kaizen MCP CLI: runs the stdio server.

Usage:
    kaizen-mcp [--log-level LEVEL] [--log-file PATH]
    python -m kaizen_mcp --version

Configuration comes from the environment (see ``KaizenConfig.from_env``).
stdout carries the protocol, so logs go to stderr or to ``--log-file``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from kaizen_mcp.core.config import KaizenConfig
from kaizen_mcp.mcp.errors import TransportError
from kaizen_mcp.mcp.protocol import SERVER_NAME
from kaizen_mcp.mcp.server import McpServer
from kaizen_mcp.mcp.state import ServerContext
from kaizen_mcp.version import __version__

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("Kaizen")


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    if log_file:
        logging.basicConfig(level=numeric_level, format=LOG_FORMAT, filename=log_file, filemode="a")
    else:
        logging.basicConfig(level=numeric_level, format=LOG_FORMAT, stream=sys.stderr)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kaizen-mcp",
        description="MCP stdio server exposing Kaizen tools (Akuma, Enzan, Sozo).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="Override KAIZEN_MCP_LOG_LEVEL.")
    parser.add_argument("--log-file", default=None, help="Override KAIZEN_MCP_LOG_FILE.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    config = KaizenConfig.from_env()
    if args.log_level:
        config.logging.level = args.log_level.upper()
    if args.log_file:
        config.logging.file = args.log_file
    configure_logging(config.logging.level, config.logging.file)

    try:
        ctx = ServerContext.from_config(config)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    logger.info("Starting MCP server %s, api_base_url=%s", SERVER_NAME, ctx.client.base_url)
    if not ctx.client.api_key:
        logger.warning("KAIZEN_API_KEY is not set; tool calls will fail until it is configured.")

    server = McpServer(ctx, sys.stdin.buffer, sys.stdout.buffer)
    try:
        server.serve()
    except TransportError as exc:
        logger.error("MCP server stopped with error: %s", exc)
        return 1
    finally:
        ctx.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
