"""Main entry points for the Crawlbase MCP server."""

from __future__ import annotations

import logging
import sys

from crawlbase_mcp.config import configure_logging, get_host, get_port
from crawlbase_mcp.server import run_server

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the server; transport, host and port may be given as arguments."""
    configure_logging()

    transport = "stdio"
    host = get_host()
    port = get_port()

    if len(sys.argv) > 1:
        transport = sys.argv[1]
    if len(sys.argv) > 2:
        host = sys.argv[2]
    if len(sys.argv) > 3:
        port = int(sys.argv[3])

    logger.info(f"Starting Crawlbase MCP server with {transport} transport")
    run_server(transport=transport, host=host, port=port)


def main_http() -> None:
    """Run the server over streamable HTTP on MCP_HOST:MCP_PORT."""
    configure_logging()
    run_server(transport="streamable-http", host=get_host(), port=get_port())


if __name__ == "__main__":
    main()
