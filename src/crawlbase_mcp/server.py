"""MCP server exposing the Crawlbase Crawling API as tools."""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from crawlbase_mcp.config import DEFAULT_HOST, DEFAULT_PORT, get_default_credentials
from crawlbase_mcp.tools import register_crawl_tools

logger = logging.getLogger(__name__)

# Stateless mode handles every HTTP request independently, without an
# initialize handshake or session tracking
mcp = FastMCP(
    "Crawlbase MCP",
    instructions=(
        "Crawl webpages through the Crawlbase API. Returns raw HTML, "
        "clean markdown of the main content, or a screenshot of the page."
    ),
    stateless_http=True,
)

register_crawl_tools(mcp)


@mcp.custom_route("/health", methods=["GET"])
async def health_check(request: Request) -> JSONResponse:
    """Liveness endpoint.

    Returns:
        JSONResponse with status: ok
    """
    return JSONResponse({"status": "ok"})


def run_server(transport: str = "stdio", host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Run the MCP server.

    Args:
        transport: Transport type ('stdio', 'streamable-http' or 'sse')
        host: Host to bind to for HTTP transports (default: 0.0.0.0)
        port: Port to bind to for HTTP transports (default: 3000)
    """
    credentials = get_default_credentials()
    logger.debug(f"Default Crawlbase token lengths: {credentials.describe()}")

    mcp.settings.host = host
    mcp.settings.port = port

    if transport != "stdio":
        logger.info(f"Crawlbase MCP server running at http://{host}:{port}{mcp.settings.streamable_http_path}")

    mcp.run(transport=transport)


if __name__ == "__main__":
    run_server()
