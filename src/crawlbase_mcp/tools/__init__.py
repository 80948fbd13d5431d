"""MCP crawling tools and business logic.

This module provides the Crawlbase functionality exposed as MCP tools:
- crawl: Raw HTML content retrieval
- crawl_markdown: Main content extraction to Markdown
- crawl_screenshot: Page screenshot as an embedded image

The tools module follows a router -> service pattern:
- router.py: MCP tool definitions, credential resolution and registration
- service.py: Tool dispatch through request building, fetching and rendering
- postprocess.py: Conversion of upstream results into response content
"""

from crawlbase_mcp.tools.postprocess import (
    MAX_MARKDOWN_LENGTH,
    TRUNCATION_MARKER,
    NoScreenshot,
    ScreenshotFetched,
    ScreenshotFetchFailed,
    fetch_screenshot,
    render_markdown,
    render_raw_html,
    render_screenshot,
)
from crawlbase_mcp.tools.router import (
    crawl,
    crawl_markdown,
    crawl_screenshot,
    register_crawl_tools,
    request_credentials,
)
from crawlbase_mcp.tools.service import TOOL_NAMES, ToolDispatcher

__all__ = [
    # MCP tool functions
    "crawl",
    "crawl_markdown",
    "crawl_screenshot",
    # Registration
    "register_crawl_tools",
    "request_credentials",
    # Service
    "ToolDispatcher",
    "TOOL_NAMES",
    # Post-processing
    "render_raw_html",
    "render_markdown",
    "render_screenshot",
    "fetch_screenshot",
    "NoScreenshot",
    "ScreenshotFetched",
    "ScreenshotFetchFailed",
    "MAX_MARKDOWN_LENGTH",
    "TRUNCATION_MARKER",
]
