"""MCP tool definitions for Crawlbase crawling."""

import logging
from typing import Annotated, Any, Literal

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, ImageContent, TextContent
from pydantic import Field

from crawlbase_mcp.config import JS_TOKEN_HEADER, TOKEN_HEADER, Credentials, get_default_credentials
from crawlbase_mcp.models.content import ImageBlock, ToolResponse
from crawlbase_mcp.tools.service import CRAWL, CRAWL_MARKDOWN, CRAWL_SCREENSHOT, ToolDispatcher

logger = logging.getLogger(__name__)

DeviceArg = Annotated[
    Literal["desktop", "mobile", "tablet"] | None,
    Field(description="Device type for crawling"),
]


def request_credentials(ctx: Context | None) -> Credentials:
    """Resolve the credentials for the current call.

    Tokens sent in the ``X-Crawlbase-Token`` / ``X-Crawlbase-JS-Token``
    headers (HTTP transport only) override the process defaults.
    """
    defaults = get_default_credentials()
    if ctx is None:
        return defaults

    try:
        request = ctx.request_context.request
    except (AttributeError, LookupError, ValueError):
        return defaults
    if request is None:
        return defaults

    token = request.headers.get(TOKEN_HEADER)
    js_token = request.headers.get(JS_TOKEN_HEADER)
    if not token and not js_token:
        return defaults

    logger.debug("Using Crawlbase tokens from HTTP headers")
    return defaults.with_overrides(token=token, js_token=js_token)


def to_mcp_content(response: ToolResponse) -> list[TextContent | ImageContent]:
    """Convert a ToolResponse into MCP content blocks."""
    content: list[TextContent | ImageContent] = []
    for block in response.content:
        if isinstance(block, ImageBlock):
            content.append(ImageContent(type="image", data=block.data, mimeType=block.mime_type))
        else:
            content.append(TextContent(type="text", text=block.text))
    return content


async def dispatch(name: str, arguments: dict[str, Any], ctx: Context | None) -> CallToolResult:
    """Run a tool through a fresh dispatcher bound to the caller's credentials.

    Failures come back as a result flagged ``isError`` whose text is the
    tool's own message, with no framework prefix.
    """
    dispatcher = ToolDispatcher(request_credentials(ctx))
    try:
        response = await dispatcher.call_tool(name, arguments)
    finally:
        dispatcher.close()

    return CallToolResult(content=to_mcp_content(response), isError=response.is_error)


def _arguments(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value is not None}


async def crawl(
    ctx: Context,
    url: Annotated[str, Field(description="The URL to crawl")],
    user_agent: Annotated[str | None, Field(description="Custom user agent string")] = None,
    device: DeviceArg = None,
    country: Annotated[str | None, Field(description="Country code for geo-targeting")] = None,
    ajax_wait: Annotated[int | None, Field(description="Wait time for AJAX requests in milliseconds")] = None,
    page_wait: Annotated[int | None, Field(description="Wait time for page load in milliseconds")] = None,
    screenshot: Annotated[bool, Field(description="Take a screenshot of the page")] = False,
) -> CallToolResult:
    """Crawl a URL and return HTML content."""
    arguments = _arguments(
        url=url,
        user_agent=user_agent,
        device=device,
        country=country,
        ajax_wait=ajax_wait,
        page_wait=page_wait,
        screenshot=screenshot,
    )
    return await dispatch(CRAWL, arguments, ctx)


async def crawl_markdown(
    ctx: Context,
    url: Annotated[str, Field(description="The URL to crawl")],
    user_agent: Annotated[str | None, Field(description="Custom user agent string")] = None,
    device: DeviceArg = None,
) -> CallToolResult:
    """Crawl a URL and extract clean markdown content."""
    return await dispatch(CRAWL_MARKDOWN, _arguments(url=url, user_agent=user_agent, device=device), ctx)


async def crawl_screenshot(
    ctx: Context,
    url: Annotated[str, Field(description="The URL to screenshot")],
    device: DeviceArg = None,
    page_wait: Annotated[int | None, Field(description="Wait time before taking screenshot")] = None,
    mode: Annotated[
        Literal["fullpage", "viewport"] | None,
        Field(description="Screenshot mode (default: fullpage)"),
    ] = None,
    width: Annotated[int | None, Field(description="Maximum width in pixels (only with mode=viewport)")] = None,
    height: Annotated[int | None, Field(description="Maximum height in pixels (only with mode=viewport)")] = None,
) -> CallToolResult:
    """Take a screenshot of a webpage."""
    arguments = _arguments(url=url, device=device, page_wait=page_wait, mode=mode, width=width, height=height)
    return await dispatch(CRAWL_SCREENSHOT, arguments, ctx)


def register_crawl_tools(mcp: FastMCP) -> None:
    """Register the crawling tools on the MCP server.

    Args:
        mcp: FastMCP server instance to register tools on
    """
    mcp.tool(structured_output=False)(crawl)
    mcp.tool(structured_output=False)(crawl_markdown)
    mcp.tool(structured_output=False)(crawl_screenshot)
