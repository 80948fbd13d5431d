"""Tool dispatch: route tool calls through the request, fetch and render stages."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from crawlbase_mcp.config import Credentials
from crawlbase_mcp.core import build_request
from crawlbase_mcp.errors import CrawlbaseMCPError, UnknownToolError
from crawlbase_mcp.models.content import ToolResponse
from crawlbase_mcp.models.request import Capability
from crawlbase_mcp.providers import CrawlbaseClient, ScraperProvider
from crawlbase_mcp.tools.postprocess import render_markdown, render_raw_html, render_screenshot
from crawlbase_mcp.utils import MarkdownExtractor

logger = logging.getLogger(__name__)

CRAWL = "crawl"
CRAWL_MARKDOWN = "crawl_markdown"
CRAWL_SCREENSHOT = "crawl_screenshot"

TOOL_NAMES = (CRAWL, CRAWL_MARKDOWN, CRAWL_SCREENSHOT)

_ACTIONS = {
    CRAWL: "crawl",
    CRAWL_MARKDOWN: "crawl",
    CRAWL_SCREENSHOT: "take screenshot of",
}

Handler = Callable[[Mapping[str, Any]], Awaitable[ToolResponse]]


class ToolDispatcher:
    """Runs one tool invocation from raw arguments to response content.

    A dispatcher is bound to the credentials of a single caller and owns its
    provider; build a new one per invocation. ``call_tool`` never raises.
    """

    def __init__(
        self,
        credentials: Credentials,
        provider: ScraperProvider | None = None,
        extractor: MarkdownExtractor | None = None,
    ) -> None:
        self.credentials = credentials
        self.provider = provider if provider is not None else CrawlbaseClient()
        self.extractor = extractor if extractor is not None else MarkdownExtractor()
        self._handlers: dict[str, Handler] = {
            CRAWL: self._crawl,
            CRAWL_MARKDOWN: self._crawl_markdown,
            CRAWL_SCREENSHOT: self._crawl_screenshot,
        }

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None) -> ToolResponse:
        """Invoke a tool by name.

        Args:
            name: Tool name (crawl, crawl_markdown or crawl_screenshot)
            arguments: Raw tool arguments

        Returns:
            ToolResponse; any failure is returned as a single error text block
        """
        arguments = dict(arguments or {})
        logger.debug(f"CallTool {name}: {sorted(arguments)}")

        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)
            return await handler(arguments)
        except UnknownToolError as e:
            logger.info(str(e))
            return ToolResponse.error(f"Error: {e}")
        except Exception as e:
            if isinstance(e, CrawlbaseMCPError):
                logger.info(f"Tool {name} rejected: {e}")
            else:
                logger.exception(f"Unexpected error in tool {name}")
            return ToolResponse.error(self._failure_message(name, arguments, e))

    def close(self) -> None:
        self.provider.close()

    @staticmethod
    def _failure_message(name: str, arguments: Mapping[str, Any], error: Exception) -> str:
        url = arguments.get("url")
        if isinstance(url, str) and url.strip():
            return f"Failed to {_ACTIONS[name]} {url}: {error}"
        return f"Error: {error}"

    async def _crawl(self, arguments: Mapping[str, Any]) -> ToolResponse:
        params = build_request(arguments, Capability.PLAIN, self.credentials)
        result = await self.provider.fetch(params)
        return render_raw_html(result, params)

    async def _crawl_markdown(self, arguments: Mapping[str, Any]) -> ToolResponse:
        params = build_request(arguments, Capability.PLAIN, self.credentials)
        result = await self.provider.fetch(params)
        return render_markdown(result, params, self.extractor)

    async def _crawl_screenshot(self, arguments: Mapping[str, Any]) -> ToolResponse:
        params = build_request({**arguments, "screenshot": True}, Capability.JAVASCRIPT, self.credentials)
        result = await self.provider.fetch(params)
        return await render_screenshot(result, params, self.provider)
