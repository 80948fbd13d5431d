"""Convert upstream results into tool response content."""

from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Union

import requests

from crawlbase_mcp.imaging import MAX_DIMENSION, FittedImage, fit_image
from crawlbase_mcp.models.content import ImageBlock, TextBlock, ToolResponse
from crawlbase_mcp.models.request import ScrapeRequestParameters
from crawlbase_mcp.providers.base import ScraperProvider, UpstreamFailure, UpstreamResult
from crawlbase_mcp.utils import MarkdownExtractor, truncate_content

logger = logging.getLogger(__name__)

MAX_MARKDOWN_LENGTH = 50_000
TRUNCATION_MARKER = "\n\n[Content truncated due to size limits]"


@dataclass(frozen=True)
class NoScreenshot:
    """Upstream response carried no screenshot URL."""


@dataclass(frozen=True)
class ScreenshotFetchFailed:
    """Screenshot URL could not be downloaded or decoded."""

    screenshot_url: str
    reason: str
    downloaded: bool = False


@dataclass(frozen=True)
class ScreenshotFetched:
    """Screenshot downloaded and fitted, possibly resized."""

    screenshot_url: str
    image: FittedImage

    @property
    def resized(self) -> bool:
        return self.image.resized


ScreenshotOutcome = Union[NoScreenshot, ScreenshotFetchFailed, ScreenshotFetched]


def upstream_failure_message(action: str, url: str, failure: UpstreamFailure) -> str:
    return f"Failed to {action} {url}: {failure.error_message or 'Unknown error'}"


def render_raw_html(result: UpstreamResult, params: ScrapeRequestParameters) -> ToolResponse:
    """Return the crawled HTML verbatim, without truncation."""
    if isinstance(result, UpstreamFailure):
        return ToolResponse.error(upstream_failure_message("crawl", params.url, result))

    return ToolResponse.text(f"Successfully crawled {params.url}\n\nHTML Content:\n{result.body or ''}")


def render_markdown(
    result: UpstreamResult,
    params: ScrapeRequestParameters,
    extractor: MarkdownExtractor,
    max_length: int = MAX_MARKDOWN_LENGTH,
) -> ToolResponse:
    """Extract the page's main content as Markdown, truncated to ``max_length``.

    The text is a ``# title`` heading, an optional bold summary line with the
    excerpt, then the content.
    """
    if isinstance(result, UpstreamFailure):
        return ToolResponse.error(upstream_failure_message("crawl", params.url, result))

    document = extractor.extract(result.body or "", params.url)
    content, truncated = truncate_content(document.content, max_length, TRUNCATION_MARKER)
    if truncated:
        logger.info(f"Truncated markdown for {params.url} from {len(document.content)} to {max_length} characters")

    summary = f"**Summary:** {document.excerpt}\n\n" if document.excerpt else ""
    return ToolResponse.text(f"# {document.title}\n\n{summary}{content}")


async def fetch_screenshot(
    provider: ScraperProvider,
    screenshot_url: str | None,
    max_dimension: int = MAX_DIMENSION,
) -> ScreenshotOutcome:
    """Download a screenshot and fit it within ``max_dimension`` pixels.

    Args:
        provider: Provider used for the download
        screenshot_url: URL from the upstream response, if any
        max_dimension: Maximum width and height of the returned image

    Returns:
        NoScreenshot, ScreenshotFetchFailed or ScreenshotFetched. Nothing is
        retried.
    """
    if not screenshot_url:
        return NoScreenshot()

    try:
        data = await provider.download(screenshot_url)
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        logger.warning(f"Screenshot download from {screenshot_url} returned status {status}")
        return ScreenshotFetchFailed(screenshot_url=screenshot_url, reason=f"Status: {status}")
    except requests.RequestException as e:
        logger.warning(f"Screenshot download from {screenshot_url} failed: {e}")
        return ScreenshotFetchFailed(screenshot_url=screenshot_url, reason=f"Error: {e}")

    try:
        loop = asyncio.get_event_loop()
        image = await loop.run_in_executor(None, lambda: fit_image(data, max_dimension))
    except Exception as e:
        logger.warning(f"Screenshot from {screenshot_url} could not be decoded: {e}")
        return ScreenshotFetchFailed(screenshot_url=screenshot_url, reason=f"Error: {e}", downloaded=True)

    return ScreenshotFetched(screenshot_url=screenshot_url, image=image)


async def render_screenshot(
    result: UpstreamResult,
    params: ScrapeRequestParameters,
    provider: ScraperProvider,
) -> ToolResponse:
    """Fetch the screenshot referenced by ``result`` and embed it as an image."""
    url = params.url
    if isinstance(result, UpstreamFailure):
        return ToolResponse.error(upstream_failure_message("take screenshot of", url, result))

    outcome = await fetch_screenshot(provider, result.screenshot_url)

    if isinstance(outcome, NoScreenshot):
        return ToolResponse.error(
            f"Failed to take screenshot of {url}: No screenshot URL returned. "
            "Please ensure you have a valid JavaScript token configured."
        )

    if isinstance(outcome, ScreenshotFetchFailed):
        if outcome.downloaded:
            return ToolResponse.error(
                f"Screenshot was generated for {url}, but the image downloaded from URL: "
                f"{outcome.screenshot_url} could not be decoded. {outcome.reason}"
            )
        return ToolResponse.error(
            f"Screenshot was generated for {url}, but failed to download from URL: "
            f"{outcome.screenshot_url}. {outcome.reason}"
        )

    image = outcome.image
    return ToolResponse(
        content=[
            ImageBlock(data=base64.b64encode(image.data).decode("ascii"), mime_type=image.mime_type),
            TextBlock(
                text=f"Screenshot successfully taken of {url}\n\nScreenshot URL: {outcome.screenshot_url}"
            ),
        ]
    )
