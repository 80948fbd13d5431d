"""Pydantic data models for requests, responses and extracted content.

This module defines the data structures passed between the pipeline stages:
- Validated upstream requests (ScrapeRequestParameters, screenshot options)
- Tool responses (ToolResponse with TextBlock/ImageBlock content)
- Markdown extraction output (ExtractedDocument)
"""

from crawlbase_mcp.models.content import (
    UNTITLED,
    ContentBlock,
    ExtractedDocument,
    ImageBlock,
    TextBlock,
    ToolResponse,
)
from crawlbase_mcp.models.request import (
    DEVICES,
    Capability,
    Device,
    FullPageScreenshot,
    ScrapeRequestParameters,
    ScreenshotOptions,
    ViewportScreenshot,
)

__all__ = [
    # Request models
    "Capability",
    "Device",
    "DEVICES",
    "FullPageScreenshot",
    "ViewportScreenshot",
    "ScreenshotOptions",
    "ScrapeRequestParameters",
    # Response models
    "ContentBlock",
    "TextBlock",
    "ImageBlock",
    "ToolResponse",
    "ExtractedDocument",
    "UNTITLED",
]
