"""Pydantic models for validated Crawlbase scrape requests."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt

Device = Literal["desktop", "mobile", "tablet"]
DEVICES: tuple[str, ...] = ("desktop", "mobile", "tablet")


class Capability(str, Enum):
    """Upstream capability a request needs, which decides the token used."""

    PLAIN = "plain"
    JAVASCRIPT = "js"


class FullPageScreenshot(BaseModel):
    """Screenshot covering the whole scrollable page."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["fullpage"] = "fullpage"


class ViewportScreenshot(BaseModel):
    """Screenshot of the visible viewport, optionally bounded in size."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["viewport"] = "viewport"
    max_width: PositiveInt | None = Field(default=None, description="Maximum width in pixels")
    max_height: PositiveInt | None = Field(default=None, description="Maximum height in pixels")


ScreenshotOptions = Annotated[
    Union[FullPageScreenshot, ViewportScreenshot],
    Field(discriminator="mode"),
]


class ScrapeRequestParameters(BaseModel):
    """A validated, immutable Crawlbase request.

    Built per tool invocation by ``crawlbase_mcp.core.build_request``. The
    ``screenshot`` field is absent unless a screenshot was requested, in
    which case ``token`` is always the JavaScript token.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(min_length=1, description="The URL to crawl")
    token: str = Field(min_length=1, repr=False, description="Crawlbase token for this request")
    user_agent: str | None = Field(default=None, description="Custom user agent string")
    device: Device | None = Field(default=None, description="Device type for crawling")
    country: str | None = Field(
        default=None, pattern=r"^[A-Z]{2}$", description="Two-letter country code for geo-targeting"
    )
    ajax_wait: NonNegativeInt | None = Field(default=None, description="Wait for AJAX requests in ms")
    page_wait: NonNegativeInt | None = Field(default=None, description="Wait for page load in ms")
    screenshot: ScreenshotOptions | None = Field(default=None, description="Screenshot options")

    @property
    def screenshot_requested(self) -> bool:
        return self.screenshot is not None

    def to_query(self) -> dict[str, str]:
        """Render the upstream query string parameters.

        Returns:
            Mapping of Crawlbase API parameter names to string values; unset
            optional fields are omitted
        """
        query = {"token": self.token, "url": self.url, "format": "json"}

        if self.user_agent:
            query["user_agent"] = self.user_agent
        if self.device:
            query["device"] = self.device
        if self.country:
            query["country"] = self.country
        if self.ajax_wait is not None:
            query["ajax_wait"] = str(self.ajax_wait)
        if self.page_wait is not None:
            query["page_wait"] = str(self.page_wait)

        if self.screenshot is not None:
            query["screenshot"] = "true"
            query["mode"] = self.screenshot.mode
            if isinstance(self.screenshot, ViewportScreenshot):
                if self.screenshot.max_width is not None:
                    query["width"] = str(self.screenshot.max_width)
                if self.screenshot.max_height is not None:
                    query["height"] = str(self.screenshot.max_height)

        return query
