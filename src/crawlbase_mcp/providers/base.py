"""Base provider interface for the upstream scraping API."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Union

from crawlbase_mcp.models.request import ScrapeRequestParameters


@dataclass(frozen=True)
class UpstreamSuccess:
    """Successful upstream response."""

    body: str | None = None
    screenshot_url: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UpstreamFailure:
    """Failed upstream call: error response, non-2xx status or transport error."""

    error_code: str
    error_message: str


UpstreamResult = Union[UpstreamSuccess, UpstreamFailure]


class ScraperProvider(ABC):
    """Abstract base class for upstream scraping providers."""

    @abstractmethod
    async def fetch(self, params: ScrapeRequestParameters) -> UpstreamResult:
        """Perform one scrape request.

        Args:
            params: Validated request parameters

        Returns:
            UpstreamSuccess or UpstreamFailure; transport errors are captured
            as UpstreamFailure rather than raised
        """

    @abstractmethod
    async def download(self, url: str) -> bytes:
        """Download a secondary resource such as a screenshot.

        Args:
            url: Resource URL returned by a previous fetch

        Returns:
            Raw response bytes

        Raises:
            requests.RequestException: On transport errors or non-2xx status
        """

    def close(self) -> None:
        """Release any held connections."""
