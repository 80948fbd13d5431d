"""Upstream providers for the scraping backend."""

from crawlbase_mcp.providers.base import (
    ScraperProvider,
    UpstreamFailure,
    UpstreamResult,
    UpstreamSuccess,
)
from crawlbase_mcp.providers.crawlbase_provider import CRAWLBASE_API_URL, CrawlbaseClient

__all__ = [
    "ScraperProvider",
    "UpstreamSuccess",
    "UpstreamFailure",
    "UpstreamResult",
    "CrawlbaseClient",
    "CRAWLBASE_API_URL",
]
