"""Crawlbase Crawling API client built on the requests library."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests

from crawlbase_mcp.models.request import ScrapeRequestParameters
from crawlbase_mcp.providers.base import (
    ScraperProvider,
    UpstreamFailure,
    UpstreamResult,
    UpstreamSuccess,
)

logger = logging.getLogger(__name__)

CRAWLBASE_API_URL = "https://api.crawlbase.com/"
NETWORK_ERROR = "network_error"


def _json_payload(response: requests.Response) -> dict[str, Any] | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _error_code(payload: dict[str, Any] | None, status_code: int) -> str:
    if payload and payload.get("pc_status") is not None:
        return str(payload["pc_status"])
    return f"http_{status_code}"


class CrawlbaseClient(ScraperProvider):
    """Client for the Crawlbase Crawling API.

    Each instance owns its own requests session. Create one per tool
    invocation so per-caller tokens never share connection state. Calls are
    made exactly once: there is no retry and no caching.
    """

    def __init__(
        self,
        base_url: str = CRAWLBASE_API_URL,
        timeout: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Crawling API endpoint (default: https://api.crawlbase.com/)
            timeout: Request timeout in seconds (default: None, the transport default)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.session = requests.Session()

    async def fetch(self, params: ScrapeRequestParameters) -> UpstreamResult:
        """Crawl ``params.url`` through the Crawlbase API.

        Args:
            params: Validated request parameters

        Returns:
            UpstreamSuccess with the HTML body and optional screenshot URL, or
            UpstreamFailure with the error code and message
        """
        query = params.to_query()
        logger.debug(f"Requesting {params.url} from Crawlbase (screenshot={params.screenshot_requested})")

        try:
            # Run requests in thread pool to avoid blocking
            loop = asyncio.get_event_loop()
            response = await loop.run_in_executor(
                None,
                lambda: self.session.get(self.base_url, params=query, timeout=self.timeout),
            )
        except requests.RequestException as e:
            logger.warning(f"Crawlbase request for {params.url} failed: {type(e).__name__}: {e}")
            return UpstreamFailure(error_code=NETWORK_ERROR, error_message=f"{type(e).__name__}: {e}")

        payload = _json_payload(response)

        if not 200 <= response.status_code < 300:
            message = (payload or {}).get("error") or f"HTTP {response.status_code}: {response.reason}"
            code = _error_code(payload, response.status_code)
            logger.warning(f"Crawlbase returned {code} for {params.url}: {message}")
            return UpstreamFailure(error_code=code, error_message=str(message))

        if payload is None:
            # Plain (non-JSON) responses carry the page HTML directly
            return UpstreamSuccess(body=response.text)

        if payload.get("error"):
            code = _error_code(payload, response.status_code)
            logger.warning(f"Crawlbase reported an error for {params.url}: {payload['error']}")
            return UpstreamFailure(error_code=code, error_message=str(payload["error"]))

        result = UpstreamSuccess(
            body=payload.get("body"),
            screenshot_url=payload.get("screenshot_url") or None,
            raw=payload,
        )
        logger.debug(
            f"Crawlbase response for {params.url}: body_length={len(result.body or '')}, "
            f"screenshot_url={result.screenshot_url}"
        )
        return result

    async def download(self, url: str) -> bytes:
        """Download a secondary resource, typically a screenshot.

        Args:
            url: Resource URL

        Returns:
            Response body bytes

        Raises:
            requests.HTTPError: If the response status is not 2xx
            requests.RequestException: On transport errors
        """
        loop = asyncio.get_event_loop()
        response = await loop.run_in_executor(
            None,
            lambda: self.session.get(url, timeout=self.timeout),
        )
        if not 200 <= response.status_code < 300:
            raise requests.HTTPError(
                f"{response.status_code} {response.reason} for url: {url}",
                response=response,
            )
        return response.content

    def close(self) -> None:
        self.session.close()
