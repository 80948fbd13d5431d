"""Exceptions raised by the Crawlbase MCP server."""

from __future__ import annotations


class CrawlbaseMCPError(Exception):
    """Base class for all server errors."""


class ValidationError(CrawlbaseMCPError):
    """Raised when tool arguments or credentials cannot form a valid request.

    Raised before any network call is made.
    """


class UnknownToolError(CrawlbaseMCPError):
    """Raised when a tool name has no registered pipeline."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name
