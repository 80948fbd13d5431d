"""Crawlbase MCP server: crawl, markdown and screenshot tools over MCP."""

__version__ = "1.0.0"
