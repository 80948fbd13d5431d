"""Utility functions for HTML processing and Markdown extraction."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from markdownify import markdownify
from readability import Document

from crawlbase_mcp.models.content import UNTITLED, ExtractedDocument

logger = logging.getLogger(__name__)

DEFAULT_STRIP_TAGS = ["script", "style", "noscript", "iframe", "svg"]
READABILITY_NO_TITLE = "[no-title]"


def html_to_markdown(html: str, strip_tags: list[str] | None = None) -> str:
    """Convert HTML to markdown format.

    Args:
        html: The HTML content to convert
        strip_tags: List of HTML tags to strip (e.g., ['script', 'style'])

    Returns:
        Markdown formatted text
    """
    soup = BeautifulSoup(html, "lxml")

    if strip_tags:
        for tag in strip_tags:
            for element in soup.find_all(tag):
                element.decompose()

    markdown = markdownify(str(soup), heading_style="ATX")
    return markdown.strip()


def extract_metadata(html: str) -> dict[str, str]:
    """Extract metadata from HTML (title, description, etc.).

    Args:
        html: The HTML content to process

    Returns:
        Dictionary containing metadata
    """
    soup = BeautifulSoup(html, "lxml")
    metadata: dict[str, str] = {}

    if soup.title and soup.title.string:
        metadata["title"] = soup.title.string.strip()

    for meta in soup.find_all("meta"):
        name = meta.get("name") or meta.get("property")
        content = meta.get("content")

        if name and content:
            metadata[name] = content.strip()

    # A lone h1 names the page; several are ambiguous
    headings = soup.find_all("h1")
    if len(headings) == 1:
        heading = headings[0].get_text(" ", strip=True)
        if heading:
            metadata["h1"] = heading

    return metadata


def truncate_content(content: str, max_length: int, marker: str) -> tuple[str, bool]:
    """Cut content down to ``max_length`` characters.

    Args:
        content: Text to truncate
        max_length: Maximum number of characters kept from ``content``
        marker: Text appended when truncation happened

    Returns:
        Tuple of (possibly truncated text, whether truncation happened)
    """
    if len(content) <= max_length:
        return content, False
    return content[:max_length] + marker, True


class MarkdownExtractor:
    """Readability-based main content extraction to Markdown.

    ``extract`` never raises. When readability cannot find an article the
    whole document is converted instead, and when the HTML cannot be parsed
    at all the result has empty content.
    """

    def __init__(self, strip_tags: list[str] | None = None) -> None:
        self.strip_tags = strip_tags if strip_tags is not None else DEFAULT_STRIP_TAGS

    def extract(self, html: str, url: str) -> ExtractedDocument:
        """Extract title, excerpt and Markdown content from a page.

        Args:
            html: Page HTML
            url: Page URL, used to absolutize links

        Returns:
            ExtractedDocument; a missing title falls back to og:title, then a
            lone <h1>, then a placeholder
        """
        if not html or not html.strip():
            return ExtractedDocument()

        try:
            metadata = extract_metadata(html)
        except Exception as e:
            logger.debug(f"Metadata extraction failed for {url}: {e}")
            metadata = {}

        excerpt = metadata.get("description") or metadata.get("og:description") or None

        try:
            document = Document(html, url=url)
            title = document.short_title() or document.title()
            content = html_to_markdown(document.summary(html_partial=True), strip_tags=self.strip_tags)
        except Exception as e:
            logger.debug(f"Readability extraction failed for {url}, converting whole page: {e}")
            title = metadata.get("title") or metadata.get("og:title")
            try:
                content = html_to_markdown(html, strip_tags=self.strip_tags)
            except Exception as inner:
                logger.warning(f"Markdown conversion failed for {url}: {inner}")
                content = ""

        if not title or title == READABILITY_NO_TITLE:
            title = metadata.get("og:title") or metadata.get("h1") or UNTITLED

        return ExtractedDocument(title=title.strip(), excerpt=excerpt, content=content)
