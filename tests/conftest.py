"""Pytest configuration and fixtures for crawlbase-mcp tests."""

from __future__ import annotations

import io
import struct
import zlib
from collections.abc import Callable
from unittest.mock import AsyncMock, Mock

import pytest
from PIL import Image

from crawlbase_mcp.config import Credentials
from crawlbase_mcp.providers import CrawlbaseClient


@pytest.fixture
def sample_html() -> str:
    """Sample article page for testing."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="description" content="A sample page for testing">
        <meta property="og:title" content="Sample Page">
        <title>Test Page Title</title>
        <script>console.log('should be stripped');</script>
        <style>.test { color: red; }</style>
    </head>
    <body>
        <nav><a href="/home">Home</a> | <a href="/about">About</a></nav>
        <article>
            <h1>Main Heading</h1>
            <p>This is a <strong>sample</strong> paragraph with <em>formatting</em>.
            It has enough text in it for content extraction to consider it the
            main body of the page, which is what readability looks for.</p>
            <h2>Subheading</h2>
            <p>Another paragraph with some text, a <a href="/relative">relative link</a>,
            and more words so that the article scores well against the navigation.</p>
        </article>
        <noscript>No JavaScript content</noscript>
    </body>
    </html>
    """


@pytest.fixture
def simple_html() -> str:
    """Simple HTML for basic testing."""
    return """
    <html>
    <head><title>Simple Page</title></head>
    <body>
        <h1>Hello World</h1>
        <p>This is a simple test.</p>
    </body>
    </html>
    """


@pytest.fixture
def credentials() -> Credentials:
    """Both capability tokens configured."""
    return Credentials(token="normal-token", js_token="js-token")


@pytest.fixture
def plain_credentials() -> Credentials:
    """Only the plain token configured."""
    return Credentials(token="normal-token")


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory producing encoded images of a given size."""

    def _make(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
        buffer = io.BytesIO()
        Image.new(mode, (width, height), color=128 if mode == "L" else (200, 30, 30)).save(buffer, format=fmt)
        return buffer.getvalue()

    return _make


@pytest.fixture
def png_header() -> Callable[[int, int], bytes]:
    """Factory producing a PNG with a header and no pixel data.

    Only the header is read when an image is opened, so huge dimensions cost nothing to build.
    """

    def _chunk(tag: bytes, payload: bytes) -> bytes:
        crc = zlib.crc32(tag + payload) & 0xFFFFFFFF
        return struct.pack(">I", len(payload)) + tag + payload + struct.pack(">I", crc)

    def _make(width: int, height: int) -> bytes:
        ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
        return b"\x89PNG\r\n\x1a\n" + _chunk(b"IHDR", ihdr) + _chunk(b"IDAT", b"") + _chunk(b"IEND", b"")

    return _make


@pytest.fixture
def mock_provider() -> Mock:
    """Provider double whose fetch/download are AsyncMocks."""
    provider = Mock(spec=CrawlbaseClient)
    provider.fetch = AsyncMock()
    provider.download = AsyncMock()
    return provider
