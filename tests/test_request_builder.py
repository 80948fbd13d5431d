"""Tests for building Crawlbase requests from tool arguments."""

from __future__ import annotations

import pytest

from crawlbase_mcp.config import Credentials
from crawlbase_mcp.core import build_request, resolve_token
from crawlbase_mcp.errors import ValidationError
from crawlbase_mcp.models import Capability, FullPageScreenshot, ViewportScreenshot


class TestResolveToken:
    """Tests for capability token selection."""

    def test_plain_uses_normal_token(self, credentials: Credentials) -> None:
        assert resolve_token(Capability.PLAIN, credentials) == "normal-token"

    def test_plain_falls_back_to_js_token(self) -> None:
        assert resolve_token(Capability.PLAIN, Credentials(js_token="js-only")) == "js-only"

    def test_javascript_uses_js_token(self, credentials: Credentials) -> None:
        assert resolve_token(Capability.JAVASCRIPT, credentials) == "js-token"

    def test_screenshot_overrides_plain_capability(self, credentials: Credentials) -> None:
        assert resolve_token(Capability.PLAIN, credentials, screenshot=True) == "js-token"

    def test_no_tokens(self) -> None:
        with pytest.raises(ValidationError, match="No Crawlbase token"):
            resolve_token(Capability.PLAIN, Credentials())

    def test_javascript_without_js_token(self, plain_credentials: Credentials) -> None:
        with pytest.raises(ValidationError, match="JavaScript token"):
            resolve_token(Capability.JAVASCRIPT, plain_credentials)

    def test_header_overrides_take_precedence(self, credentials: Credentials) -> None:
        overridden = credentials.with_overrides(token="caller-token")

        assert resolve_token(Capability.PLAIN, overridden) == "caller-token"
        assert resolve_token(Capability.JAVASCRIPT, overridden) == "js-token"


class TestBuildRequest:
    """Tests for build_request."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "https://example.com/path?query=1&b=two#frag",
            "  https://example.com/with-spaces  ",
            "http://localhost:8080/ü",
        ],
    )
    def test_url_preserved_verbatim(self, credentials: Credentials, url: str) -> None:
        params = build_request({"url": url}, Capability.PLAIN, credentials)

        assert params.url == url

    @pytest.mark.parametrize("arguments", [{}, {"url": ""}, {"url": "   "}, {"url": None}, {"url": 42}, None])
    def test_missing_url(self, credentials: Credentials, arguments: dict | None) -> None:
        with pytest.raises(ValidationError, match="url"):
            build_request(arguments, Capability.PLAIN, credentials)

    def test_all_fields(self, credentials: Credentials) -> None:
        params = build_request(
            {
                "url": "https://example.com",
                "user_agent": "CustomBot/1.0",
                "device": "mobile",
                "country": "us",
                "ajax_wait": 1500,
                "page_wait": "2000",
                "unknown": "ignored",
            },
            Capability.PLAIN,
            credentials,
        )

        assert params.token == "normal-token"
        assert params.user_agent == "CustomBot/1.0"
        assert params.device == "mobile"
        assert params.country == "US"
        assert params.ajax_wait == 1500
        assert params.page_wait == 2000
        assert params.screenshot is None
        assert not params.screenshot_requested

    def test_invalid_device(self, credentials: Credentials) -> None:
        with pytest.raises(ValidationError, match="Invalid device 'watch'"):
            build_request({"url": "https://example.com", "device": "watch"}, Capability.PLAIN, credentials)

    @pytest.mark.parametrize("field", ["ajax_wait", "page_wait"])
    @pytest.mark.parametrize("value", [-1, "soon", 1.5, True])
    def test_invalid_waits(self, credentials: Credentials, field: str, value: object) -> None:
        with pytest.raises(ValidationError, match=field):
            build_request({"url": "https://example.com", field: value}, Capability.PLAIN, credentials)

    def test_zero_wait_allowed(self, credentials: Credentials) -> None:
        params = build_request({"url": "https://example.com", "page_wait": 0}, Capability.PLAIN, credentials)

        assert params.page_wait == 0

    def test_invalid_country(self, credentials: Credentials) -> None:
        with pytest.raises(ValidationError, match="country"):
            build_request({"url": "https://example.com", "country": "USA"}, Capability.PLAIN, credentials)

    def test_screenshot_defaults_to_fullpage(self, credentials: Credentials) -> None:
        params = build_request({"url": "https://example.com", "screenshot": True}, Capability.PLAIN, credentials)

        assert params.screenshot == FullPageScreenshot()
        assert params.token == "js-token"

    def test_screenshot_without_js_token_fails(self, plain_credentials: Credentials) -> None:
        with pytest.raises(ValidationError, match="JavaScript token"):
            build_request({"url": "https://example.com", "screenshot": True}, Capability.PLAIN, plain_credentials)

    def test_viewport_screenshot(self, credentials: Credentials) -> None:
        params = build_request(
            {"url": "https://example.com", "screenshot": True, "mode": "viewport", "width": 1280, "height": 720},
            Capability.JAVASCRIPT,
            credentials,
        )

        assert params.screenshot == ViewportScreenshot(max_width=1280, max_height=720)

    def test_fullpage_rejects_dimensions(self, credentials: Credentials) -> None:
        with pytest.raises(ValidationError, match="mode=viewport"):
            build_request(
                {"url": "https://example.com", "screenshot": True, "width": 1280},
                Capability.JAVASCRIPT,
                credentials,
            )

    def test_invalid_screenshot_mode(self, credentials: Credentials) -> None:
        with pytest.raises(ValidationError, match="screenshot options"):
            build_request(
                {"url": "https://example.com", "screenshot": True, "mode": "thumbnail"},
                Capability.JAVASCRIPT,
                credentials,
            )

    def test_non_positive_viewport_width(self, credentials: Credentials) -> None:
        with pytest.raises(ValidationError):
            build_request(
                {"url": "https://example.com", "screenshot": True, "mode": "viewport", "width": 0},
                Capability.JAVASCRIPT,
                credentials,
            )

    def test_screenshot_options_ignored_without_screenshot(self, credentials: Credentials) -> None:
        params = build_request(
            {"url": "https://example.com", "mode": "viewport", "width": 100},
            Capability.PLAIN,
            credentials,
        )

        assert params.screenshot is None

    def test_parameters_are_immutable(self, credentials: Credentials) -> None:
        params = build_request({"url": "https://example.com"}, Capability.PLAIN, credentials)

        with pytest.raises(Exception):
            params.url = "https://other.example.com"  # type: ignore[misc]

    def test_token_not_in_repr(self, credentials: Credentials) -> None:
        params = build_request({"url": "https://example.com"}, Capability.PLAIN, credentials)

        assert "normal-token" not in repr(params)


class TestToQuery:
    """Tests for rendering upstream query parameters."""

    def test_minimal_query(self, credentials: Credentials) -> None:
        params = build_request({"url": "https://example.com"}, Capability.PLAIN, credentials)

        assert params.to_query() == {
            "token": "normal-token",
            "url": "https://example.com",
            "format": "json",
        }

    def test_full_query(self, credentials: Credentials) -> None:
        params = build_request(
            {
                "url": "https://example.com",
                "user_agent": "CustomBot/1.0",
                "device": "tablet",
                "country": "DE",
                "ajax_wait": 100,
                "page_wait": 0,
                "screenshot": True,
                "mode": "viewport",
                "width": 800,
            },
            Capability.JAVASCRIPT,
            credentials,
        )

        assert params.to_query() == {
            "token": "js-token",
            "url": "https://example.com",
            "format": "json",
            "user_agent": "CustomBot/1.0",
            "device": "tablet",
            "country": "DE",
            "ajax_wait": "100",
            "page_wait": "0",
            "screenshot": "true",
            "mode": "viewport",
            "width": "800",
        }
