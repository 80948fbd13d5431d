"""Translate loosely-typed tool arguments into a validated Crawlbase request."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from crawlbase_mcp.config import Credentials
from crawlbase_mcp.errors import ValidationError
from crawlbase_mcp.models.request import (
    DEVICES,
    Capability,
    ScrapeRequestParameters,
    ScreenshotOptions,
)

logger = logging.getLogger(__name__)

JS_TOKEN_MISSING = (
    "JavaScript token (CRAWLBASE_JS_TOKEN) is required for screenshots "
    "and JavaScript rendering but not configured."
)
TOKEN_MISSING = (
    "No Crawlbase token configured. Please set CRAWLBASE_TOKEN and/or CRAWLBASE_JS_TOKEN."
)

_NUMERIC_FIELDS = ("ajax_wait", "page_wait", "width", "height")

_bool_adapter: TypeAdapter[bool] = TypeAdapter(bool)
_screenshot_adapter: TypeAdapter[Any] = TypeAdapter(ScreenshotOptions)


def resolve_token(capability: Capability, credentials: Credentials, screenshot: bool = False) -> str:
    """Pick the token for a request.

    Screenshots always need the JavaScript token, whatever capability was
    asked for. Plain requests fall back to the JavaScript token when it is
    the only one configured.

    Args:
        capability: Capability the caller asked for
        credentials: Tokens available to this invocation
        screenshot: Whether a screenshot is being requested

    Returns:
        The token to send upstream

    Raises:
        ValidationError: If the required token is not configured
    """
    if screenshot or capability is Capability.JAVASCRIPT:
        if not credentials.js_token:
            raise ValidationError(JS_TOKEN_MISSING)
        return credentials.js_token

    token = credentials.token or credentials.js_token
    if not token:
        raise ValidationError(TOKEN_MISSING)
    return token


def _format_validation_error(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("fullpage", "viewport"))
    return f"Invalid argument '{location}': {first.get('msg', 'invalid value')}"


def _parse_screenshot(args: Mapping[str, Any]) -> Any:
    mode = args.get("mode") or "fullpage"
    width = args.get("width")
    height = args.get("height")

    if mode == "fullpage" and (width is not None or height is not None):
        raise ValidationError("'width' and 'height' are only supported with mode=viewport")

    options: dict[str, Any] = {"mode": mode}
    if mode == "viewport":
        options["max_width"] = width
        options["max_height"] = height

    try:
        return _screenshot_adapter.validate_python(options)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid screenshot options: {_format_validation_error(e)}") from e


def build_request(
    arguments: Mapping[str, Any] | None,
    capability: Capability,
    credentials: Credentials,
) -> ScrapeRequestParameters:
    """Validate tool arguments and build the upstream request.

    Args:
        arguments: Raw tool arguments (url, user_agent, device, country,
            ajax_wait, page_wait, screenshot, mode, width, height). Unknown
            keys are ignored.
        capability: Capability needed by the calling tool
        credentials: Tokens available to this invocation

    Returns:
        ScrapeRequestParameters ready to be sent

    Raises:
        ValidationError: If the arguments are malformed or the needed token
            is not configured. No network call has been made at that point.
    """
    args = dict(arguments or {})

    url = args.get("url")
    if not isinstance(url, str) or not url.strip():
        raise ValidationError("A non-empty 'url' argument is required")

    device = args.get("device")
    if device is not None and device not in DEVICES:
        raise ValidationError(f"Invalid device '{device}'. Expected one of: {', '.join(DEVICES)}")

    for name in _NUMERIC_FIELDS:
        if isinstance(args.get(name), bool):
            raise ValidationError(f"Invalid argument '{name}': expected a number")

    try:
        screenshot = _bool_adapter.validate_python(args.get("screenshot") or False)
    except PydanticValidationError as e:
        raise ValidationError("Invalid argument 'screenshot': expected a boolean") from e

    token = resolve_token(capability, credentials, screenshot=screenshot)

    country = args.get("country")
    if isinstance(country, str):
        country = country.strip().upper() or None

    try:
        params = ScrapeRequestParameters(
            url=url,
            token=token,
            user_agent=args.get("user_agent") or None,
            device=device,
            country=country,
            ajax_wait=args.get("ajax_wait"),
            page_wait=args.get("page_wait"),
            screenshot=_parse_screenshot(args) if screenshot else None,
        )
    except PydanticValidationError as e:
        raise ValidationError(_format_validation_error(e)) from e

    logger.debug(
        f"Built request for {params.url} "
        f"(capability={capability.value}, screenshot={params.screenshot_requested})"
    )
    return params
