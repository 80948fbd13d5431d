"""Request construction for the Crawlbase API.

The core module turns untrusted tool arguments into validated
ScrapeRequestParameters, resolving which capability token each request
uses from explicitly passed Credentials.
"""

from crawlbase_mcp.core.request_builder import (
    JS_TOKEN_MISSING,
    TOKEN_MISSING,
    build_request,
    resolve_token,
)

__all__ = [
    "build_request",
    "resolve_token",
    "JS_TOKEN_MISSING",
    "TOKEN_MISSING",
]
