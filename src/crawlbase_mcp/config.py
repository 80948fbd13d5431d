"""Environment configuration and logging setup.

Configuration is read here, by the process entry points, and handed to the
tool pipeline as explicit values. Nothing below ``crawlbase_mcp.tools`` reads
the environment.
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from dataclasses import dataclass, replace
from functools import lru_cache

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

TOKEN_HEADER = "X-Crawlbase-Token"
JS_TOKEN_HEADER = "X-Crawlbase-JS-Token"


@dataclass(frozen=True)
class Credentials:
    """Crawlbase capability tokens used for one tool invocation."""

    token: str | None = None
    js_token: str | None = None

    def with_overrides(self, token: str | None = None, js_token: str | None = None) -> Credentials:
        """Return a copy where each supplied non-empty token replaces the default.

        Args:
            token: Caller-specific plain token
            js_token: Caller-specific JavaScript token

        Returns:
            New Credentials instance
        """
        return replace(
            self,
            token=token or self.token,
            js_token=js_token or self.js_token,
        )

    def describe(self) -> dict[str, int]:
        """Token lengths, safe to log."""
        return {
            "token": len(self.token or ""),
            "js_token": len(self.js_token or ""),
        }


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in ("true", "1", "yes", "on", "*")


def load_credentials() -> Credentials:
    """Read the default tokens from ``CRAWLBASE_TOKEN`` and ``CRAWLBASE_JS_TOKEN``."""
    credentials = Credentials(
        token=os.getenv("CRAWLBASE_TOKEN") or None,
        js_token=os.getenv("CRAWLBASE_JS_TOKEN") or None,
    )
    if not credentials.token and not credentials.js_token:
        logger.warning(
            "No Crawlbase tokens provided. Please set CRAWLBASE_TOKEN and/or "
            "CRAWLBASE_JS_TOKEN environment variables."
        )
    return credentials


@lru_cache
def get_default_credentials() -> Credentials:
    """Return the process-wide default credentials, read once."""
    return load_credentials()


def get_host() -> str:
    return os.getenv("MCP_HOST", DEFAULT_HOST)


def get_port() -> int:
    return int(os.getenv("MCP_PORT", str(DEFAULT_PORT)))


def debug_enabled() -> bool:
    return _env_flag("DEBUG")


def debug_log_path() -> str:
    return os.getenv(
        "DEBUG_LOG_FILE",
        os.path.join(tempfile.gettempdir(), "crawlbase-mcp-debug.log"),
    )


def configure_logging(debug: bool | None = None, log_file: str | None = None) -> None:
    """Configure root logging for the server process.

    Records go to stderr because stdout carries the stdio transport. With
    debug enabled the level drops to DEBUG and records are also appended
    to a log file.

    Args:
        debug: Enable debug logging (default: ``DEBUG`` environment variable)
        log_file: Debug log location (default: ``DEBUG_LOG_FILE`` or a temp file)
    """
    if debug is None:
        debug = debug_enabled()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if debug:
        handlers.append(logging.FileHandler(log_file or debug_log_path(), encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

    if debug:
        logger.debug(f"Debug log location: {log_file or debug_log_path()}")
