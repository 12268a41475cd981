# =============================================================================
# core/config.py  —  Process Configuration (credential, API base, listen port)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the server's settings from the process environment, once.
#
#   RECURSE_PAT       (required)  Personal access token for the Recurse API
#   RECURSE_API_BASE  (optional)  Defaults to the public v1 API
#   MCP_HOST          (optional)  Listen host, defaults to 0.0.0.0
#   MCP_PORT          (optional)  Listen port, defaults to 9000
#
# WHERE DOES .env COME IN?
#   main.py calls load_dotenv() before anything asks for settings, so values
#   in a local .env file land in os.environ first.  This module only ever
#   looks at os.environ.
#
# FAIL FAST:
#   A missing token makes load_settings() raise ConfigurationError, and
#   main.py exits before the server starts listening.
# =============================================================================

import os
from dataclasses import dataclass
from functools import lru_cache

RECURSE_API_BASE = "https://www.recurse.com/api/v1"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9000


class ConfigurationError(Exception):
    """Raised when the process environment can't produce valid settings."""


@dataclass(frozen=True)
class Settings:
    """Everything the server needs from its environment."""

    token: str                         # Bearer token (never logged)
    api_base: str = RECURSE_API_BASE   # No trailing slash
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def load_settings() -> Settings:
    """Build Settings from os.environ.

    Raises:
        ConfigurationError: RECURSE_PAT is unset/blank, or MCP_PORT is not
            an integer.
    """
    token = os.environ.get("RECURSE_PAT", "").strip()
    if not token:
        raise ConfigurationError(
            "RECURSE_PAT environment variable is not set. "
            "Please set it to your personal access token."
        )

    raw_port = os.environ.get("MCP_PORT", str(DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigurationError(f"MCP_PORT must be an integer, got {raw_port!r}") from None

    return Settings(
        token=token,
        api_base=os.environ.get("RECURSE_API_BASE", RECURSE_API_BASE).rstrip("/"),
        host=os.environ.get("MCP_HOST", DEFAULT_HOST),
        port=port,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings, reading the environment only once."""
    return load_settings()
