"""Environment-driven settings for the Deck MCP server."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_PORT = 3261
DEFAULT_TIMEOUT = 30.0

_REQUIRED_ENV = ("NEXTCLOUD_URL", "NEXTCLOUD_USERNAME", "NEXTCLOUD_PASSWORD")


class DeckSettings(BaseModel):
    """Connection settings for a single Nextcloud instance."""

    base_url: str = Field(..., description="Nextcloud server URL, e.g. https://cloud.example.com")
    username: str = Field(..., description="Nextcloud login name")
    password: str = Field(..., description="Nextcloud password or app password")
    timeout: float = Field(DEFAULT_TIMEOUT, description="HTTP timeout in seconds")
    port: int = Field(DEFAULT_PORT, description="Port for the streamable HTTP transport")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls) -> DeckSettings:
        """Build settings from ``NEXTCLOUD_*`` environment variables.

        Raises:
            ValueError: If any of the credential variables is unset.
        """
        missing = [name for name in _REQUIRED_ENV if not os.environ.get(name)]
        if missing:
            raise ValueError(
                "Missing Nextcloud credentials. "
                f"Set the {', '.join(missing)} environment variable(s)."
            )
        return cls(
            base_url=os.environ["NEXTCLOUD_URL"],
            username=os.environ["NEXTCLOUD_USERNAME"],
            password=os.environ["NEXTCLOUD_PASSWORD"],
            timeout=_env_float("DECK_HTTP_TIMEOUT", DEFAULT_TIMEOUT),
            port=_env_int("PORT", DEFAULT_PORT),
        )


def _env_int(key: str, default: int) -> int:
    raw = os.environ.get(key, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_float(key: str, default: float) -> float:
    raw = os.environ.get(key, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default
