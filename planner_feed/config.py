"""
Feed configuration loaded from the environment.

The Canvas base URL and a pre-issued access token are the only settings the
fetcher needs. Both are required; a missing or malformed value is a startup
failure rather than something the background fetch discovers later.
"""
from __future__ import annotations

import os
import typing as t
from dataclasses import dataclass
from datetime import date

import httpx

CANVAS_URL_ENV = "CANVAS_URL"
CANVAS_ACCESS_TOKEN_ENV = "CANVAS_ACCESS_TOKEN"

PLANNER_ITEMS_ENDPOINT = "/api/v1/planner/items"


class ConfigError(RuntimeError):
    """Raised when the feed cannot be configured."""


@dataclass(frozen=True)
class FeedConfig:
    """Where to fetch the planner from and with which credential."""
    base_url: str
    access_token: str

    def __post_init__(self) -> None:
        if not self.access_token:
            raise ConfigError("Canvas access token is empty.")
        try:
            url = httpx.URL(self.base_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise ConfigError(f"Invalid Canvas URL {self.base_url!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigError(
                f"Invalid Canvas URL {self.base_url!r}: expected an absolute http(s) URL."
            )

    @classmethod
    def from_env(cls, environ: t.Optional[t.Mapping[str, str]] = None) -> FeedConfig:
        """Read the configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            ConfigError: If a variable is unset or holds an unusable value
        """
        if environ is None:
            environ = os.environ

        access_token = environ.get(CANVAS_ACCESS_TOKEN_ENV)
        if not access_token:
            raise ConfigError(f"{CANVAS_ACCESS_TOKEN_ENV} environment variable is not set.")

        base_url = environ.get(CANVAS_URL_ENV)
        if not base_url:
            raise ConfigError(f"{CANVAS_URL_ENV} environment variable is not set.")

        return cls(base_url=base_url, access_token=access_token)

    @property
    def endpoint(self) -> httpx.URL:
        """Planner items URL; replaces any path the base URL carries."""
        return httpx.URL(self.base_url).join(PLANNER_ITEMS_ENDPOINT)

    def resolve(self, url: str) -> str:
        """Resolve a possibly site-relative item URL against the base URL."""
        return str(httpx.URL(self.base_url).join(url))


def planner_query(config: FeedConfig, today: t.Optional[date] = None) -> dict[str, str]:
    """Query parameters for one planner request starting at ``today``."""
    if today is None:
        today = date.today()
    return {
        "access_token": config.access_token,
        "start_date": today.isoformat(),
    }
