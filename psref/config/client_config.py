# psref/config/client_config.py

"""Immutable per-client configuration."""

import dataclasses
import os
import sys
from dataclasses import dataclass, field
from typing import Any, TextIO

from curl_cffi import requests as curl_requests

from psref.config.settings import Settings
from psref.transport.rate_limiter import TokenBucket


def default_rate_limiter() -> TokenBucket:
    """The conservative limiter every client gets unless told otherwise."""
    return TokenBucket.every(Settings.RATE_INTERVAL, Settings.RATE_BURST)


@dataclass(frozen=True)
class ClientConfig:
    """Options for a :class:`~psref.services.psref_client.PsrefClient`.

    Every field defaults independently.  ``retries`` of 0 or 1 sends
    each request once, a negative value retries until success, not-found
    or cancellation.  Passing ``rate_limiter=None`` disables rate
    limiting.  ``debug`` receives every raw response body when set.
    """

    base_url: str = Settings.DEFAULT_BASE_URL
    session: Any = field(
        default_factory=curl_requests.Session, compare=False, repr=False
    )
    retries: int = Settings.DEFAULT_RETRIES
    rate_limiter: TokenBucket | None = field(
        default_factory=default_rate_limiter, compare=False
    )
    debug: TextIO | None = field(default=None, compare=False, repr=False)
    request_timeout: float = Settings.REQUEST_TIMEOUT

    def __post_init__(self) -> None:
        base_url = self.base_url or Settings.DEFAULT_BASE_URL
        object.__setattr__(self, "base_url", base_url.rstrip("/"))
        if self.session is None:
            object.__setattr__(self, "session", curl_requests.Session())
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

    def with_options(self, **changes: Any) -> "ClientConfig":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """Build a config from ``PSREF_*`` environment variables.

        Explicit keyword *overrides* win over the environment.
        """
        options: dict[str, Any] = {}
        base_url = os.getenv("PSREF_BASE_URL")
        if base_url:
            options["base_url"] = base_url
        retries = os.getenv("PSREF_RETRIES")
        if retries:
            options["retries"] = int(retries)
        interval = os.getenv("PSREF_RATE_INTERVAL")
        burst = os.getenv("PSREF_RATE_BURST")
        if burst is not None and int(burst) == 0:
            options["rate_limiter"] = None
        elif interval or burst:
            options["rate_limiter"] = TokenBucket.every(
                float(interval) if interval else Settings.RATE_INTERVAL,
                int(burst) if burst else Settings.RATE_BURST,
            )
        if os.getenv("PSREF_DEBUG", "").lower() == "true":
            options["debug"] = sys.stderr
        options.update(overrides)
        return cls(**options)
