"""
Per-client configuration.

A ClientConfig is built once per client and shared, unmodified, by
every call that client makes. Concurrent calls read it; nothing writes
to it after construction.

Timeouts are in milliseconds. ``None`` disables the deadline entirely.
Calendar and explorer clients have separate defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Denial-of-service guard on every response body.
MAX_RESPONSE_SIZE = 10_000

# Redirect hops followed before giving up with NetworkError.
MAX_REDIRECTS = 10

DEFAULT_CALENDAR_TIMEOUT_MS = 5_000
DEFAULT_EXPLORER_TIMEOUT_MS = 1_000


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings for one remote server.

    Attributes:
        base_url: Server root. A trailing "/" is stripped so paths can be
            appended directly.
        timeout_ms: Deadline for a whole exchange, in milliseconds.
            None means no deadline.
        headers: Request headers sent on every call. Stored read-only.
    """

    base_url: str
    timeout_ms: int | None = DEFAULT_CALENDAR_TIMEOUT_MS
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.base_url, str):
            raise TypeError("URL must be a string")
        if self.timeout_ms is not None and self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be > 0 or None, got: {self.timeout_ms}")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def timeout_s(self) -> float | None:
        """Deadline in seconds, as asyncio expects it."""
        if self.timeout_ms is None:
            return None
        return self.timeout_ms / 1000

    def url_for(self, path: str) -> str:
        """Join a "/"-prefixed path onto the base URL."""
        return f"{self.base_url}{path}"
