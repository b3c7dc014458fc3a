"""
Remote calendar client.

Two operations against one calendar server:

    - ``submit(digest)``: POST /digest, returns a proof committing to
      the digest (usually a pending attestation).
    - ``get_timestamp(commitment)``: GET /timestamp/<hex>, returns the
      (possibly upgraded) proof for a commitment seen earlier.

Both are single bounded exchanges (see exchange.py): no retries, no
caching. A 404 from ``get_timestamp`` is CommitmentNotFoundError, the
normal answer while a timestamp is still pending.

The request body of ``submit`` is the raw digest. The form-urlencoded
content type is what calendars expect on the wire; the body is not
actually form-encoded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from ots_remote import __version__
from ots_remote.config import DEFAULT_CALENDAR_TIMEOUT_MS, ClientConfig
from ots_remote.decoder import TimestampDecoder, deserialize_timestamp
from ots_remote.errors import CommitmentNotFoundError
from ots_remote.exchange import bounded_exchange, check_status
from ots_remote.whitelist import DEFAULT_CALENDAR_WHITELIST, UrlWhitelist

logger = logging.getLogger(__name__)

OTS_MEDIA_TYPE = "application/vnd.opentimestamps.v1"
USER_AGENT = f"ots-remote/{__version__}"


def _calendar_headers(extra: Mapping[str, str] | None) -> dict[str, str]:
    headers = {
        "Accept": OTS_MEDIA_TYPE,
        "Content-Type": "application/x-www-form-urlencoded",
        "User-Agent": USER_AGENT,
    }
    if extra:
        headers.update(extra)
    return headers


class RemoteCalendar:
    """Client for a single OpenTimestamps calendar server.

    Args:
        url: Calendar base URL (e.g. "https://a.pool.opentimestamps.org").
        timeout_ms: Per-call deadline in milliseconds. None disables it.
        headers: Extra headers, merged over the protocol defaults.
        decoder: Turns response bodies into proofs. Defaults to the
            OpenTimestamps binary deserializer.
        transport: Optional httpx transport override.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_ms: int | None = DEFAULT_CALENDAR_TIMEOUT_MS,
        headers: Mapping[str, str] | None = None,
        decoder: TimestampDecoder = deserialize_timestamp,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = ClientConfig(
            base_url=url,
            timeout_ms=timeout_ms,
            headers=_calendar_headers(headers),
        )
        self._decoder = decoder
        self._transport = transport

    @property
    def url(self) -> str:
        """The calendar base URL (no trailing slash)."""
        return self._config.base_url

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __repr__(self) -> str:
        return f"RemoteCalendar({self.url!r})"

    async def submit(self, digest: bytes) -> Any:
        """Submit a digest and return a proof committing to it.

        Raises:
            RequestTimeoutError, ExceededSizeError, HttpStatusError,
            NetworkError, or the decoder's own error.
        """
        response = await bounded_exchange(
            self._config,
            "POST",
            "/digest",
            content=memoryview(digest).tobytes(),
            transport=self._transport,
        )
        check_status(response)
        return self._decoder(response.body, digest)

    async def get_timestamp(self, commitment: bytes) -> Any:
        """Fetch the proof for a previously submitted commitment.

        Raises:
            CommitmentNotFoundError: The calendar has no such commitment (404).
            RequestTimeoutError, ExceededSizeError, HttpStatusError,
            NetworkError, or the decoder's own error.
        """
        response = await bounded_exchange(
            self._config,
            "GET",
            "/timestamp/" + commitment.hex(),
            transport=self._transport,
        )
        if response.status_code == 404:
            raise CommitmentNotFoundError(commitment, url=response.url)
        check_status(response)
        return self._decoder(response.body, commitment)


def trusted_calendars(
    urls: Iterable[str],
    whitelist: UrlWhitelist = DEFAULT_CALENDAR_WHITELIST,
    **kwargs: Any,
) -> list[RemoteCalendar]:
    """Build a RemoteCalendar for every URL the whitelist accepts.

    URLs outside the whitelist are skipped with a warning. Keyword
    arguments are forwarded to each RemoteCalendar.
    """
    calendars = []
    for url in urls:
        if url in whitelist:
            calendars.append(RemoteCalendar(url, **kwargs))
        else:
            logger.warning("Ignoring calendar %s: not in whitelist", url)
    return calendars
