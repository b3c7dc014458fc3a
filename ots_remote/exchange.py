"""
Bounded HTTP exchange shared by calendar and explorer clients.

One call = one request, one deadline, one classified outcome:

    arm deadline → send → stream body (size-guarded) → disarm deadline

The deadline is an ``asyncio.timeout()`` scope wrapped around the whole
exchange. Leaving the scope (by return, error or cancellation) disarms
it, so no timer survives the call. httpx's own timeouts are switched
off; the scope is the single source of truth for "too slow".

Body handling:
    The body is streamed and the exchange aborts as soon as more than
    MAX_RESPONSE_SIZE bytes have arrived. This runs before the status
    code is looked at, so an oversized 404 or 500 is still an
    ExceededSizeError.

Redirects:
    Followed, up to MAX_REDIRECTS hops. The deadline covers every hop and
    the size guard applies to the final response.

Status handling is left to the caller (``check_status``) because the
calendar gives 404 its own meaning.

Transport seam:
    ``transport`` is passed straight to ``httpx.AsyncClient``. Tests use
    ``httpx.MockTransport`` or pytest-httpx; production uses the default.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx

from ots_remote.config import MAX_REDIRECTS, MAX_RESPONSE_SIZE, ClientConfig
from ots_remote.errors import (
    ExceededSizeError,
    HttpStatusError,
    NetworkError,
    RemoteError,
    RequestTimeoutError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExchangeResponse:
    """A completed exchange whose body passed the size guard.

    Attributes:
        url: Requested URL.
        status_code: HTTP status.
        reason: Reason phrase ("Not Found", ...).
        body: Full response body, at most MAX_RESPONSE_SIZE bytes.
    """

    url: str
    status_code: int
    reason: str
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


async def _read_bounded(response: httpx.Response, url: str, limit: int) -> bytes:
    body = bytearray()
    async for chunk in response.aiter_bytes():
        body.extend(chunk)
        if len(body) > limit:
            raise ExceededSizeError(limit, url=url)
    return bytes(body)


async def bounded_exchange(
    config: ClientConfig,
    method: str,
    path: str,
    *,
    content: bytes | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    limit: int = MAX_RESPONSE_SIZE,
) -> ExchangeResponse:
    """Perform one deadline-bounded, size-guarded HTTP exchange.

    Args:
        config: Base URL, timeout and headers for the server.
        method: HTTP method.
        path: Path appended to ``config.base_url`` (must start with "/").
        content: Raw request body, sent as-is.
        transport: Optional httpx transport override.
        limit: Maximum accepted body size in bytes.

    Returns:
        ExchangeResponse with status and body. The status is NOT checked.

    Raises:
        RequestTimeoutError: Deadline expired before the body was read.
        ExceededSizeError: Body larger than ``limit``.
        NetworkError: Any other transport failure.
    """
    url = config.url_for(path)
    logger.debug("%s %s (timeout_ms=%s)", method, url, config.timeout_ms)

    try:
        async with asyncio.timeout(config.timeout_s):
            async with httpx.AsyncClient(
                timeout=None,
                follow_redirects=True,
                max_redirects=MAX_REDIRECTS,
                transport=transport,
            ) as client:
                async with client.stream(
                    method,
                    url,
                    content=content,
                    headers=dict(config.headers),
                ) as response:
                    body = await _read_bounded(response, url, limit)
                    status_code = response.status_code
                    reason = response.reason_phrase
    except RemoteError:
        raise
    except (TimeoutError, httpx.TimeoutException) as e:
        # TimeoutError before OSError: it is an OSError subclass.
        logger.debug("%s %s timed out", method, url)
        raise RequestTimeoutError(config.timeout_ms, url=url) from e
    except (httpx.HTTPError, OSError) as e:
        logger.debug("%s %s failed: %s", method, url, e)
        raise NetworkError(
            str(e) or type(e).__name__,
            details={"url": url, "error": type(e).__name__},
        ) from e

    logger.debug("%s %s -> %d (%d bytes)", method, url, status_code, len(body))
    return ExchangeResponse(url=url, status_code=status_code, reason=reason, body=body)


def check_status(response: ExchangeResponse) -> None:
    """Raise HttpStatusError unless the status is 2xx."""
    if not response.ok:
        raise HttpStatusError(response.status_code, response.reason, url=response.url)
