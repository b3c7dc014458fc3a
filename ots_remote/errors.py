"""
Error taxonomy for calendar and explorer exchanges.

Every network operation fails with exactly one of the classes below.
Each carries a stable ``error_code`` so callers can switch on kind
without importing every class, plus a ``details`` dict for diagnostics.

Classification rules:
    - An error is classified once, where it is detected.
    - Outer handlers re-raise any ``RemoteError`` unchanged.
    - The transport's own exception is chained via ``__cause__``,
      never raised to the caller directly.

Codes:
    - TIMEOUT: the exchange did not finish before its deadline.
    - HTTP_STATUS: non-2xx status (other than a calendar 404).
    - COMMITMENT_NOT_FOUND: calendar answered 404 to a timestamp lookup.
    - EXCEEDED_SIZE: response body larger than the size guard.
    - MALFORMED_RESPONSE: body present but of the wrong shape.
    - EMPTY_RESPONSE: body missing or blank.
    - NETWORK: any other transport failure (DNS, reset, TLS, ...).
    - UNKNOWN: a bare RemoteError that no subclass classified.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class RemoteErrorCode(StrEnum):
    """Closed set of failure kinds shared by all exchanges."""

    TIMEOUT = "TIMEOUT"
    HTTP_STATUS = "HTTP_STATUS"
    COMMITMENT_NOT_FOUND = "COMMITMENT_NOT_FOUND"
    EXCEEDED_SIZE = "EXCEEDED_SIZE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    EMPTY_RESPONSE = "EMPTY_RESPONSE"
    NETWORK = "NETWORK"
    UNKNOWN = "UNKNOWN"


class RemoteError(Exception):
    """Base class for classified exchange failures."""

    error_code: RemoteErrorCode = RemoteErrorCode.UNKNOWN

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class RequestTimeoutError(RemoteError, TimeoutError):
    """The exchange did not complete within the configured timeout."""

    error_code = RemoteErrorCode.TIMEOUT

    def __init__(self, timeout_ms: int | None, *, url: str | None = None) -> None:
        super().__init__(
            "Request timeout",
            details={"url": url, "timeout_ms": timeout_ms},
        )
        self.timeout_ms = timeout_ms


class HttpStatusError(RemoteError):
    """Server answered with a non-success status."""

    error_code = RemoteErrorCode.HTTP_STATUS

    def __init__(self, status_code: int, reason: str, *, url: str | None = None) -> None:
        super().__init__(
            f"HTTP {status_code}: {reason}",
            details={"url": url, "status_code": status_code, "reason": reason},
        )
        self.status_code = status_code
        self.reason = reason


class CommitmentNotFoundError(RemoteError):
    """Calendar has no record of the commitment (HTTP 404).

    Expected while a timestamp is pending; callers polling for upgrades
    treat this as "try again later" rather than a fault.
    """

    error_code = RemoteErrorCode.COMMITMENT_NOT_FOUND

    def __init__(self, commitment: bytes, *, url: str | None = None) -> None:
        super().__init__(
            "Commitment not found",
            details={"url": url, "commitment": commitment.hex()},
        )
        self.commitment = commitment


class ExceededSizeError(RemoteError):
    """Response body exceeded the size guard."""

    error_code = RemoteErrorCode.EXCEEDED_SIZE

    def __init__(self, limit: int, *, url: str | None = None) -> None:
        super().__init__(
            f"Response exceeded size limit of {limit} bytes",
            details={"url": url, "limit": limit},
        )
        self.limit = limit


class MalformedResponseError(RemoteError):
    """Body does not have the expected shape (bad JSON, missing fields)."""

    error_code = RemoteErrorCode.MALFORMED_RESPONSE


class EmptyResponseError(MalformedResponseError):
    """Body is missing or blank."""

    error_code = RemoteErrorCode.EMPTY_RESPONSE


class NetworkError(RemoteError):
    """Transport-level failure not covered by a more specific kind."""

    error_code = RemoteErrorCode.NETWORK
