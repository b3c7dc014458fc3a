"""
ots-remote: network client layer for OpenTimestamps.

Public API:

    Calendar (proof submission and upgrade):
        - ``RemoteCalendar``: ``submit(digest)``, ``get_timestamp(commitment)``.
        - ``trusted_calendars()``: build clients for whitelisted URLs only.

    Explorer (block lookups):
        - ``EsploraClient``: ``blockhash(height)``, ``block(hash)``.
        - ``BlockHeader``: result of ``block()``.

    Allow-list:
        - ``UrlWhitelist``: glob-pattern URL whitelist.
        - ``DEFAULT_CALENDAR_WHITELIST``, ``DEFAULT_AGGREGATORS``.

    Configuration:
        - ``ClientConfig``: immutable per-client settings.
        - ``MAX_RESPONSE_SIZE``, ``MAX_REDIRECTS`` and default timeouts.

    Errors:
        - ``RemoteError`` and its subclasses, ``RemoteErrorCode``.

All network calls are coroutines; run them under asyncio.
"""

__version__ = "0.1.0"

from ots_remote.calendar import RemoteCalendar, trusted_calendars
from ots_remote.config import (
    DEFAULT_CALENDAR_TIMEOUT_MS,
    DEFAULT_EXPLORER_TIMEOUT_MS,
    MAX_REDIRECTS,
    MAX_RESPONSE_SIZE,
    ClientConfig,
)
from ots_remote.decoder import TimestampDecoder, deserialize_timestamp
from ots_remote.errors import (
    CommitmentNotFoundError,
    EmptyResponseError,
    ExceededSizeError,
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
    RemoteError,
    RemoteErrorCode,
    RequestTimeoutError,
)
from ots_remote.explorer import PUBLIC_ESPLORA_URL, BlockHeader, EsploraClient
from ots_remote.whitelist import (
    DEFAULT_AGGREGATORS,
    DEFAULT_CALENDAR_WHITELIST,
    UrlWhitelist,
)

__all__ = [
    "BlockHeader",
    "ClientConfig",
    "CommitmentNotFoundError",
    "DEFAULT_AGGREGATORS",
    "DEFAULT_CALENDAR_TIMEOUT_MS",
    "DEFAULT_CALENDAR_WHITELIST",
    "DEFAULT_EXPLORER_TIMEOUT_MS",
    "EmptyResponseError",
    "EsploraClient",
    "ExceededSizeError",
    "HttpStatusError",
    "MAX_REDIRECTS",
    "MAX_RESPONSE_SIZE",
    "MalformedResponseError",
    "NetworkError",
    "PUBLIC_ESPLORA_URL",
    "RemoteCalendar",
    "RemoteError",
    "RemoteErrorCode",
    "RequestTimeoutError",
    "TimestampDecoder",
    "UrlWhitelist",
    "__version__",
    "deserialize_timestamp",
    "trusted_calendars",
]
