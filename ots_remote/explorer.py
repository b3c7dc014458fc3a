"""
Esplora block-explorer client.

Read-only lookups used to verify Bitcoin attestations:

    - ``blockhash(height)``: GET /block-height/<height>, plain-text hash.
    - ``block(block_hash)``: GET /block/<hash>, JSON header; returns
      the merkle root and block time.

Same bounded-exchange discipline as the calendar client, but bodies are
text/JSON and validated here instead of by an external decoder.
Failures are logged (truncated) and re-raised as classified.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from ots_remote.config import DEFAULT_EXPLORER_TIMEOUT_MS, ClientConfig
from ots_remote.errors import EmptyResponseError, MalformedResponseError, RemoteError
from ots_remote.exchange import ExchangeResponse, bounded_exchange, check_status

logger = logging.getLogger(__name__)

# Default public Esplora instance.
PUBLIC_ESPLORA_URL = "https://blockstream.info/api"

_REQUIRED_BLOCK_FIELDS = ("merkle_root", "timestamp")


@dataclass(frozen=True)
class BlockHeader:
    """Header fields needed to check a Bitcoin attestation."""

    merkle_root: str
    time: int


def _decode_block(body: bytes) -> BlockHeader:
    if not body.strip():
        raise EmptyResponseError("Empty body")
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedResponseError(
            "Response was not valid JSON",
            details={"body_preview": body[:100].decode("utf-8", errors="replace")},
        ) from e
    if not isinstance(data, dict):
        raise MalformedResponseError(
            "Response JSON was not an object",
            details={"type": type(data).__name__},
        )

    missing = [name for name in _REQUIRED_BLOCK_FIELDS if data.get(name) is None]
    if missing:
        raise MalformedResponseError(
            f"Block response missing {', '.join(missing)}",
            details={"missing": missing},
        )
    return BlockHeader(merkle_root=data["merkle_root"], time=data["timestamp"])


class EsploraClient:
    """Client for an Esplora HTTP API.

    Args:
        url: API root. Defaults to the public blockstream.info instance.
        timeout_ms: Per-call deadline in milliseconds. None disables it.
        headers: Extra headers sent on every call.
        transport: Optional httpx transport override.
    """

    def __init__(
        self,
        url: str = PUBLIC_ESPLORA_URL,
        *,
        timeout_ms: int | None = DEFAULT_EXPLORER_TIMEOUT_MS,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._text_config = ClientConfig(
            base_url=url,
            timeout_ms=timeout_ms,
            headers={"Accept": "text/plain", **(headers or {})},
        )
        self._json_config = ClientConfig(
            base_url=url,
            timeout_ms=timeout_ms,
            headers={"Accept": "application/json", **(headers or {})},
        )
        self._transport = transport

    @property
    def url(self) -> str:
        return self._text_config.base_url

    @property
    def timeout_ms(self) -> int | None:
        return self._text_config.timeout_ms

    def __repr__(self) -> str:
        return f"EsploraClient({self.url!r})"

    async def _get(self, config: ClientConfig, path: str) -> ExchangeResponse:
        response = await bounded_exchange(config, "GET", path, transport=self._transport)
        check_status(response)
        return response

    async def blockhash(self, height: int | str) -> str:
        """Return the hash of the block at ``height``.

        Raises:
            EmptyResponseError: Blank body.
            MalformedResponseError: Body is not valid UTF-8.
            RequestTimeoutError, ExceededSizeError, HttpStatusError, NetworkError.
        """
        try:
            response = await self._get(self._text_config, f"/block-height/{height}")
            try:
                body = response.body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedResponseError(
                    "Response was not valid UTF-8",
                    details={"url": response.url},
                ) from e
            if not body.strip():
                raise EmptyResponseError("Empty body", details={"url": response.url})
            return body
        except RemoteError as e:
            logger.warning("Response error: %s", str(e)[:100])
            raise

    async def block(self, block_hash: str) -> BlockHeader:
        """Return merkle root and time of the block ``block_hash``.

        Raises:
            EmptyResponseError: Blank body.
            MalformedResponseError: Not a JSON object, or a required field
                is missing.
            RequestTimeoutError, ExceededSizeError, HttpStatusError, NetworkError.
        """
        try:
            response = await self._get(self._json_config, f"/block/{block_hash}")
            return _decode_block(response.body)
        except RemoteError as e:
            logger.warning("Response error: %s", str(e)[:100])
            raise
