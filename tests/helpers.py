"""Test helpers: canned proofs and mock transports."""

from __future__ import annotations

import asyncio

import httpx
from opentimestamps.core.notary import PendingAttestation
from opentimestamps.core.serialize import BytesSerializationContext
from opentimestamps.core.timestamp import Timestamp

CALENDAR_URL = "https://alice.btc.calendar.opentimestamps.org"
ESPLORA_URL = "https://esplora.example.com/api"

DIGEST = bytes.fromhex("a" * 64)
COMMITMENT = bytes.fromhex("0123456789abcdef" * 4)


def pending_timestamp_bytes(msg: bytes, uri: str = CALENDAR_URL) -> bytes:
    """Serialize a single-attestation pending timestamp for ``msg``."""
    timestamp = Timestamp(msg)
    timestamp.attestations.add(PendingAttestation(uri))
    ctx = BytesSerializationContext()
    timestamp.serialize(ctx)
    return ctx.getbytes()


def raw_decoder(data: bytes, msg: bytes) -> bytes:
    """Decoder that returns the body untouched."""
    return data


def hanging_transport(delay: float = 10.0) -> httpx.MockTransport:
    """Transport whose server takes ``delay`` seconds to answer."""

    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(delay)
        return httpx.Response(200, content=b"too late")

    return httpx.MockTransport(handler)


def static_transport(status_code: int = 200, content: bytes = b"ok") -> httpx.MockTransport:
    """Transport that answers immediately with a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=content)

    return httpx.MockTransport(handler)
