"""
Decoder seam between raw calendar bodies and proof objects.

The calendar client never parses proof bytes itself. It hands the body,
plus the message the proof commits to, to a TimestampDecoder and
returns whatever comes back. Decoder exceptions (truncated or malformed
streams) reach the caller unchanged.

The default decoder uses python-opentimestamps.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from opentimestamps.core.serialize import BytesDeserializationContext
from opentimestamps.core.timestamp import Timestamp


@runtime_checkable
class TimestampDecoder(Protocol):
    """Turn a calendar response body into a proof committing to ``msg``."""

    def __call__(self, data: bytes, msg: bytes) -> Any:
        """Decode ``data``.

        Args:
            data: Raw response body (already size-guarded).
            msg: Digest or commitment the proof starts from.

        Raises:
            Exception: Whatever the decoder raises on bad input. Not wrapped.
        """
        ...


def deserialize_timestamp(data: bytes, msg: bytes) -> Timestamp:
    """Default decoder: OpenTimestamps binary serialization."""
    ctx = BytesDeserializationContext(data)
    return Timestamp.deserialize(ctx, msg)
