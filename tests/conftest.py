"""Shared fixtures for ots_remote tests."""

from __future__ import annotations

import pytest

from helpers import DIGEST, pending_timestamp_bytes


@pytest.fixture
def pending_body() -> bytes:
    """Serialized pending timestamp committing to DIGEST."""
    return pending_timestamp_bytes(DIGEST)
