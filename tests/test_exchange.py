"""
Tests for bounded_exchange and ClientConfig.

Covers:
- Status is returned, not raised; check_status raises for non-2xx
- Size guard at and beyond the limit, custom limits
- Classified errors pass through without re-wrapping
- Raw OS errors from the transport become NetworkError
- Redirects followed up to MAX_REDIRECTS, size guard on the final hop
- ClientConfig normalization, immutability and validation
"""

from __future__ import annotations

import dataclasses

import httpx
import pytest
from pytest_httpx import HTTPXMock

from helpers import hanging_transport
from ots_remote.config import MAX_REDIRECTS, MAX_RESPONSE_SIZE, ClientConfig
from ots_remote.errors import (
    ExceededSizeError,
    HttpStatusError,
    NetworkError,
    RemoteError,
    RequestTimeoutError,
)
from ots_remote.exchange import ExchangeResponse, bounded_exchange, check_status

BASE_URL = "https://server.example.com"


def _config(**kwargs: object) -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# bounded_exchange()
# ---------------------------------------------------------------------------


class TestBoundedExchange:
    @pytest.mark.asyncio
    async def test_returns_status_without_raising(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/x", status_code=500, content=b"boom")

        response = await bounded_exchange(_config(), "GET", "/x")

        assert response.status_code == 500
        assert response.reason == "Internal Server Error"
        assert response.body == b"boom"
        assert not response.ok

    @pytest.mark.asyncio
    async def test_sends_config_headers_and_body(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=f"{BASE_URL}/x")

        await bounded_exchange(_config(headers={"X-Test": "1"}), "POST", "/x", content=b"raw")

        request = httpx_mock.get_requests()[0]
        assert request.headers["X-Test"] == "1"
        assert request.content == b"raw"

    @pytest.mark.asyncio
    async def test_body_at_limit_accepted(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/x", content=b"a" * MAX_RESPONSE_SIZE)

        response = await bounded_exchange(_config(), "GET", "/x")

        assert len(response.body) == MAX_RESPONSE_SIZE

    @pytest.mark.asyncio
    async def test_custom_limit(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/x", content=b"a" * 11)

        with pytest.raises(ExceededSizeError) as exc:
            await bounded_exchange(_config(), "GET", "/x", limit=10)

        assert exc.value.limit == 10

    @pytest.mark.asyncio
    async def test_size_error_not_rewrapped(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/x", content=b"a" * (MAX_RESPONSE_SIZE + 1))

        with pytest.raises(RemoteError) as exc:
            await bounded_exchange(_config(), "GET", "/x")

        assert type(exc.value) is ExceededSizeError

    @pytest.mark.asyncio
    async def test_os_error_becomes_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise ConnectionResetError("connection reset by peer")

        with pytest.raises(NetworkError) as exc:
            await bounded_exchange(_config(), "GET", "/x", transport=httpx.MockTransport(handler))

        assert "connection reset by peer" in str(exc.value)
        assert isinstance(exc.value.__cause__, ConnectionResetError)
        assert exc.value.details["url"] == f"{BASE_URL}/x"

    @pytest.mark.asyncio
    async def test_deadline_covers_whole_exchange(self) -> None:
        with pytest.raises(RequestTimeoutError) as exc:
            await bounded_exchange(
                _config(timeout_ms=20), "GET", "/x", transport=hanging_transport()
            )

        assert exc.value.details == {"url": f"{BASE_URL}/x", "timeout_ms": 20}

    @pytest.mark.asyncio
    async def test_redirect_followed(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/x", status_code=302, headers={"Location": f"{BASE_URL}/y"}
        )
        httpx_mock.add_response(url=f"{BASE_URL}/y", content=b"moved")

        response = await bounded_exchange(_config(), "GET", "/x")

        assert response.status_code == 200
        assert response.body == b"moved"
        assert [str(r.url) for r in httpx_mock.get_requests()] == [
            f"{BASE_URL}/x",
            f"{BASE_URL}/y",
        ]

    @pytest.mark.asyncio
    async def test_redirect_loop_is_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"Location": f"{BASE_URL}/x"})

        with pytest.raises(NetworkError) as exc:
            await bounded_exchange(_config(), "GET", "/x", transport=httpx.MockTransport(handler))

        assert isinstance(exc.value.__cause__, httpx.TooManyRedirects)
        assert exc.value.details["error"] == "TooManyRedirects"

    @pytest.mark.asyncio
    async def test_redirect_hops_capped(self) -> None:
        hops: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            hops.append(str(request.url))
            return httpx.Response(302, headers={"Location": f"{BASE_URL}/x"})

        with pytest.raises(NetworkError):
            await bounded_exchange(_config(), "GET", "/x", transport=httpx.MockTransport(handler))

        assert len(hops) == MAX_REDIRECTS + 1

    @pytest.mark.asyncio
    async def test_size_guard_applies_after_redirect(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/x", status_code=301, headers={"Location": f"{BASE_URL}/y"}
        )
        httpx_mock.add_response(url=f"{BASE_URL}/y", content=b"\x00" * (MAX_RESPONSE_SIZE + 1))

        with pytest.raises(ExceededSizeError):
            await bounded_exchange(_config(), "GET", "/x")


class TestCheckStatus:
    def test_2xx_passes(self) -> None:
        check_status(ExchangeResponse(url="u", status_code=204, reason="No Content", body=b""))

    def test_non_2xx_raises(self) -> None:
        response = ExchangeResponse(url="u", status_code=302, reason="Found", body=b"")

        with pytest.raises(HttpStatusError) as exc:
            check_status(response)

        assert exc.value.status_code == 302
        assert exc.value.details["url"] == "u"


# ---------------------------------------------------------------------------
# ClientConfig
# ---------------------------------------------------------------------------


class TestClientConfig:
    def test_trailing_slashes_stripped(self) -> None:
        assert ClientConfig(base_url=BASE_URL + "//").base_url == BASE_URL

    def test_url_for(self) -> None:
        assert _config().url_for("/digest") == f"{BASE_URL}/digest"

    def test_timeout_seconds(self) -> None:
        assert _config(timeout_ms=1500).timeout_s == 1.5
        assert _config(timeout_ms=None).timeout_s is None

    @pytest.mark.parametrize("timeout_ms", [0, -1])
    def test_non_positive_timeout_rejected(self, timeout_ms: int) -> None:
        with pytest.raises(ValueError):
            _config(timeout_ms=timeout_ms)

    def test_frozen(self) -> None:
        config = _config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.base_url = "https://other.example.com"  # type: ignore[misc]

    def test_headers_read_only_and_copied(self) -> None:
        headers = {"Accept": "text/plain"}
        config = _config(headers=headers)
        headers["Accept"] = "changed"

        assert config.headers["Accept"] == "text/plain"
        with pytest.raises(TypeError):
            config.headers["Accept"] = "x"  # type: ignore[index]
