from __future__ import annotations

import json
import logging

import httpx
import pytest

from loginkit.sidechannel.authenticator import SideChannelAuthenticator


def _authenticator(handler, **kwargs) -> SideChannelAuthenticator:
    return SideChannelAuthenticator(address="localhost:8981", transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_sends_find_missing_blobs_with_cookie() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"missingBlobDigests": []})

    assert await _authenticator(handler).authenticate("tok123") is True

    request = seen[0]
    assert request.method == "POST"
    assert request.url == httpx.URL("http://localhost:8981/v2/blobs:findMissing")
    assert request.headers["cookie"] == "Creds=tok123"
    payload = json.loads(request.content)
    assert len(payload["blobDigests"]) == 1
    assert payload["blobDigests"][0]["sizeBytes"] == "22733"


@pytest.mark.asyncio
async def test_instance_name_is_part_of_path() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    await _authenticator(handler, instance="/main/").authenticate("tok")

    assert seen[0].url.path == "/v2/main/blobs:findMissing"


def test_address_with_scheme_is_kept() -> None:
    authenticator = SideChannelAuthenticator(address="https://cache.local:9000/")
    assert authenticator.base_url == "https://cache.local:9000"


@pytest.mark.asyncio
async def test_dial_failure_is_swallowed() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert await _authenticator(handler).authenticate("tok") is False


@pytest.mark.asyncio
async def test_rpc_error_is_swallowed() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "unauthenticated"})

    assert await _authenticator(handler).authenticate("tok") is False


@pytest.mark.asyncio
async def test_unexpected_error_is_swallowed() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise RuntimeError("daemon exploded")

    assert await _authenticator(handler).authenticate("tok") is False


@pytest.mark.asyncio
async def test_failure_logged_at_debug_level(caplog: pytest.LogCaptureFixture) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with caplog.at_level(logging.DEBUG, logger="loginkit.sidechannel.authenticator"):
        await _authenticator(handler).authenticate("tok")

    records = [r for r in caplog.records if "side-channel" in r.getMessage()]
    assert records
    assert all(r.levelno == logging.DEBUG for r in records)


@pytest.mark.asyncio
async def test_debug_mode_logs_failure_as_error(caplog: pytest.LogCaptureFixture) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with caplog.at_level(logging.DEBUG, logger="loginkit.sidechannel.authenticator"):
        assert await _authenticator(handler, debug=True).authenticate("tok") is False

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors
    assert errors[0].exc_info is not None


@pytest.mark.asyncio
async def test_debug_mode_restores_transport_log_levels() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        assert logging.getLogger("httpx").level == logging.DEBUG
        return httpx.Response(200, json={"missingBlobDigests": []})

    httpx_logger = logging.getLogger("httpx")
    before = httpx_logger.level
    httpx_logger.setLevel(logging.WARNING)
    try:
        assert await _authenticator(handler, debug=True).authenticate("tok") is True
        assert httpx_logger.level == logging.WARNING
    finally:
        httpx_logger.setLevel(before)
