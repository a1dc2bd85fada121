"""Testes do TransportClient sobre httpx.MockTransport."""

from __future__ import annotations

import base64

import httpx
import pytest

from app.infra.http import HttpClientConfig, TransportClient
from app.infra.http.errors import extract_provider_message
from utils.errors import TransportError

URL = "https://provider.test/v1/payments"


def _client(handler, timeout: float = 30.0) -> TransportClient:
    return TransportClient(
        HttpClientConfig(timeout_seconds=timeout),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_post_json_sends_body_bytes_unchanged() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(201, json={"payment_id": "P1"})

    body = b'{"amount":100,"reference":"T1"}'
    response = await _client(handler).post_json(URL, body, {"Authorization": "Bearer k"})

    assert response.status_code == 201
    assert response.data == {"payment_id": "P1"}
    assert captured[0].content == body
    assert captured[0].headers["content-type"] == "application/json"
    assert captured[0].headers["authorization"] == "Bearer k"


@pytest.mark.asyncio
async def test_post_form_sends_basic_auth_and_form_body() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"access_token": "tok"})

    await _client(handler).post_form(
        "https://provider.test/v1/oauth2/token",
        {"grant_type": "client_credentials"},
        basic_auth=("client", "secret"),
    )

    expected = base64.b64encode(b"client:secret").decode()
    assert captured[0].headers["authorization"] == f"Basic {expected}"
    assert captured[0].content == b"grant_type=client_credentials"
    assert captured[0].headers["content-type"] == "application/x-www-form-urlencoded"


@pytest.mark.asyncio
async def test_non_2xx_raises_with_provider_message_and_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"message": "Invalid merchant"})

    with pytest.raises(TransportError) as exc_info:
        await _client(handler).post_json(URL, b"{}")

    error = exc_info.value
    assert error.status_code == 422
    assert error.provider_message == "Invalid merchant"
    assert error.best_message == "Invalid merchant"
    assert error.response_body == {"message": "Invalid merchant"}
    assert error.is_timeout is False


@pytest.mark.asyncio
async def test_non_2xx_without_message_falls_back_to_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    with pytest.raises(TransportError) as exc_info:
        await _client(handler).post_json(URL, b"{}")

    assert exc_info.value.best_message == "http_status_500"
    assert exc_info.value.response_body == "boom"


@pytest.mark.asyncio
async def test_timeout_raises_transport_error_flagged_as_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(TransportError) as exc_info:
        await _client(handler, timeout=30.0).post_json(URL, b"{}")

    assert exc_info.value.is_timeout is True
    assert str(exc_info.value) == "timeout of 30s exceeded"
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_connection_error_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(TransportError, match="connection_error: ConnectError"):
        await _client(handler).post_json(URL, b"{}")


@pytest.mark.asyncio
async def test_success_with_non_object_body_is_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>ok</html>")

    with pytest.raises(TransportError, match="invalid_json_response"):
        await _client(handler).post_json(URL, b"{}")


def test_extract_provider_message_formats() -> None:
    assert extract_provider_message({"error_description": "bad client"}) == "bad client"
    assert extract_provider_message({"error": {"message": "nested"}}) == "nested"
    assert extract_provider_message({"error": "invalid_client"}) == "invalid_client"
    assert (
        extract_provider_message({"details": [{"issue": "INVALID_PARAMETER_VALUE"}]})
        == "INVALID_PARAMETER_VALUE"
    )
    assert extract_provider_message({"status": "x"}) is None
    assert extract_provider_message("text") is None
