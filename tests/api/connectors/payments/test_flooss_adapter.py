"""Testes do adapter Flooss (Bearer + X-Signature)."""

from __future__ import annotations

import json
from decimal import Decimal

import httpx
import pytest

from api.connectors.payments import FloossAdapter
from app.domain.payment import PaymentRequest, PaymentStatus, ProviderCredentials
from app.infra.crypto import sign

BASE_URL = "https://flooss.test"
PAYMENTS_PATH = "/v1/payments"


def _credentials(**overrides: str) -> ProviderCredentials:
    values = {"api_key": "fl-key", "merchant_id": "M-1", "secret_key": "fl-secret"}
    values.update(overrides)
    return ProviderCredentials(**values)


def _request(**overrides: object) -> PaymentRequest:
    values: dict[str, object] = {
        "transaction_id": "T1",
        "amount": Decimal("100"),
        "currency": "SAR",
    }
    values.update(overrides)
    return PaymentRequest(**values)


def _respond(status_code: int, body: dict[str, object]):
    return lambda request: httpx.Response(status_code, json=body)


@pytest.mark.asyncio
async def test_created_payment_is_pending_with_checkout_url(provider_stub) -> None:
    transport, stub = provider_stub(
        {
            PAYMENTS_PATH: _respond(
                201,
                {"payment_id": "P1", "status": "created", "checkout_url": "https://pay/x"},
            )
        }
    )

    result = await FloossAdapter(transport).process(_credentials(), _request(), BASE_URL)

    assert result.provider == "flooss"
    assert result.status is PaymentStatus.PENDING
    assert result.external_id == "P1"
    assert result.redirect_url == "https://pay/x"
    assert result.error is None
    assert len(stub.calls_to(PAYMENTS_PATH)) == 1


@pytest.mark.asyncio
async def test_request_is_signed_over_transmitted_bytes(provider_stub) -> None:
    transport, stub = provider_stub(
        {PAYMENTS_PATH: _respond(200, {"payment_id": "P1", "status": "pending"})}
    )

    await FloossAdapter(transport).process(
        _credentials(),
        _request(customer_id="C9", metadata={"order": "42"}),
        BASE_URL,
    )

    sent = stub.calls_to(PAYMENTS_PATH)[0]
    assert sent.headers["authorization"] == "Bearer fl-key"
    assert sent.headers["x-signature"] == sign(sent.content, "fl-secret")

    body = json.loads(sent.content)
    assert body == {
        "merchant_id": "M-1",
        "amount": 100,
        "currency": "SAR",
        "reference": "T1",
        "customer_id": "C9",
        "metadata": {"order": "42"},
    }


@pytest.mark.asyncio
async def test_completed_status_maps_to_completed(provider_stub) -> None:
    transport, _ = provider_stub(
        {PAYMENTS_PATH: _respond(200, {"payment_id": "P2", "status": "paid"})}
    )

    result = await FloossAdapter(transport).process(_credentials(), _request(), BASE_URL)

    assert result.status is PaymentStatus.COMPLETED
    assert result.redirect_url is None


@pytest.mark.asyncio
async def test_declined_status_is_failed_with_provider_message(provider_stub) -> None:
    body = {"payment_id": "P3", "status": "declined", "message": "Insufficient funds"}
    transport, _ = provider_stub({PAYMENTS_PATH: _respond(200, body)})

    result = await FloossAdapter(transport).process(_credentials(), _request(), BASE_URL)

    assert result.status is PaymentStatus.FAILED
    assert result.error == "Insufficient funds"
    assert result.external_id == "P3"
    assert result.raw_response == body


@pytest.mark.asyncio
async def test_unrecognized_status_fails_closed(provider_stub) -> None:
    transport, _ = provider_stub(
        {PAYMENTS_PATH: _respond(200, {"payment_id": "P4", "status": "on_hold"})}
    )

    result = await FloossAdapter(transport).process(_credentials(), _request(), BASE_URL)

    assert result.status is PaymentStatus.FAILED
    assert "unrecognized_status" in (result.error or "")
    assert result.external_id == "P4"
    assert result.raw_response == {"payment_id": "P4", "status": "on_hold"}


@pytest.mark.asyncio
async def test_http_error_uses_provider_message(provider_stub) -> None:
    transport, _ = provider_stub(
        {PAYMENTS_PATH: _respond(422, {"message": "Invalid merchant"})}
    )

    result = await FloossAdapter(transport).process(_credentials(), _request(), BASE_URL)

    assert result.status is PaymentStatus.FAILED
    assert result.error == "Invalid merchant"
    assert result.raw_response == {"message": "Invalid merchant"}


@pytest.mark.asyncio
async def test_missing_secret_fails_without_calling_provider(provider_stub) -> None:
    transport, stub = provider_stub({})

    result = await FloossAdapter(transport).process(
        _credentials(secret_key=""), _request(), BASE_URL
    )

    assert result.status is PaymentStatus.FAILED
    assert result.error == "missing_credentials: secret_key"
    assert stub.requests == []


@pytest.mark.asyncio
async def test_credentials_never_appear_in_logs(provider_stub, caplog) -> None:
    transport, _ = provider_stub({PAYMENTS_PATH: _respond(500, {"message": "down"})})

    with caplog.at_level("DEBUG"):
        await FloossAdapter(transport).process(_credentials(), _request(), BASE_URL)

    dumped = " ".join(str(record.__dict__) for record in caplog.records)
    assert "fl-key" not in dumped
    assert "fl-secret" not in dumped


@pytest.mark.asyncio
async def test_missing_currency_uses_adapter_default(provider_stub) -> None:
    transport, stub = provider_stub(
        {PAYMENTS_PATH: _respond(200, {"payment_id": "P5", "status": "created"})}
    )
    request = PaymentRequest(transaction_id="T1", amount=Decimal("100"))

    await FloossAdapter(transport).process(_credentials(), request, BASE_URL)
    await FloossAdapter(transport, default_currency="SAR").process(
        _credentials(), request, BASE_URL
    )

    first, second = (json.loads(call.content) for call in stub.calls_to(PAYMENTS_PATH))
    assert first["currency"] == "IQD"
    assert second["currency"] == "SAR"
