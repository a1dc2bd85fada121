"""Testes dos modelos de domínio de pagamento."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.domain.payment import (
    PaymentProviderResult,
    PaymentRequest,
    PaymentStatus,
    ProviderCredentials,
    WebhookVerificationRequest,
)
from utils.errors import AuthenticationError


class TestPaymentRequest:
    def test_currency_is_upper_cased(self) -> None:
        request = PaymentRequest(transaction_id="T1", amount=Decimal("10"), currency="sar")
        assert request.currency == "SAR"

    @pytest.mark.parametrize("amount", ["0", "-1"])
    def test_non_positive_amount_is_rejected(self, amount: str) -> None:
        with pytest.raises(ValidationError):
            PaymentRequest(transaction_id="T1", amount=Decimal(amount))

    def test_empty_transaction_id_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PaymentRequest(transaction_id="", amount=Decimal("1"))

    def test_request_is_immutable(self) -> None:
        request = PaymentRequest(transaction_id="T1", amount=Decimal("1"))
        with pytest.raises(ValidationError):
            request.amount = Decimal("2")  # type: ignore[misc]

    def test_unknown_fields_are_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PaymentRequest(transaction_id="T1", amount=Decimal("1"), api_key="leak")


class TestProviderCredentials:
    def test_secrets_are_hidden_in_repr_and_dump(self) -> None:
        credentials = ProviderCredentials(
            api_key="key-123",
            secret_key="sec-456",
            pin="9999",
            client_secret="cs-789",
            merchant_id="M1",
        )
        rendered = repr(credentials) + str(credentials) + str(credentials.model_dump())

        for secret in ("key-123", "sec-456", "9999", "cs-789"):
            assert secret not in rendered
        assert "M1" in rendered

    def test_value_returns_plain_text(self) -> None:
        credentials = ProviderCredentials(pin="1234")
        assert credentials.value("pin") == "1234"
        assert credentials.value("api_key") == ""

    def test_require_lists_missing_fields(self) -> None:
        credentials = ProviderCredentials(api_key="k")

        with pytest.raises(AuthenticationError, match="missing_credentials: merchant_id, pin"):
            credentials.require("api_key", "merchant_id", "pin")


class TestPaymentProviderResult:
    def test_failed_requires_error(self) -> None:
        with pytest.raises(ValidationError):
            PaymentProviderResult(provider="flooss", status=PaymentStatus.FAILED)

    @pytest.mark.parametrize("status", [PaymentStatus.PENDING, PaymentStatus.COMPLETED])
    def test_error_is_forbidden_when_not_failed(self, status: PaymentStatus) -> None:
        with pytest.raises(ValidationError):
            PaymentProviderResult(provider="flooss", status=status, error="oops")

    def test_failure_factory(self) -> None:
        result = PaymentProviderResult.failure("jawali", "timeout", {"raw": True})

        assert result.is_failed
        assert result.error == "timeout"
        assert result.external_id is None
        assert result.raw_response == {"raw": True}

    def test_failure_factory_never_leaves_error_empty(self) -> None:
        assert PaymentProviderResult.failure("jawali", "").error == "unknown_error"

    def test_json_dump_uses_canonical_status_value(self) -> None:
        result = PaymentProviderResult(provider="paypal", status=PaymentStatus.PENDING)
        assert result.model_dump(mode="json")["status"] == "pending"


class TestWebhookVerificationRequest:
    def test_signature_takes_precedence_over_headers(self) -> None:
        request = WebhookVerificationRequest(
            provider="flooss",
            raw_payload=b"{}",
            signature="abc",
            headers={"x-signature": "def"},
        )
        assert request.signature_or_headers == "abc"

    def test_headers_used_when_signature_absent(self) -> None:
        request = WebhookVerificationRequest(
            provider="paypal",
            raw_payload=b"{}",
            headers={"paypal-transmission-id": "t1"},
        )
        assert request.signature_or_headers == {"paypal-transmission-id": "t1"}


def test_failure_keeps_provider_reference() -> None:
    result = PaymentProviderResult.failure("jawali", "insufficient funds", external_id="J-58")

    assert result.is_failed
    assert result.external_id == "J-58"
