"""Modelos de domínio de pagamento."""

from app.domain.payment import (
    PaymentProviderResult,
    PaymentRequest,
    PaymentStatus,
    ProviderCredentials,
    WebhookVerificationRequest,
)

__all__ = [
    "PaymentProviderResult",
    "PaymentRequest",
    "PaymentStatus",
    "ProviderCredentials",
    "WebhookVerificationRequest",
]
