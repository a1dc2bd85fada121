"""Protocolos e contratos do core da aplicação."""

from .http_client import PaymentTransportProtocol, TransportResponse
from .payment_adapter import PaymentAdapterProtocol
from .webhook_verifier import ProviderWebhookVerifierProtocol

__all__ = [
    "PaymentAdapterProtocol",
    "PaymentTransportProtocol",
    "ProviderWebhookVerifierProtocol",
    "TransportResponse",
]
