"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthenticationError,
    PaymentIntegrationError,
    ProviderRejectedError,
    TransportError,
    UnknownProviderError,
    UnrecognizedStatusError,
)

__all__ = [
    "AuthenticationError",
    "PaymentIntegrationError",
    "ProviderRejectedError",
    "TransportError",
    "UnknownProviderError",
    "UnrecognizedStatusError",
]
