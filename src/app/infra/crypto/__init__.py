"""Signing Engine para assinatura de requisições e verificação de webhooks."""

from .signature import SIGNATURE_PREFIX, canonical_json, sign, verify

__all__ = [
    "SIGNATURE_PREFIX",
    "canonical_json",
    "sign",
    "verify",
]
