"""Serviços de aplicação da camada de pagamentos.

Unidades de orquestração sem IO direto; IO fica em app/infra e api/connectors.
"""

from app.services.payment_dispatcher import AdapterRegistry, PaymentDispatcher
from app.services.payment_fallback import FallbackResult, FallbackTarget, process_with_fallback
from app.services.status_normalizer import known_tokens, normalize, resolve_status
from app.services.token_cache import TokenCache
from app.services.webhook_verifier import WebhookVerifier

__all__ = [
    "AdapterRegistry",
    "FallbackResult",
    "FallbackTarget",
    "PaymentDispatcher",
    "TokenCache",
    "WebhookVerifier",
    "known_tokens",
    "normalize",
    "process_with_fallback",
    "resolve_status",
]
