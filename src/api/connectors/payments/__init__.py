"""Conectores de provedores de pagamento: adapters de borda.

Este pacote é o único ponto de IO com as APIs de pagamento:
- flooss: API key + assinatura HMAC, redirect para checkout
- jawali: API key estática, PIN no corpo
- paypal: OAuth2 client-credentials + Orders v2 com link de aprovação
- webhooks: verificação de autenticidade de notificações por provider
"""

from .base import BasePaymentAdapter
from .flooss import FloossAdapter
from .jawali import JawaliAdapter
from .paypal import PayPalAdapter, find_link
from .paypal_oauth import PayPalOAuthClient
from .webhooks import HmacWebhookVerifier, PayPalWebhookVerifier, create_hmac_verifiers

__all__ = [
    "BasePaymentAdapter",
    "FloossAdapter",
    "HmacWebhookVerifier",
    "JawaliAdapter",
    "PayPalAdapter",
    "PayPalOAuthClient",
    "PayPalWebhookVerifier",
    "create_hmac_verifiers",
    "find_link",
]
