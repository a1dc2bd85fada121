"""Factories de wiring da camada de pagamentos.

Único ponto onde app/ conhece as implementações concretas de api/connectors.
Credenciais saem das settings aqui e seguem explícitas para cada chamada.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.connectors.payments import (
    FloossAdapter,
    JawaliAdapter,
    PayPalAdapter,
    PayPalOAuthClient,
    PayPalWebhookVerifier,
    create_hmac_verifiers,
)
from app.domain.payment import ProviderCredentials
from app.infra.http import HttpClientConfig, TransportClient
from app.services import AdapterRegistry, PaymentDispatcher, TokenCache, WebhookVerifier
from config.settings import PAYPAL, get_payment_settings

if TYPE_CHECKING:
    import httpx

    from app.protocols.http_client import PaymentTransportProtocol
    from config.settings import PaymentSettings, ProviderSettings


def build_provider_credentials(provider: ProviderSettings) -> ProviderCredentials:
    """Converte settings de um provider em ProviderCredentials (vazio -> None)."""
    return ProviderCredentials(
        api_key=provider.api_key or None,
        merchant_id=provider.merchant_id or None,
        secret_key=provider.secret_key or None,
        pin=provider.pin or None,
        client_id=provider.client_id or None,
        client_secret=provider.client_secret or None,
    )


def create_transport_client(
    settings: PaymentSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TransportClient:
    """Transport Client com o timeout configurado."""
    payments = settings or get_payment_settings()
    config = HttpClientConfig(timeout_seconds=payments.request_timeout_seconds)
    return TransportClient(config=config, transport=transport)


def create_payment_dispatcher(
    settings: PaymentSettings | None = None,
    transport: PaymentTransportProtocol | None = None,
) -> PaymentDispatcher:
    """Monta registry com os três adapters e o verificador de webhooks.

    Args:
        settings: PaymentSettings opcional. Se None, carrega do ambiente.
        transport: Transport opcional (testes injetam um com MockTransport).
    """
    payments = settings or get_payment_settings()
    http = transport or create_transport_client(payments)
    oauth = PayPalOAuthClient(http, TokenCache(ttl_seconds=payments.token_cache_ttl_seconds))

    registry = AdapterRegistry(
        [
            FloossAdapter(http, default_currency=payments.flooss_default_currency),
            JawaliAdapter(http, default_currency=payments.jawali_default_currency),
            PayPalAdapter(
                http,
                oauth,
                brand_name=payments.paypal_brand_name,
                locale=payments.paypal_locale,
                default_currency=payments.paypal_default_currency,
            ),
        ]
    )

    paypal = payments.provider(PAYPAL)
    webhook_verifier = WebhookVerifier(
        [
            *create_hmac_verifiers(),
            PayPalWebhookVerifier(
                http,
                credentials=build_provider_credentials(paypal) if paypal.configured else None,
                api_base_url=paypal.api_base_url or None,
                oauth_client=oauth,
            ),
        ]
    )
    return PaymentDispatcher(registry, webhook_verifier)
