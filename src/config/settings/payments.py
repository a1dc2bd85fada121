"""Settings dos provedores de pagamento.

Cada provider tem URL base, credenciais e chave de verificação de webhook
carregadas do ambiente. O núcleo nunca lê estas settings diretamente: o
bootstrap monta ProviderCredentials e as passa explicitamente a cada chamada.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from functools import lru_cache

FLOOSS = "flooss"
JAWALI = "jawali"
PAYPAL = "paypal"

DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_TOKEN_CACHE_TTL_SECONDS = 300
DEFAULT_PAYPAL_BRAND_NAME = "Developer System"
DEFAULT_PAYPAL_LOCALE = "ar-SA"
DEFAULT_FLOOSS_CURRENCY = "IQD"
DEFAULT_JAWALI_CURRENCY = "YER"
DEFAULT_PAYPAL_CURRENCY = "USD"
DEFAULT_PAYPAL_API_URL = "https://api-m.sandbox.paypal.com"


@dataclass(frozen=True)
class ProviderSettings:
    """Configuração de um provider.

    Attributes:
        api_base_url: URL base da API do provider
        api_key: API key (Flooss, Jawali)
        merchant_id: ID do lojista (Flooss, Jawali)
        secret_key: Secret HMAC (Flooss)
        pin: PIN enviado no corpo (Jawali)
        client_id: OAuth2 client id (PayPal)
        client_secret: OAuth2 client secret (PayPal)
        webhook_key: Chave de verificação de webhook (secret HMAC ou webhook id)
    """

    api_base_url: str = ""
    api_key: str = ""
    merchant_id: str = ""
    secret_key: str = ""
    pin: str = ""
    client_id: str = ""
    client_secret: str = ""
    webhook_key: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.api_base_url)


@dataclass(frozen=True)
class PaymentSettings:
    """Configurações da camada de integração de pagamentos.

    Attributes:
        request_timeout_seconds: Timeout rígido por chamada HTTP
        token_cache_ttl_seconds: TTL do cache de token OAuth2 (0 desabilita)
        paypal_brand_name: brand_name enviado no checkout hospedado
        paypal_locale: locale do checkout hospedado
        paypal_default_currency: currency_code quando a requisição não informa
        flooss_default_currency: Moeda Flooss quando a requisição não informa
        jawali_default_currency: Moeda Jawali quando a requisição não informa
        providers: Settings por provider id
    """

    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    token_cache_ttl_seconds: int = DEFAULT_TOKEN_CACHE_TTL_SECONDS
    paypal_brand_name: str = DEFAULT_PAYPAL_BRAND_NAME
    paypal_locale: str = DEFAULT_PAYPAL_LOCALE
    paypal_default_currency: str = DEFAULT_PAYPAL_CURRENCY
    flooss_default_currency: str = DEFAULT_FLOOSS_CURRENCY
    jawali_default_currency: str = DEFAULT_JAWALI_CURRENCY
    providers: dict[str, ProviderSettings] = field(default_factory=dict)

    def provider(self, provider_id: str) -> ProviderSettings:
        """Retorna settings do provider (vazias se não configurado)."""
        return self.providers.get(provider_id.lower(), ProviderSettings())

    def validate(self) -> list[str]:
        """Valida configurações mínimas.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.request_timeout_seconds <= 0:
            errors.append("PAYMENTS_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.token_cache_ttl_seconds < 0:
            errors.append("PAYMENTS_TOKEN_CACHE_TTL_SECONDS deve ser >= 0")

        if len(self.flooss_default_currency) != 3:
            errors.append("FLOOSS_DEFAULT_CURRENCY deve ter 3 letras")

        if len(self.jawali_default_currency) != 3:
            errors.append("JAWALI_DEFAULT_CURRENCY deve ter 3 letras")

        if not any(p.configured for p in self.providers.values()):
            errors.append("nenhum provider de pagamento configurado (*_API_URL)")

        flooss = self.provider(FLOOSS)
        if flooss.configured and not flooss.secret_key:
            errors.append("FLOOSS_SECRET_KEY não configurado")

        paypal = self.provider(PAYPAL)
        if paypal.configured and not (paypal.client_id and paypal.client_secret):
            errors.append("PAYPAL_CLIENT_ID/PAYPAL_CLIENT_SECRET não configurados")

        return errors


def _load_provider(prefix: str, default_url: str = "") -> ProviderSettings:
    return ProviderSettings(
        api_base_url=os.getenv(f"{prefix}_API_URL", default_url).rstrip("/"),
        api_key=os.getenv(f"{prefix}_API_KEY", ""),
        merchant_id=os.getenv(f"{prefix}_MERCHANT_ID", ""),
        secret_key=os.getenv(f"{prefix}_SECRET_KEY", ""),
        pin=os.getenv(f"{prefix}_PIN", ""),
        client_id=os.getenv(f"{prefix}_CLIENT_ID", ""),
        client_secret=os.getenv(f"{prefix}_CLIENT_SECRET", ""),
        webhook_key=os.getenv(f"{prefix}_WEBHOOK_KEY", ""),
    )


def _load_from_env() -> PaymentSettings:
    """Carrega PaymentSettings a partir de variáveis de ambiente."""
    flooss = _load_provider("FLOOSS")
    jawali = _load_provider("JAWALI")
    paypal = _load_provider("PAYPAL", DEFAULT_PAYPAL_API_URL)

    # Webhooks Flooss/Jawali são assinados com o secret/API key quando
    # nenhuma chave dedicada é informada.
    if not flooss.webhook_key and flooss.secret_key:
        flooss = _with_webhook_key(flooss, flooss.secret_key)
    if not jawali.webhook_key and jawali.api_key:
        jawali = _with_webhook_key(jawali, jawali.api_key)
    if not paypal.webhook_key:
        paypal = _with_webhook_key(paypal, os.getenv("PAYPAL_WEBHOOK_ID", ""))

    return PaymentSettings(
        request_timeout_seconds=float(
            os.getenv("PAYMENTS_REQUEST_TIMEOUT_SECONDS", str(DEFAULT_REQUEST_TIMEOUT_SECONDS))
        ),
        token_cache_ttl_seconds=int(
            os.getenv("PAYMENTS_TOKEN_CACHE_TTL_SECONDS", str(DEFAULT_TOKEN_CACHE_TTL_SECONDS))
        ),
        paypal_brand_name=os.getenv("PAYPAL_BRAND_NAME", DEFAULT_PAYPAL_BRAND_NAME),
        paypal_locale=os.getenv("PAYPAL_LOCALE", DEFAULT_PAYPAL_LOCALE),
        paypal_default_currency=os.getenv(
            "PAYPAL_DEFAULT_CURRENCY", DEFAULT_PAYPAL_CURRENCY
        ).upper(),
        flooss_default_currency=os.getenv(
            "FLOOSS_DEFAULT_CURRENCY", DEFAULT_FLOOSS_CURRENCY
        ).upper(),
        jawali_default_currency=os.getenv(
            "JAWALI_DEFAULT_CURRENCY", DEFAULT_JAWALI_CURRENCY
        ).upper(),
        providers={FLOOSS: flooss, JAWALI: jawali, PAYPAL: paypal},
    )


def _with_webhook_key(settings: ProviderSettings, key: str) -> ProviderSettings:
    return replace(settings, webhook_key=key)


@lru_cache(maxsize=1)
def get_payment_settings() -> PaymentSettings:
    """Retorna instância cacheada de PaymentSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
