"""Adapter PayPal: OAuth2 client-credentials + criação de order (Orders v2).

O status canônico é sempre pending: o fluxo só termina quando o cliente
aprova a order no checkout hospedado (link rel="approve").
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.payment import PaymentProviderResult, PaymentStatus
from config.settings import PAYPAL
from config.settings.payments import (
    DEFAULT_PAYPAL_BRAND_NAME,
    DEFAULT_PAYPAL_CURRENCY,
    DEFAULT_PAYPAL_LOCALE,
)

from .base import BasePaymentAdapter, compact, format_amount, optional_str
from .paypal_oauth import PayPalOAuthClient

if TYPE_CHECKING:
    from app.domain.payment import PaymentRequest, ProviderCredentials
    from app.protocols.http_client import PaymentTransportProtocol, TransportResponse

APPROVE_REL = "approve"


def find_link(links: object, rel: str) -> str | None:
    """Procura o href do link com a relação informada."""
    if not isinstance(links, list):
        return None
    for link in links:
        if isinstance(link, dict) and link.get("rel") == rel:
            return optional_str(link.get("href"))
    return None


class PayPalAdapter(BasePaymentAdapter):
    """POST {base}/v2/checkout/orders com bearer token obtido via OAuth2."""

    provider_id = PAYPAL
    endpoint_path = "/v2/checkout/orders"
    external_id_field = "id"

    def __init__(
        self,
        transport: PaymentTransportProtocol,
        oauth_client: PayPalOAuthClient | None = None,
        *,
        brand_name: str = DEFAULT_PAYPAL_BRAND_NAME,
        locale: str = DEFAULT_PAYPAL_LOCALE,
        default_currency: str = DEFAULT_PAYPAL_CURRENCY,
    ) -> None:
        super().__init__(transport)
        self._oauth = oauth_client or PayPalOAuthClient(transport)
        self._brand_name = brand_name
        self._locale = locale
        self._default_currency = default_currency

    def translate_request(
        self,
        request: PaymentRequest,
        credentials: ProviderCredentials,
    ) -> dict[str, Any]:
        purchase_unit = compact(
            {
                "reference_id": request.transaction_id,
                "amount": {
                    "currency_code": request.currency or self._default_currency,
                    "value": format_amount(request.amount),
                },
                "description": request.metadata.get("description"),
                "invoice_id": request.invoice_id,
            }
        )
        application_context = compact(
            {
                "return_url": request.return_url,
                "cancel_url": request.callback_url,
                "brand_name": self._brand_name,
                "locale": self._locale,
                "shipping_preference": "NO_SHIPPING",
                "user_action": "PAY_NOW",
            }
        )
        return {
            "intent": "CAPTURE",
            "purchase_units": [purchase_unit],
            "application_context": application_context,
        }

    async def authenticate(
        self,
        payload: dict[str, Any],
        credentials: ProviderCredentials,
        api_base_url: str,
    ) -> dict[str, str]:
        access_token = await self._oauth.get_access_token(credentials, api_base_url)
        return {"Authorization": f"Bearer {access_token}"}

    def parse_response(self, response: TransportResponse) -> PaymentProviderResult:
        data = response.data
        return PaymentProviderResult(
            provider=self.provider_id,
            status=PaymentStatus.PENDING,
            external_id=self.extract_external_id(data),
            redirect_url=find_link(data.get("links"), APPROVE_REL),
            raw_response=data,
        )
