"""Adapter Flooss: API key + assinatura HMAC, criação com redirect."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.payment import PaymentProviderResult
from app.infra.crypto import sign
from config.settings import FLOOSS
from config.settings.payments import DEFAULT_FLOOSS_CURRENCY

from .base import BasePaymentAdapter, compact, json_amount, optional_str

if TYPE_CHECKING:
    from app.domain.payment import PaymentRequest, ProviderCredentials
    from app.protocols.http_client import PaymentTransportProtocol, TransportResponse

SIGNATURE_HEADER = "X-Signature"


class FloossAdapter(BasePaymentAdapter):
    """POST {base}/v1/payments com Bearer + X-Signature.

    A assinatura é calculada sobre os mesmos bytes enviados no corpo
    (BasePaymentAdapter.serialize).
    """

    provider_id = FLOOSS
    endpoint_path = "/v1/payments"
    external_id_field = "payment_id"

    def __init__(
        self,
        transport: PaymentTransportProtocol,
        default_currency: str = DEFAULT_FLOOSS_CURRENCY,
    ) -> None:
        super().__init__(transport)
        self._default_currency = default_currency

    def translate_request(
        self,
        request: PaymentRequest,
        credentials: ProviderCredentials,
    ) -> dict[str, Any]:
        credentials.require("merchant_id")
        return compact(
            {
                "merchant_id": credentials.merchant_id,
                "amount": json_amount(request.amount),
                "currency": request.currency or self._default_currency,
                "reference": request.transaction_id,
                "customer_id": request.customer_id,
                "invoice_id": request.invoice_id,
                "return_url": request.return_url,
                "callback_url": request.callback_url,
                "metadata": request.metadata or None,
            }
        )

    async def authenticate(
        self,
        payload: dict[str, Any],
        credentials: ProviderCredentials,
        api_base_url: str,
    ) -> dict[str, str]:
        credentials.require("api_key", "secret_key")
        signature = sign(self.serialize(payload), credentials.value("secret_key"))
        return {
            "Authorization": f"Bearer {credentials.value('api_key')}",
            SIGNATURE_HEADER: signature,
        }

    def parse_response(self, response: TransportResponse) -> PaymentProviderResult:
        data = response.data
        status = self.normalize_status(data.get("status"), data)
        return PaymentProviderResult(
            provider=self.provider_id,
            status=status,
            external_id=self.extract_external_id(data),
            redirect_url=optional_str(data.get("checkout_url")),
            raw_response=data,
        )
