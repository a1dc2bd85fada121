"""Adapter Jawali: API key estática em header, PIN no corpo."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.payment import PaymentProviderResult
from config.settings import JAWALI
from config.settings.payments import DEFAULT_JAWALI_CURRENCY

from .base import BasePaymentAdapter, compact, json_amount, optional_str

if TYPE_CHECKING:
    from app.domain.payment import PaymentRequest, ProviderCredentials
    from app.protocols.http_client import PaymentTransportProtocol, TransportResponse

DEFAULT_DESCRIPTION = "Payment"


class JawaliAdapter(BasePaymentAdapter):
    """POST {base}/api/v2/payment/initiate com X-API-Key, sem assinatura."""

    provider_id = JAWALI
    endpoint_path = "/api/v2/payment/initiate"
    external_id_field = "transactionId"

    def __init__(
        self,
        transport: PaymentTransportProtocol,
        default_currency: str = DEFAULT_JAWALI_CURRENCY,
    ) -> None:
        super().__init__(transport)
        self._default_currency = default_currency

    def translate_request(
        self,
        request: PaymentRequest,
        credentials: ProviderCredentials,
    ) -> dict[str, Any]:
        credentials.require("merchant_id", "pin")
        metadata = request.metadata
        return compact(
            {
                "merchantId": credentials.merchant_id,
                "pin": credentials.value("pin"),
                "amount": json_amount(request.amount),
                "currency": request.currency or self._default_currency,
                "referenceNumber": request.transaction_id,
                "customerMobile": metadata.get("mobile"),
                "description": metadata.get("description") or DEFAULT_DESCRIPTION,
            }
        )

    async def authenticate(
        self,
        payload: dict[str, Any],
        credentials: ProviderCredentials,
        api_base_url: str,
    ) -> dict[str, str]:
        credentials.require("api_key")
        return {"X-API-Key": credentials.value("api_key")}

    def parse_response(self, response: TransportResponse) -> PaymentProviderResult:
        data = response.data
        status = self.normalize_status(data.get("status"), data)
        return PaymentProviderResult(
            provider=self.provider_id,
            status=status,
            external_id=self.extract_external_id(data),
            redirect_url=optional_str(data.get("paymentUrl")),
            raw_response=data,
        )
