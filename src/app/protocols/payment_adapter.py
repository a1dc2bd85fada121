"""Contrato polimórfico dos adapters de provedores de pagamento."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.payment import PaymentProviderResult, PaymentRequest, ProviderCredentials

    from .http_client import TransportResponse


class PaymentAdapterProtocol(Protocol):
    """Capacidades de um adapter: translate, authenticate, invoke, parse.

    `process` encadeia as quatro etapas e nunca levanta exceção.
    """

    provider_id: str

    def translate_request(
        self,
        request: PaymentRequest,
        credentials: ProviderCredentials,
    ) -> dict[str, Any]: ...

    async def authenticate(
        self,
        payload: dict[str, Any],
        credentials: ProviderCredentials,
        api_base_url: str,
    ) -> dict[str, str]: ...

    async def invoke(
        self,
        api_base_url: str,
        payload: dict[str, Any],
        auth_headers: dict[str, str],
    ) -> TransportResponse: ...

    def parse_response(self, response: TransportResponse) -> PaymentProviderResult: ...

    async def process(
        self,
        credentials: ProviderCredentials,
        request: PaymentRequest,
        api_base_url: str,
    ) -> PaymentProviderResult: ...
