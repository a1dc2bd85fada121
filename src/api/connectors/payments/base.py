"""Base dos adapters de provedores de pagamento.

`BasePaymentAdapter.process` encadeia translate -> authenticate -> invoke ->
parse e converte toda falha em PaymentProviderResult com status failed.
Nenhuma exceção atravessa a fronteira do adapter.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any

from app.domain.payment import PaymentProviderResult, PaymentStatus
from app.infra.crypto import canonical_json
from app.services.status_normalizer import resolve_status
from config.logging import log_provider_failure
from utils.errors import (
    AuthenticationError,
    ProviderRejectedError,
    TransportError,
    UnrecognizedStatusError,
)

if TYPE_CHECKING:
    from app.domain.payment import PaymentRequest, ProviderCredentials
    from app.protocols.http_client import PaymentTransportProtocol, TransportResponse

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def compact(payload: dict[str, Any]) -> dict[str, Any]:
    """Remove campos None (opcionais ausentes não são enviados como null)."""
    return {key: value for key, value in payload.items() if value is not None}


def json_amount(amount: Decimal) -> int | float:
    """Valor como número JSON (inteiro quando não há casas decimais)."""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def format_amount(amount: Decimal) -> str:
    """Valor com exatamente duas casas decimais (ex: "100.00")."""
    return str(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))


def optional_str(value: object) -> str | None:
    return str(value) if value not in (None, "") else None


def join_url(api_base_url: str, path: str) -> str:
    return f"{api_base_url.rstrip('/')}/{path.lstrip('/')}"


class BasePaymentAdapter(ABC):
    """Adapter de um provider sobre o Transport Client."""

    provider_id: str = ""
    endpoint_path: str = ""
    # campo da resposta com a referência do provider
    external_id_field: str = ""

    def __init__(self, transport: PaymentTransportProtocol) -> None:
        self._transport = transport

    @abstractmethod
    def translate_request(
        self,
        request: PaymentRequest,
        credentials: ProviderCredentials,
    ) -> dict[str, Any]:
        """Monta o payload nativo do provider."""

    @abstractmethod
    async def authenticate(
        self,
        payload: dict[str, Any],
        credentials: ProviderCredentials,
        api_base_url: str,
    ) -> dict[str, str]:
        """Retorna os headers de autenticação para a chamada de negócio."""

    @abstractmethod
    def parse_response(self, response: TransportResponse) -> PaymentProviderResult:
        """Converte a resposta nativa no resultado canônico."""

    def serialize(self, payload: dict[str, Any]) -> bytes:
        """Bytes transmitidos no corpo; os mesmos usados em assinaturas."""
        return canonical_json(payload)

    async def invoke(
        self,
        api_base_url: str,
        payload: dict[str, Any],
        auth_headers: dict[str, str],
    ) -> TransportResponse:
        url = join_url(api_base_url, self.endpoint_path)
        return await self._transport.post_json(url, self.serialize(payload), auth_headers)

    def extract_external_id(self, data: dict[str, Any]) -> str | None:
        if not self.external_id_field:
            return None
        return optional_str(data.get(self.external_id_field))

    def normalize_status(self, token: object, data: dict[str, Any]) -> PaymentStatus:
        """Normaliza o token; status de falha vira ProviderRejectedError.

        A referência do provider segue na exceção: a cobrança foi registrada
        mesmo quando recusada.

        Raises:
            UnrecognizedStatusError: Token fora do vocabulário do provider.
            ProviderRejectedError: Provider informou falha de negócio.
        """
        status = resolve_status(self.provider_id, token)
        if status is PaymentStatus.FAILED:
            message = data.get("message") if isinstance(data.get("message"), str) else None
            raise ProviderRejectedError(
                message or f"provider_status_{token}",
                response_body=data,
                external_id=self.extract_external_id(data),
            )
        return status

    async def process(
        self,
        credentials: ProviderCredentials,
        request: PaymentRequest,
        api_base_url: str,
    ) -> PaymentProviderResult:
        """Executa a cobrança completa. Nunca levanta exceção."""
        logger.info(
            "payment_processing_started",
            extra={"provider": self.provider_id, "transaction_id": request.transaction_id},
        )
        response: TransportResponse | None = None
        try:
            payload = self.translate_request(request, credentials)
            auth_headers = await self.authenticate(payload, credentials, api_base_url)
            response = await self.invoke(api_base_url, payload, auth_headers)
            result = self.parse_response(response)
        except AuthenticationError as exc:
            return self._fail(request, "auth_failed", str(exc))
        except TransportError as exc:
            reason = "timeout" if exc.is_timeout else "transport_error"
            return self._fail(
                request,
                reason,
                exc.best_message,
                raw_response=exc.response_body,
                status_code=exc.status_code,
            )
        except ProviderRejectedError as exc:
            return self._fail(
                request,
                "provider_rejected",
                str(exc),
                exc.response_body,
                external_id=exc.external_id,
            )
        except UnrecognizedStatusError as exc:
            if response is None:
                return self._fail(request, "unrecognized_status", str(exc))
            return self._fail(
                request,
                "unrecognized_status",
                str(exc),
                response.data,
                external_id=self.extract_external_id(response.data),
            )
        except Exception as exc:
            logger.exception(
                "payment_unexpected_error",
                extra={"provider": self.provider_id, "transaction_id": request.transaction_id},
            )
            return self._fail(request, "unexpected_error", f"unexpected_error: {type(exc).__name__}")

        logger.info(
            "payment_processing_finished",
            extra={
                "provider": self.provider_id,
                "transaction_id": request.transaction_id,
                "status": result.status.value,
            },
        )
        return result

    def _fail(
        self,
        request: PaymentRequest,
        reason: str,
        message: str,
        raw_response: Any = None,
        status_code: int | None = None,
        external_id: str | None = None,
    ) -> PaymentProviderResult:
        log_provider_failure(
            logger,
            self.provider_id,
            reason,
            transaction_id=request.transaction_id,
            status_code=status_code,
        )
        return PaymentProviderResult.failure(
            self.provider_id, message, raw_response, external_id=external_id
        )
