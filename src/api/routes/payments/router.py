"""Endpoints de pagamentos.

Endpoints:
- POST /payments/process: cobrança via provider configurado
- POST /payments/webhooks/{provider}: verificação de notificação recebida

Credenciais e URL base vêm das settings (camada de configuração do
chamador); o corpo da requisição nunca carrega segredos.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.bootstrap import build_provider_credentials, get_payment_dispatcher
from app.domain.payment import PaymentRequest
from app.observability import correlation_scope
from config.settings import get_payment_settings
from utils.errors import UnknownProviderError

logger = logging.getLogger(__name__)

router = APIRouter()

CORRELATION_HEADER = "x-correlation-id"


class ProcessPaymentBody(PaymentRequest):
    """Corpo de POST /payments/process."""

    provider: str


def _unknown_provider(provider: str) -> JSONResponse:
    logger.warning("payment_provider_unknown", extra={"provider": provider})
    return JSONResponse(
        content={"detail": "unknown_provider", "provider": provider},
        status_code=status.HTTP_404_NOT_FOUND,
    )


@router.post("/process")
async def process_payment(body: ProcessPaymentBody, request: Request) -> JSONResponse:
    """Processa a cobrança e devolve o resultado canônico (200 mesmo se failed)."""
    dispatcher = get_payment_dispatcher()
    if body.provider not in dispatcher.registry:
        return _unknown_provider(body.provider)

    provider_settings = get_payment_settings().provider(body.provider)
    if not provider_settings.configured:
        return JSONResponse(
            content={"detail": "provider_not_configured", "provider": body.provider},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    payment_request = PaymentRequest.model_validate(body.model_dump(exclude={"provider"}))
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            result = await dispatcher.process_payment(
                body.provider,
                build_provider_credentials(provider_settings),
                payment_request,
                provider_settings.api_base_url,
            )
        except UnknownProviderError:
            return _unknown_provider(body.provider)

    return JSONResponse(content=result.model_dump(mode="json"))


@router.post("/webhooks/{provider}")
async def receive_webhook(provider: str, request: Request) -> JSONResponse:
    """Valida autenticidade do webhook: 200 se verificado, 401 caso contrário."""
    raw_body = await request.body()
    verification_key = get_payment_settings().provider(provider).webhook_key

    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            verified = await get_payment_dispatcher().verify_webhook(
                provider,
                raw_body,
                dict(request.headers),
                verification_key,
            )
        except UnknownProviderError:
            return _unknown_provider(provider)

    return JSONResponse(
        content={"verified": verified},
        status_code=status.HTTP_200_OK if verified else status.HTTP_401_UNAUTHORIZED,
    )
