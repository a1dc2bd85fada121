"""Execução com fallback entre providers.

Tenta cada alvo em ordem e para no primeiro resultado não failed. Sem
espera entre tentativas, sem persistência e sem estatística de saúde:
agendamento de retry é responsabilidade do orquestrador externo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.payment import PaymentProviderResult, PaymentRequest, ProviderCredentials
    from app.services.payment_dispatcher import PaymentDispatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FallbackTarget:
    """Provider candidato com suas credenciais e URL base."""

    provider_id: str
    credentials: ProviderCredentials
    api_base_url: str


@dataclass(frozen=True, slots=True)
class AttemptError:
    provider_id: str
    error: str


@dataclass(frozen=True, slots=True)
class FallbackResult:
    """Resultado agregado das tentativas."""

    success: bool
    provider_id: str | None
    attempt_number: int
    total_attempts: int
    result: PaymentProviderResult | None = None
    errors: tuple[AttemptError, ...] = field(default_factory=tuple)


async def process_with_fallback(
    dispatcher: PaymentDispatcher,
    targets: Sequence[FallbackTarget],
    request: PaymentRequest,
) -> FallbackResult:
    """Processa o pagamento no primeiro provider que não falhar.

    Raises:
        UnknownProviderError: Algum alvo não tem adapter registrado.
    """
    errors: list[AttemptError] = []
    last_result: PaymentProviderResult | None = None

    for attempt_number, target in enumerate(targets, start=1):
        result = await dispatcher.process_payment(
            target.provider_id,
            target.credentials,
            request,
            target.api_base_url,
        )
        if not result.is_failed:
            return FallbackResult(
                success=True,
                provider_id=target.provider_id,
                attempt_number=attempt_number,
                total_attempts=len(targets),
                result=result,
                errors=tuple(errors),
            )

        logger.warning(
            "payment_fallback_attempt_failed",
            extra={
                "provider": target.provider_id,
                "attempt": attempt_number,
                "transaction_id": request.transaction_id,
            },
        )
        errors.append(AttemptError(target.provider_id, result.error or "unknown_error"))
        last_result = result

    return FallbackResult(
        success=False,
        provider_id=None,
        attempt_number=len(targets),
        total_attempts=len(targets),
        result=last_result,
        errors=tuple(errors),
    )
