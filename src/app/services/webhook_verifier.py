"""Webhook Verifier: roteia a verificação para o verificador do provider."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from utils.errors import UnknownProviderError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from app.domain.payment import WebhookVerificationRequest
    from app.protocols.webhook_verifier import ProviderWebhookVerifierProtocol

logger = logging.getLogger(__name__)


class WebhookVerifier:
    """Veredito booleano de autenticidade, por provider.

    Sem estado entre chamadas. Exceção inesperada de um verificador é
    registrada e tratada como não verificado.
    """

    def __init__(self, verifiers: Iterable[ProviderWebhookVerifierProtocol] = ()) -> None:
        self._verifiers: dict[str, ProviderWebhookVerifierProtocol] = {}
        for verifier in verifiers:
            self.register(verifier)

    def register(self, verifier: ProviderWebhookVerifierProtocol) -> None:
        self._verifiers[verifier.provider_id.lower()] = verifier

    def providers(self) -> tuple[str, ...]:
        return tuple(sorted(self._verifiers))

    async def verify(
        self,
        provider_id: str,
        raw_payload: bytes | str | Mapping[str, Any],
        signature_or_headers: str | Mapping[str, str] | None,
        verification_key: str,
    ) -> bool:
        """Valida a notificação recebida.

        Raises:
            UnknownProviderError: Nenhum verificador para o provider.
        """
        verifier = self._verifiers.get(provider_id.lower())
        if verifier is None:
            raise UnknownProviderError(provider_id)

        try:
            return await verifier.verify(raw_payload, signature_or_headers, verification_key)
        except Exception:
            logger.exception("webhook_verifier_error", extra={"provider": provider_id})
            return False

    async def verify_request(self, request: WebhookVerificationRequest) -> bool:
        return await self.verify(
            request.provider,
            request.raw_payload,
            request.signature_or_headers,
            request.verification_key,
        )
