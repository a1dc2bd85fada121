"""Contrato de verificação de autenticidade de webhooks por provider."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class ProviderWebhookVerifierProtocol(Protocol):
    """Verificador de webhook de um único provider.

    Deve falhar fechado: qualquer dúvida resulta em False.
    """

    provider_id: str

    async def verify(
        self,
        raw_payload: bytes | str | Mapping[str, Any],
        signature_or_headers: str | Mapping[str, str] | None,
        verification_key: str,
    ) -> bool: ...
