"""Protocolos HTTP usados pelos adapters de pagamento.

Evita dependência direta de httpx fora de app/infra.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Resposta 2xx já decodificada como objeto JSON."""

    status_code: int
    data: dict[str, Any] = field(default_factory=dict)


class PaymentTransportProtocol(Protocol):
    """Contrato mínimo do Transport Client.

    Implementações levantam TransportError para timeout, falha de conexão,
    status não-2xx e corpo que não seja objeto JSON.
    """

    async def post_json(
        self,
        url: str,
        body: bytes,
        headers: Mapping[str, str] | None = None,
    ) -> TransportResponse: ...

    async def post_form(
        self,
        url: str,
        data: Mapping[str, str],
        headers: Mapping[str, str] | None = None,
        basic_auth: tuple[str, str] | None = None,
    ) -> TransportResponse: ...
