"""Adapter Registry e Dispatcher: ponto de entrada uniforme da camada.

Roteamento puro, sem regra de negócio. O dispatcher garante que toda
chamada devolve um PaymentProviderResult; só UnknownProviderError escapa.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.payment import PaymentProviderResult
from app.observability import correlation_scope
from utils.errors import UnknownProviderError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from app.domain.payment import PaymentRequest, ProviderCredentials
    from app.protocols.payment_adapter import PaymentAdapterProtocol
    from app.services.webhook_verifier import WebhookVerifier

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Tabela de adapters indexada por provider id (case-insensitive)."""

    def __init__(self, adapters: Iterable[PaymentAdapterProtocol] = ()) -> None:
        self._adapters: dict[str, PaymentAdapterProtocol] = {}
        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: PaymentAdapterProtocol) -> None:
        provider_id = adapter.provider_id.lower()
        if not provider_id:
            raise ValueError("adapter sem provider_id")
        self._adapters[provider_id] = adapter

    def get(self, provider_id: str) -> PaymentAdapterProtocol:
        """Retorna o adapter do provider.

        Raises:
            UnknownProviderError: Nenhum adapter registrado.
        """
        adapter = self._adapters.get((provider_id or "").lower())
        if adapter is None:
            raise UnknownProviderError(provider_id)
        return adapter

    def providers(self) -> tuple[str, ...]:
        return tuple(sorted(self._adapters))

    def __contains__(self, provider_id: object) -> bool:
        return isinstance(provider_id, str) and provider_id.lower() in self._adapters


class PaymentDispatcher:
    """Entradas uniformes: process_payment e verify_webhook."""

    def __init__(
        self,
        registry: AdapterRegistry,
        webhook_verifier: WebhookVerifier | None = None,
    ) -> None:
        self._registry = registry
        self._webhook_verifier = webhook_verifier

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    async def execute(
        self,
        provider_id: str,
        credentials: ProviderCredentials,
        request: PaymentRequest,
        api_base_url: str,
    ) -> PaymentProviderResult:
        """Seleciona o adapter e delega a cobrança.

        Raises:
            UnknownProviderError: Provider sem adapter registrado.
        """
        adapter = self._registry.get(provider_id)
        with correlation_scope():
            try:
                return await adapter.process(credentials, request, api_base_url)
            except Exception as exc:
                # Adapters não levantam; proteção para adapters de terceiros
                logger.exception(
                    "payment_adapter_contract_violation",
                    extra={"provider": adapter.provider_id},
                )
                return PaymentProviderResult.failure(
                    adapter.provider_id,
                    f"unexpected_error: {type(exc).__name__}",
                )

    process_payment = execute

    async def verify_webhook(
        self,
        provider_id: str,
        raw_payload: bytes | str | Mapping[str, Any],
        signature_or_headers: str | Mapping[str, str] | None,
        verification_key: str,
    ) -> bool:
        """Veredito de autenticidade de uma notificação.

        Raises:
            UnknownProviderError: Provider sem verificador registrado.
        """
        if self._webhook_verifier is None:
            raise UnknownProviderError(provider_id)
        with correlation_scope():
            return await self._webhook_verifier.verify(
                provider_id,
                raw_payload,
                signature_or_headers,
                verification_key,
            )
