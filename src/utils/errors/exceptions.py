"""Exceções da camada de integração com provedores de pagamento.

Apenas UnknownProviderError atravessa o dispatcher. As demais são capturadas
pelos adapters e convertidas em PaymentProviderResult com status failed.
"""

from __future__ import annotations


class PaymentIntegrationError(RuntimeError):
    """Base para falhas na integração com provedores de pagamento."""


class UnknownProviderError(PaymentIntegrationError, LookupError):
    """Nenhum adapter registrado para o provider solicitado."""

    def __init__(self, provider_id: str) -> None:
        super().__init__(f"unknown_payment_provider: {provider_id}")
        self.provider_id = provider_id


class AuthenticationError(PaymentIntegrationError):
    """Credencial ausente ou falha na obtenção de token."""


class TransportError(PaymentIntegrationError):
    """Falha de transporte HTTP (timeout, conexão, status não-2xx, JSON inválido).

    Nunca carrega headers ou credenciais, apenas o corpo devolvido pelo provider.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        provider_message: str | None = None,
        response_body: object | None = None,
        is_timeout: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.provider_message = provider_message
        self.response_body = response_body
        self.is_timeout = is_timeout

    @property
    def best_message(self) -> str:
        """Mensagem mais específica disponível (provider > transporte)."""
        return self.provider_message or str(self)


class ProviderRejectedError(PaymentIntegrationError):
    """Provider respondeu com status de negócio de falha.

    `external_id` guarda a referência do provider quando ele chegou a
    registrar a cobrança, para conciliação posterior.
    """

    def __init__(
        self,
        message: str,
        response_body: object | None = None,
        external_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.response_body = response_body
        self.external_id = external_id


class UnrecognizedStatusError(PaymentIntegrationError):
    """Token de status fora do vocabulário conhecido do provider."""

    def __init__(self, provider_id: str, token: object) -> None:
        super().__init__(f"unrecognized_status '{token}' for provider {provider_id}")
        self.provider_id = provider_id
        self.token = token
