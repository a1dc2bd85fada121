"""Modelos de domínio da integração com provedores de pagamento.

Value objects imutáveis trocados entre o chamador, o dispatcher e os
adapters. Nenhum deles sobrevive a uma única invocação de adapter.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator

from utils.errors import AuthenticationError


class PaymentStatus(StrEnum):
    """Status canônico de um pagamento."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentRequest(BaseModel):
    """Tentativa de cobrança enviada a um provider."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    transaction_id: str = Field(..., min_length=1, description="Chave de idempotência do chamador.")
    amount: Decimal = Field(..., gt=0, description="Valor positivo; unidade definida pelo provider.")
    currency: str | None = Field(
        default=None,
        min_length=3,
        max_length=3,
        description="Código ISO 4217; o adapter aplica o default do provider se ausente.",
    )
    customer_id: str | None = None
    invoice_id: str | None = None
    return_url: str | None = None
    callback_url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str | None) -> str | None:
        return value.upper() if value else None


class ProviderCredentials(BaseModel):
    """Credenciais de um provider, carregadas pelo chamador a cada chamada.

    Os campos secretos são SecretStr: repr, str e model_dump nunca expõem
    o valor real.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: SecretStr | None = None
    merchant_id: str | None = None
    secret_key: SecretStr | None = None
    pin: SecretStr | None = None
    client_id: str | None = None
    client_secret: SecretStr | None = None

    def require(self, *names: str) -> None:
        """Garante que os campos informados estão preenchidos.

        Raises:
            AuthenticationError: Se algum campo estiver ausente ou vazio.
        """
        missing = [name for name in names if not self.value(name)]
        if missing:
            raise AuthenticationError(f"missing_credentials: {', '.join(missing)}")

    def value(self, name: str) -> str:
        """Retorna o valor em texto puro de um campo (vazio se ausente)."""
        raw = getattr(self, name)
        if raw is None:
            return ""
        if isinstance(raw, SecretStr):
            return raw.get_secret_value()
        return str(raw)


class PaymentProviderResult(BaseModel):
    """Resultado uniforme devolvido por todo adapter.

    Invariante: `error` está preenchido se e somente se `status` é failed.
    """

    model_config = ConfigDict(frozen=True)

    provider: str
    status: PaymentStatus
    external_id: str | None = None
    redirect_url: str | None = None
    raw_response: Any = None
    error: str | None = None

    @model_validator(mode="after")
    def _error_iff_failed(self) -> PaymentProviderResult:
        failed = self.status is PaymentStatus.FAILED
        if failed and not self.error:
            raise ValueError("failed result requires error")
        if not failed and self.error is not None:
            raise ValueError("error is only allowed on failed results")
        return self

    @property
    def is_failed(self) -> bool:
        return self.status is PaymentStatus.FAILED

    @classmethod
    def failure(
        cls,
        provider: str,
        error: str,
        raw_response: Any = None,
        external_id: str | None = None,
    ) -> PaymentProviderResult:
        """Cria resultado failed com mensagem não vazia."""
        return cls(
            provider=provider,
            status=PaymentStatus.FAILED,
            external_id=external_id,
            error=error or "unknown_error",
            raw_response=raw_response,
        )


class WebhookVerificationRequest(BaseModel):
    """Notificação recebida de um provider, a ser autenticada."""

    model_config = ConfigDict(frozen=True)

    provider: str
    raw_payload: bytes | str | dict[str, Any]
    signature: str | None = None
    headers: Mapping[str, str] = Field(default_factory=dict)
    verification_key: str = ""

    @property
    def signature_or_headers(self) -> str | Mapping[str, str]:
        """Assinatura explícita quando houver, senão os headers recebidos."""
        return self.signature if self.signature is not None else self.headers
