"""Filters de logging para injeção de contexto e redação de segredos.

Campos injetados:
- correlation_id: ID de rastreamento da chamada ao provider
- service: Nome do serviço (ex: payments_gateway)

Credenciais de provider nunca devem chegar ao handler: SecretRedactionFilter
mascara qualquer campo de `extra` cujo nome indique segredo.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "***"

# Palavras (separadas por _ ou -) que marcam um campo como sensível
SENSITIVE_KEY_WORDS = frozenset(
    {
        "apikey",
        "secret",
        "password",
        "pin",
        "token",
        "authorization",
        "signature",
    }
)

# Atributos padrão de LogRecord (não vêm de `extra`)
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


def is_sensitive_key(key: str) -> bool:
    """Retorna True se o nome do campo sugere credencial."""
    lowered = key.lower()
    if "api_key" in lowered or "api-key" in lowered:
        return True
    return any(word in SENSITIVE_KEY_WORDS for word in re.split(r"[_\-\s]+", lowered))


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            k: REDACTED if isinstance(k, str) and is_sensitive_key(k) else _redact(v)
            for k, v in value.items()
        }
    return value


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SecretRedactionFilter(logging.Filter):
    """Mascara campos sensíveis passados via `extra`.

    Não filtra records, apenas substitui valores. Dicts aninhados
    (ex: extra={"headers": {...}}) também são percorridos.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key in list(record.__dict__):
            if key in _RESERVED_ATTRS:
                continue
            if is_sensitive_key(key):
                setattr(record, key, REDACTED)
            else:
                setattr(record, key, _redact(record.__dict__[key]))
        return True
