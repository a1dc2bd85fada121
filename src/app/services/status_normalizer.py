"""Status Normalizer: vocabulário nativo de cada provider -> status canônico.

Fail-closed: token fora da tabela do provider vira failed, nunca pending,
porque tratar estado desconhecido como sucesso ou como retentável é o erro
mais caro em movimentação de dinheiro.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from app.domain.payment import PaymentStatus
from config.settings import FLOOSS, JAWALI, PAYPAL
from utils.errors import UnrecognizedStatusError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

_P = PaymentStatus.PENDING
_C = PaymentStatus.COMPLETED
_F = PaymentStatus.FAILED

# Flooss devolve tokens em minúsculas
_FLOOSS_TABLE = {
    "created": _P,
    "pending": _P,
    "processing": _P,
    "completed": _C,
    "paid": _C,
    "succeeded": _C,
    "failed": _F,
    "declined": _F,
    "cancelled": _F,
    "expired": _F,
}

# Jawali devolve tokens em maiúsculas
_JAWALI_TABLE = {
    "INITIATED": _P,
    "PENDING": _P,
    "PROCESSING": _P,
    "COMPLETED": _C,
    "SUCCESS": _C,
    "FAILED": _F,
    "REJECTED": _F,
    "CANCELLED": _F,
    "EXPIRED": _F,
}

# Status de order do PayPal (v2/checkout/orders)
_PAYPAL_TABLE = {
    "CREATED": _P,
    "SAVED": _P,
    "APPROVED": _P,
    "PAYER_ACTION_REQUIRED": _P,
    "COMPLETED": _C,
    "VOIDED": _F,
}

_TABLES: Mapping[str, Mapping[str, PaymentStatus]] = MappingProxyType(
    {
        FLOOSS: MappingProxyType(_FLOOSS_TABLE),
        JAWALI: MappingProxyType(_JAWALI_TABLE),
        PAYPAL: MappingProxyType(_PAYPAL_TABLE),
    }
)

# Chaves de lookup: Flooss compara em minúsculas, os demais em maiúsculas
_LOWER_CASE_PROVIDERS = frozenset({FLOOSS})


def _lookup_key(provider_id: str, token: object) -> str | None:
    if not isinstance(token, str) or not token.strip():
        return None
    value = token.strip()
    return value.lower() if provider_id in _LOWER_CASE_PROVIDERS else value.upper()


def known_tokens(provider_id: str) -> frozenset[str]:
    """Vocabulário documentado do provider (vazio se provider desconhecido)."""
    table = _TABLES.get(provider_id.lower())
    return frozenset(table) if table else frozenset()


def resolve_status(provider_id: str, token: object) -> PaymentStatus:
    """Versão estrita de normalize.

    Raises:
        UnrecognizedStatusError: Token ausente ou fora do vocabulário do provider.
    """
    provider = provider_id.lower()
    table = _TABLES.get(provider, {})
    key = _lookup_key(provider, token)
    if key is None or key not in table:
        raise UnrecognizedStatusError(provider, token)
    return table[key]


def normalize(provider_id: str, token: object) -> PaymentStatus:
    """Mapeia token nativo para {pending, completed, failed}.

    Nunca levanta exceção: token desconhecido resulta em failed e um
    diagnóstico em log.
    """
    try:
        return resolve_status(provider_id, token)
    except UnrecognizedStatusError as exc:
        logger.warning(
            "payment_status_unrecognized",
            extra={"provider": exc.provider_id, "status_token": str(token)[:64]},
        )
        return PaymentStatus.FAILED
