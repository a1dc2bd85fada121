"""Signing Engine: HMAC-SHA256 sobre serialização canônica.

Serialização canônica (a mesma enviada no corpo das requisições assinadas):
JSON com chaves ordenadas, separadores compactos (",", ":"), UTF-8 sem
escape de não-ASCII. Decimal vira número JSON; outros tipos não-JSON viram
string.
Payloads em bytes são assinados exatamente como recebidos.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

SIGNATURE_PREFIX = "sha256="

SignablePayload = bytes | str | Mapping[str, Any] | list[Any]


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return str(value)


def canonical_json(payload: SignablePayload) -> bytes:
    """Serializa o payload nos bytes exatos usados para assinar e transmitir."""
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_json_default,
    ).encode("utf-8")


def sign(payload: SignablePayload, secret: str | bytes) -> str:
    """Calcula HMAC-SHA256 (hex) do payload canônico.

    Determinístico: mesmos payload e secret geram sempre a mesma assinatura.
    """
    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    return hmac.new(key, canonical_json(payload), hashlib.sha256).hexdigest()


def verify(payload: SignablePayload, signature: str | None, secret: str | bytes) -> bool:
    """Recalcula a assinatura e compara em tempo constante.

    Args:
        payload: Corpo bruto (bytes) ou objeto a serializar
        signature: Assinatura declarada (hex, com ou sem prefixo "sha256=")
        secret: Secret compartilhado com o provider

    Returns:
        True se assinatura válida
    """
    if not signature or not secret:
        return False

    claimed = signature.strip()
    if claimed.startswith(SIGNATURE_PREFIX):
        claimed = claimed[len(SIGNATURE_PREFIX):]

    computed = sign(payload, secret)
    return hmac.compare_digest(computed.encode("utf-8"), claimed.encode("utf-8"))
