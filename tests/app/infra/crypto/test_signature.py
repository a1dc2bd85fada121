"""Testes do Signing Engine (HMAC-SHA256 sobre JSON canônico)."""

from __future__ import annotations

import hashlib
import hmac
from decimal import Decimal

from app.infra.crypto import SIGNATURE_PREFIX, canonical_json, sign, verify

SECRET = "shared-secret"


def test_canonical_json_sorts_keys_and_is_compact() -> None:
    assert canonical_json({"b": 1, "a": "x"}) == b'{"a":"x","b":1}'


def test_canonical_json_keeps_non_ascii_as_utf8() -> None:
    assert canonical_json({"name": "دفع"}) == '{"name":"دفع"}'.encode()


def test_canonical_json_serializes_decimal_as_number() -> None:
    assert canonical_json({"amount": Decimal("10.50")}) == b'{"amount":10.5}'
    assert canonical_json({"amount": Decimal("100")}) == b'{"amount":100}'


def test_canonical_json_passes_bytes_through_untouched() -> None:
    raw = b'{"z": 1,   "a": 2}'
    assert canonical_json(raw) is raw


def test_sign_is_hmac_sha256_hex_of_canonical_bytes() -> None:
    expected = hmac.new(SECRET.encode(), b'{"a":1}', hashlib.sha256).hexdigest()
    assert sign({"a": 1}, SECRET) == expected


def test_sign_is_deterministic_regardless_of_key_order() -> None:
    assert sign({"a": 1, "b": 2}, SECRET) == sign({"b": 2, "a": 1}, SECRET)


def test_verify_accepts_own_signature() -> None:
    payload = {"payment_id": "P1", "status": "completed"}
    assert verify(payload, sign(payload, SECRET), SECRET) is True


def test_verify_accepts_prefixed_signature() -> None:
    payload = b'{"id":"evt_1"}'
    assert verify(payload, SIGNATURE_PREFIX + sign(payload, SECRET), SECRET) is True


def test_verify_rejects_altered_payload_byte() -> None:
    payload = b'{"amount":100,"status":"completed"}'
    signature = sign(payload, SECRET)
    tampered = payload.replace(b"100", b"900")
    assert verify(tampered, signature, SECRET) is False


def test_verify_rejects_altered_signature_character() -> None:
    payload = b'{"amount":100}'
    signature = sign(payload, SECRET)
    flipped = ("0" if signature[0] != "0" else "1") + signature[1:]
    assert verify(payload, flipped, SECRET) is False


def test_verify_rejects_wrong_secret() -> None:
    payload = {"a": 1}
    assert verify(payload, sign(payload, SECRET), "other-secret") is False


def test_verify_rejects_missing_signature_or_secret() -> None:
    payload = {"a": 1}
    assert verify(payload, None, SECRET) is False
    assert verify(payload, "", SECRET) is False
    assert verify(payload, sign(payload, SECRET), "") is False


def test_verify_rejects_non_ascii_signature_without_raising() -> None:
    assert verify({"a": 1}, "assinatura-inválida", SECRET) is False
