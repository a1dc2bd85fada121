"""Verificadores de webhook por provider.

- Flooss/Jawali: HMAC-SHA256 com secret compartilhado (Signing Engine).
- PayPal: verificação remota via /v1/notifications/verify-webhook-signature.

Todos falham fechado: ausência de assinatura, chave, headers ou falha de
rede resultam em False.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from app.infra.crypto import canonical_json, verify
from config.settings import FLOOSS, JAWALI, PAYPAL
from utils.errors import AuthenticationError, TransportError

from .base import join_url
from .paypal_oauth import PayPalOAuthClient

if TYPE_CHECKING:
    from app.domain.payment import ProviderCredentials
    from app.protocols.http_client import PaymentTransportProtocol

logger = logging.getLogger(__name__)

DEFAULT_SIGNATURE_HEADER = "x-signature"
PAYPAL_VERIFY_PATH = "/v1/notifications/verify-webhook-signature"

# header recebido -> campo do corpo de verificação do PayPal
PAYPAL_TRANSMISSION_HEADERS = {
    "paypal-transmission-id": "transmission_id",
    "paypal-transmission-time": "transmission_time",
    "paypal-cert-url": "cert_url",
    "paypal-auth-algo": "auth_algo",
    "paypal-transmission-sig": "transmission_sig",
}


def _lower_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {str(key).lower(): str(value) for key, value in headers.items()}


def _parse_json_object(raw_payload: bytes | str | Mapping[str, Any]) -> dict[str, Any] | None:
    if isinstance(raw_payload, Mapping):
        return dict(raw_payload)
    try:
        parsed = json.loads(raw_payload or b"{}")
    except (ValueError, TypeError):
        return None
    return parsed if isinstance(parsed, dict) else None


class HmacWebhookVerifier:
    """Webhook assinado com HMAC-SHA256 do corpo.

    Bytes brutos são verificados exatamente como recebidos: qualquer byte
    alterado, inclusive espaço em branco, invalida a assinatura.

    Com `accept_canonical=True`, um corpo JSON que não bate byte a byte
    também é aceito se a assinatura bater com a serialização canônica do
    objeto (providers que assinam o JSON re-serializado). O custo é aceitar
    variações de formatação que não mudam o conteúdo, como `{"a": 1}` no
    lugar de `{"a":1}`.
    """

    def __init__(
        self,
        provider_id: str,
        signature_header: str = DEFAULT_SIGNATURE_HEADER,
        *,
        accept_canonical: bool = False,
    ) -> None:
        self.provider_id = provider_id
        self._signature_header = signature_header.lower()
        self._accept_canonical = accept_canonical

    async def verify(
        self,
        raw_payload: bytes | str | Mapping[str, Any],
        signature_or_headers: str | Mapping[str, str] | None,
        verification_key: str,
    ) -> bool:
        signature = self._extract_signature(signature_or_headers)
        if not signature or not verification_key:
            logger.warning(
                "webhook_verification_missing_input",
                extra={"provider": self.provider_id, "has_signature": bool(signature)},
            )
            return False

        if isinstance(raw_payload, Mapping):
            valid = verify(dict(raw_payload), signature, verification_key)
        else:
            valid = verify(raw_payload, signature, verification_key)
            if not valid and self._accept_canonical:
                parsed = _parse_json_object(raw_payload)
                if parsed is not None and canonical_json(parsed) != canonical_json(raw_payload):
                    valid = verify(parsed, signature, verification_key)

        logger.info(
            "webhook_verified" if valid else "webhook_verification_failed",
            extra={"provider": self.provider_id},
        )
        return valid

    def _extract_signature(self, signature_or_headers: str | Mapping[str, str] | None) -> str | None:
        if isinstance(signature_or_headers, Mapping):
            return _lower_headers(signature_or_headers).get(self._signature_header)
        return signature_or_headers


class PayPalWebhookVerifier:
    """Pergunta à própria API do PayPal se a notificação é autêntica.

    `verification_key` é o webhook id configurado no PayPal. Sem
    credenciais/URL para a chamada remota o verificador recusa tudo.
    """

    provider_id = PAYPAL

    def __init__(
        self,
        transport: PaymentTransportProtocol,
        credentials: ProviderCredentials | None = None,
        api_base_url: str | None = None,
        oauth_client: PayPalOAuthClient | None = None,
    ) -> None:
        self._transport = transport
        self._credentials = credentials
        self._api_base_url = api_base_url
        self._oauth = oauth_client or PayPalOAuthClient(transport)

    async def verify(
        self,
        raw_payload: bytes | str | Mapping[str, Any],
        signature_or_headers: str | Mapping[str, str] | None,
        verification_key: str,
    ) -> bool:
        if not isinstance(signature_or_headers, Mapping):
            logger.warning("paypal_webhook_headers_missing")
            return False

        headers = _lower_headers(signature_or_headers)
        missing = [name for name in PAYPAL_TRANSMISSION_HEADERS if not headers.get(name)]
        if missing:
            logger.warning("paypal_webhook_headers_missing", extra={"missing": missing})
            return False

        if not verification_key or self._credentials is None or not self._api_base_url:
            logger.warning("paypal_webhook_remote_verification_unavailable")
            return False

        event = _parse_json_object(raw_payload)
        if event is None:
            logger.warning("paypal_webhook_invalid_json")
            return False

        body: dict[str, Any] = {
            field: headers[header] for header, field in PAYPAL_TRANSMISSION_HEADERS.items()
        }
        body["webhook_id"] = verification_key
        body["webhook_event"] = event

        try:
            access_token = await self._oauth.get_access_token(
                self._credentials, self._api_base_url
            )
            response = await self._transport.post_json(
                join_url(self._api_base_url, PAYPAL_VERIFY_PATH),
                canonical_json(body),
                {"Authorization": f"Bearer {access_token}"},
            )
        except (AuthenticationError, TransportError) as exc:
            logger.warning(
                "paypal_webhook_remote_verification_failed",
                extra={"error_type": type(exc).__name__},
            )
            return False

        valid = response.data.get("verification_status") == "SUCCESS"
        logger.info(
            "webhook_verified" if valid else "webhook_verification_failed",
            extra={"provider": self.provider_id},
        )
        return valid


def create_hmac_verifiers() -> list[HmacWebhookVerifier]:
    """Verificadores HMAC dos providers com secret compartilhado."""
    return [HmacWebhookVerifier(FLOOSS), HmacWebhookVerifier(JAWALI)]
