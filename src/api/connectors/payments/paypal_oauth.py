"""Troca OAuth2 client-credentials do PayPal.

Primeira etapa do protocolo de duas etapas: qualquer falha aqui vira
AuthenticationError e interrompe a tentativa de pagamento.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from utils.errors import AuthenticationError, TransportError

from .base import join_url

if TYPE_CHECKING:
    from app.domain.payment import ProviderCredentials
    from app.protocols.http_client import PaymentTransportProtocol
    from app.services.token_cache import TokenCache

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/oauth2/token"


class PayPalOAuthClient:
    """Obtém bearer tokens via HTTP Basic + grant_type=client_credentials."""

    def __init__(
        self,
        transport: PaymentTransportProtocol,
        token_cache: TokenCache | None = None,
    ) -> None:
        self._transport = transport
        self._token_cache = token_cache

    async def get_access_token(
        self,
        credentials: ProviderCredentials,
        api_base_url: str,
    ) -> str:
        """Retorna access token válido (do cache ou recém-emitido).

        Raises:
            AuthenticationError: Credenciais ausentes, endpoint de token
                recusou ou resposta sem access_token.
        """
        credentials.require("client_id", "client_secret")
        client_id = credentials.value("client_id")
        client_secret = credentials.value("client_secret")

        cache_key = None
        if self._token_cache is not None:
            cache_key = self._token_cache.make_key(api_base_url, client_id, client_secret)
            cached = self._token_cache.get(cache_key)
            if cached:
                return cached

        try:
            response = await self._transport.post_form(
                join_url(api_base_url, TOKEN_PATH),
                {"grant_type": "client_credentials"},
                headers={"Accept": "application/json"},
                basic_auth=(client_id, client_secret),
            )
        except TransportError as exc:
            logger.warning(
                "paypal_token_request_failed",
                extra={"status_code": exc.status_code, "is_timeout": exc.is_timeout},
            )
            raise AuthenticationError(
                f"paypal_authentication_failed: {exc.best_message}"
            ) from exc

        access_token = response.data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise AuthenticationError("paypal_authentication_failed: access_token missing")

        if self._token_cache is not None and cache_key is not None:
            expires_in = response.data.get("expires_in")
            self._token_cache.put(
                cache_key,
                access_token,
                expires_in if isinstance(expires_in, int) else None,
            )

        logger.debug("paypal_token_acquired")
        return access_token
