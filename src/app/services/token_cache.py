"""Cache opcional de access tokens OAuth2 por conjunto de credenciais.

A correção nunca depende do cache: uma entrada ausente ou expirada só
provoca nova busca de token. A chave usa um digest do client secret para
que o secret nunca fique em memória como chave legível.
"""

from __future__ import annotations

import hashlib
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300
# Margem para não usar token prestes a expirar no provider
EXPIRY_SAFETY_MARGIN_SECONDS = 30


@dataclass(frozen=True, slots=True)
class _CachedToken:
    access_token: str
    expires_at: float


class TokenCache:
    """Cache em memória com TTL.

    Sem lock: o pior caso de corrida é buscar o mesmo token duas vezes.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _CachedToken] = {}

    @property
    def enabled(self) -> bool:
        return self._ttl_seconds > 0

    @staticmethod
    def make_key(base_url: str, client_id: str, client_secret: str) -> str:
        digest = hashlib.sha256(client_secret.encode("utf-8")).hexdigest()[:16]
        return f"{base_url.rstrip('/')}|{client_id}|{digest}"

    def get(self, key: str) -> str | None:
        if not self.enabled:
            return None
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            self._entries.pop(key, None)
            logger.debug("oauth_token_cache_expired")
            return None
        logger.debug("oauth_token_cache_hit")
        return entry.access_token

    def put(self, key: str, access_token: str, expires_in: int | None = None) -> None:
        """Armazena token pelo menor entre o TTL local e o expires_in do provider."""
        if not self.enabled or not access_token:
            return
        ttl = float(self._ttl_seconds)
        if expires_in is not None and expires_in > 0:
            ttl = min(ttl, max(expires_in - EXPIRY_SAFETY_MARGIN_SECONDS, 0))
        if ttl <= 0:
            return
        self._entries[key] = _CachedToken(access_token, self._clock() + ttl)

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
