"""Transport Client: chamadas HTTP de saída para os providers.

Cada chamada abre um httpx.AsyncClient próprio, sem estado compartilhado
entre invocações. Não há retry automático: reenviar uma cobrança é decisão
do orquestrador externo.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.infra.http.errors import extract_provider_message
from app.protocols.http_client import TransportResponse
from utils.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class TransportClient:
    """Cliente HTTP com timeout rígido e captura estruturada de erros."""

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    @property
    def timeout_seconds(self) -> float:
        return self._config.timeout_seconds

    async def post_json(
        self,
        url: str,
        body: bytes,
        headers: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        """POST com corpo JSON já serializado.

        O corpo é enviado byte a byte como recebido, o que mantém válida
        qualquer assinatura calculada sobre ele.
        """
        merged = {"Content-Type": "application/json", **(headers or {})}
        return await self._send(url, headers=merged, content=body)

    async def post_form(
        self,
        url: str,
        data: Mapping[str, str],
        headers: Mapping[str, str] | None = None,
        basic_auth: tuple[str, str] | None = None,
    ) -> TransportResponse:
        """POST application/x-www-form-urlencoded, com HTTP Basic opcional."""
        merged = {"Content-Type": "application/x-www-form-urlencoded", **(headers or {})}
        return await self._send(url, headers=merged, data=dict(data), auth=basic_auth)

    async def _send(
        self,
        url: str,
        *,
        headers: dict[str, str],
        content: bytes | None = None,
        data: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> TransportResponse:
        merged_headers = {**self._config.default_headers, **headers}
        try:
            async with httpx.AsyncClient(
                verify=self._config.verify_ssl,
                transport=self._transport,
                timeout=self._config.timeout_seconds,
            ) as client:
                response = await client.post(
                    url,
                    content=content,
                    data=data,
                    headers=merged_headers,
                    auth=auth,
                )
        except httpx.TimeoutException as exc:
            logger.warning(
                "http_timeout",
                extra={"url": url, "timeout_seconds": self._config.timeout_seconds},
            )
            raise TransportError(
                f"timeout of {self._config.timeout_seconds:g}s exceeded",
                is_timeout=True,
            ) from exc
        except httpx.RequestError as exc:
            logger.warning(
                "http_connection_error",
                extra={"url": url, "error_type": type(exc).__name__},
            )
            raise TransportError(f"connection_error: {type(exc).__name__}") from exc

        return _decode_response(url, response)


def _decode_response(url: str, response: httpx.Response) -> TransportResponse:
    body = _safe_json(response)

    if not response.is_success:
        logger.warning(
            "http_error_status",
            extra={"url": url, "status_code": response.status_code},
        )
        raise TransportError(
            f"http_status_{response.status_code}",
            status_code=response.status_code,
            provider_message=extract_provider_message(body),
            response_body=body,
        )

    if not isinstance(body, dict):
        logger.warning("http_invalid_json", extra={"url": url})
        raise TransportError(
            "invalid_json_response",
            status_code=response.status_code,
            response_body=body,
        )

    logger.debug("http_success", extra={"url": url, "status_code": response.status_code})
    return TransportResponse(status_code=response.status_code, data=body)


def _safe_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
