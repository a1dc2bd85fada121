"""Configuração do pytest para o gateway de pagamentos."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.infra.http import HttpClientConfig, TransportClient  # noqa: E402

RouteHandler = Callable[[httpx.Request], httpx.Response]


class ProviderStub:
    """Provider falso: responde por path e registra as requisições recebidas."""

    def __init__(self, routes: dict[str, RouteHandler]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"message": "route not stubbed"})
        return handler(request)

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def provider_stub() -> Callable[[dict[str, RouteHandler]], tuple[TransportClient, ProviderStub]]:
    """Fábrica de (TransportClient, ProviderStub) sobre httpx.MockTransport."""

    def _build(routes: dict[str, RouteHandler]) -> tuple[TransportClient, ProviderStub]:
        stub = ProviderStub(routes)
        client = TransportClient(
            HttpClientConfig(timeout_seconds=30.0),
            transport=httpx.MockTransport(stub),
        )
        return client, stub

    return _build
