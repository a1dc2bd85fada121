"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json

import pytest

from api.routes.health import router as health_routes
from config.settings import PaymentSettings, ProviderSettings


@pytest.mark.asyncio
async def test_health_reports_service_name() -> None:
    response = await health_routes.health_check()

    assert response.status == "healthy"
    assert response.service
    assert response.timestamp


@pytest.mark.asyncio
async def test_readiness_returns_not_ready_without_providers(monkeypatch) -> None:
    monkeypatch.setattr(
        health_routes,
        "get_payment_settings",
        lambda: PaymentSettings(providers={"flooss": ProviderSettings()}),
    )

    response = await health_routes.readiness_check()
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["providers"] == {"flooss": False}


@pytest.mark.asyncio
async def test_readiness_returns_ready_when_a_provider_is_configured(monkeypatch) -> None:
    monkeypatch.setattr(
        health_routes,
        "get_payment_settings",
        lambda: PaymentSettings(
            providers={
                "flooss": ProviderSettings(),
                "paypal": ProviderSettings(api_base_url="https://api-m.sandbox.paypal.com"),
            }
        ),
    )

    response = await health_routes.readiness_check()
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["providers"] == {"flooss": False, "paypal": True}
