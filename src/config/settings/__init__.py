"""Agregador de settings do gateway de pagamentos.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.payments import (
    FLOOSS,
    JAWALI,
    PAYPAL,
    PaymentSettings,
    ProviderSettings,
    get_payment_settings,
)

__all__ = [
    # Provider ids
    "FLOOSS",
    "JAWALI",
    "PAYPAL",
    # Base
    "BaseSettings",
    "Environment",
    # Payments
    "PaymentSettings",
    "ProviderSettings",
    "get_base_settings",
    "get_payment_settings",
]
