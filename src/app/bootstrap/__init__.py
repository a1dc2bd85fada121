"""Bootstrap da aplicação: inicialização e wiring.

Composition root: configura logging, valida settings e conecta as
implementações concretas (adapters, transport) aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_payment_dispatcher

    initialize_app()
    dispatcher = get_payment_dispatcher()
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.bootstrap.payments_factory import (
    build_provider_credentials,
    create_payment_dispatcher,
    create_transport_client,
)
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_payment_settings

if TYPE_CHECKING:
    from app.services import PaymentDispatcher

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging JSON com correlation_id. Chamar uma vez no startup."""
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    errors = [f"base: {error}" for error in base.validate()]
    errors.extend(f"payments: {error}" for error in get_payment_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.is_strict:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


@lru_cache(maxsize=1)
def get_payment_dispatcher() -> PaymentDispatcher:
    """Dispatcher singleton configurado a partir do ambiente."""
    return create_payment_dispatcher()


__all__ = [
    "build_provider_credentials",
    "create_payment_dispatcher",
    "create_transport_client",
    "get_payment_dispatcher",
    "initialize_app",
    "validate_runtime_settings",
]
