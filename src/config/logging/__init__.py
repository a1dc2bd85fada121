"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="payments_gateway")
    logger = get_logger(__name__)
    logger.info("payment_processing_started", extra={"provider": "paypal"})

Nunca logar credenciais, PIN ou payload completo de provider.
"""

from config.logging.config import configure_logging, get_logger, log_provider_failure
from config.logging.filters import (
    REDACTED,
    CorrelationIdFilter,
    SecretRedactionFilter,
    is_sensitive_key,
)
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REDACTED",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SecretRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "is_sensitive_key",
    "log_provider_failure",
]
