"""Formatter JSON dos logs do gateway de pagamentos.

Toda linha carrega o correlation_id da chamada ao provider, para que
tentativa de cobrança, troca de token e verificação de webhook de uma mesma
requisição possam ser agrupadas. Campos de `extra` (provider, reason,
transaction_id, status_code) saem no nível raiz do JSON, já redigidos por
SecretRedactionFilter.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem de saída no JSON; correlation_id e service vêm de CorrelationIdFilter
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Nomes curtos usados pelas consultas de log de pagamentos
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Formatter usado pelo handler raiz em configure_logging.

    Exemplo de falha de provider:
        {
            "asctime": "2026-10-18 10:30:00,000",
            "level": "WARNING",
            "logger": "api.connectors.payments.base",
            "message": "payment_provider_failure",
            "correlation_id": "abc-123",
            "service": "payments_gateway",
            "provider": "jawali",
            "reason": "timeout",
            "transaction_id": "T1"
        }
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
    )
