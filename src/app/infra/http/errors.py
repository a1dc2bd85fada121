"""Extração da mensagem de erro devolvida pelos providers."""

from __future__ import annotations

from typing import Any


def extract_provider_message(body: Any) -> str | None:
    """Extrai a mensagem de erro mais específica de um corpo de resposta.

    Formatos reconhecidos:
    - {"message": "..."} (Flooss, Jawali, PayPal)
    - {"error_description": "..."} (OAuth2)
    - {"error": {"message": "..."}} ou {"error": "..."}
    - {"details": [{"description": "..."}]} (PayPal)

    Returns:
        Mensagem ou None se o corpo não trouxer nenhuma.
    """
    if not isinstance(body, dict):
        return None

    for key in ("message", "error_description"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value

    error_obj = body.get("error")
    if isinstance(error_obj, dict):
        message = error_obj.get("message")
        if isinstance(message, str) and message.strip():
            return message
    elif isinstance(error_obj, str) and error_obj.strip():
        return error_obj

    details = body.get("details")
    if isinstance(details, list) and details and isinstance(details[0], dict):
        description = details[0].get("description") or details[0].get("issue")
        if isinstance(description, str) and description.strip():
            return description

    return None
