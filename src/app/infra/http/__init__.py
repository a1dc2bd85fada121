"""Transport Client HTTP (httpx) usado pelos adapters de pagamento."""

from .client import HttpClientConfig, TransportClient
from .errors import extract_provider_message

__all__ = [
    "HttpClientConfig",
    "TransportClient",
    "extract_provider_message",
]
