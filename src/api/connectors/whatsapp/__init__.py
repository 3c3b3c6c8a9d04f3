"""Conector WhatsApp - adapter de borda para Meta Graph API.

Único ponto de IO para envio de templates WhatsApp.
"""

from .http_base import HttpClient, HttpClientConfig, HttpError
from .http_client import WhatsAppHttpClient, create_whatsapp_http_client
from .meta_errors import (
    WhatsAppApiError,
    describe_error_body,
    parse_meta_error,
)

__all__ = [
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "WhatsAppApiError",
    "WhatsAppHttpClient",
    "create_whatsapp_http_client",
    "describe_error_body",
    "parse_meta_error",
]
