"""Correlation id por entrega de webhook.

Usa ContextVar para ser async-safe: a task de processamento em background
herda o valor do request que a criou.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from contextvars import ContextVar, Token

CORRELATION_ID_HEADER = "x-correlation-id"
SHOPIFY_WEBHOOK_ID_HEADER = "x-shopify-webhook-id"
MAX_CORRELATION_ID_LENGTH = 128

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual ou string vazia."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual (gera UUID se None).

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def correlation_id_from_headers(headers: Mapping[str, str]) -> str:
    """Escolhe o correlation_id de uma entrega.

    Prioridade: ``x-correlation-id`` → ``x-shopify-webhook-id`` → UUID novo.
    Valores longos demais são descartados.
    """
    lowered = {key.lower(): value for key, value in headers.items()}
    for header in (CORRELATION_ID_HEADER, SHOPIFY_WEBHOOK_ID_HEADER):
        value = (lowered.get(header) or "").strip()
        if value and len(value) <= MAX_CORRELATION_ID_LENGTH:
            return value
    return generate_correlation_id()
