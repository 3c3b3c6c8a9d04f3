"""Extração de telefone, nomes e valor a partir do payload validado.

Não valida telefone: apenas escolhe o primeiro candidato não vazio.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from app.domain.errors import MalformedPayloadError
from app.domain.shopify_event import DEFAULT_GREETING_NAME, UNKNOWN_DISPLAY_NAME

if TYPE_CHECKING:
    from .models import ShopifyContact, _ShopifyResourcePayload


def _contacts(payload: _ShopifyResourcePayload) -> tuple[ShopifyContact | None, ...]:
    # Ordem de precedência: customer → shipping → billing
    return (payload.customer, payload.shipping_address, payload.billing_address)


def resolve_phone(payload: _ShopifyResourcePayload) -> str | None:
    """Primeiro telefone não vazio, ou None."""
    for contact in _contacts(payload):
        if contact is None or not contact.phone:
            continue
        phone = contact.phone.strip()
        if phone:
            return phone
    return None


def resolve_display_name(payload: _ShopifyResourcePayload) -> str:
    """Nome completo para auditoria, com fallback ``Unknown User``."""
    for contact in _contacts(payload):
        if contact is None:
            continue
        name = contact.full_name
        if name:
            return name
    return UNKNOWN_DISPLAY_NAME


def resolve_greeting_name(payload: _ShopifyResourcePayload) -> str:
    """Primeiro nome do cliente para a saudação, com fallback ``there``."""
    customer = payload.customer
    if customer is not None and customer.first_name and customer.first_name.strip():
        return customer.first_name.strip()
    return DEFAULT_GREETING_NAME


def parse_total_amount(raw: str | None) -> Decimal | None:
    """Converte ``total_price`` em Decimal.

    Raises:
        MalformedPayloadError: Valor presente mas não numérico
    """
    if raw is None or not raw.strip():
        return None
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise MalformedPayloadError("invalid_total_price") from exc
    if not amount.is_finite():
        raise MalformedPayloadError("invalid_total_price")
    return amount


__all__ = [
    "parse_total_amount",
    "resolve_display_name",
    "resolve_greeting_name",
    "resolve_phone",
]
