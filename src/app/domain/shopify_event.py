"""Eventos Shopify: variantes de webhook e evento normalizado.

Cada webhook chega como uma variante tipada (``CheckoutUpdated`` ou
``OrderCreated``) carregando o payload bruto; o normalizador consome a
variante e produz um ``ShopifyEvent`` imutável.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from decimal import Decimal

UNKNOWN_DISPLAY_NAME = "Unknown User"
DEFAULT_GREETING_NAME = "there"


class EventKind(StrEnum):
    """Tipos de webhook Shopify tratados pelo relay."""

    CHECKOUT_UPDATED = "checkout_updated"
    ORDER_CREATED = "order_created"


@dataclass(frozen=True)
class CheckoutUpdated:
    """Webhook ``checkouts/update``."""

    kind: ClassVar[EventKind] = EventKind.CHECKOUT_UPDATED

    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OrderCreated:
    """Webhook ``orders/create``."""

    kind: ClassVar[EventKind] = EventKind.ORDER_CREATED

    payload: dict[str, Any] = field(default_factory=dict)


ShopifyWebhook = CheckoutUpdated | OrderCreated


def webhook_for_kind(kind: EventKind, payload: dict[str, Any]) -> ShopifyWebhook:
    """Empacota o payload na variante correspondente ao tipo de evento."""
    if kind is EventKind.CHECKOUT_UPDATED:
        return CheckoutUpdated(payload=payload)
    return OrderCreated(payload=payload)


@dataclass(frozen=True)
class ShopifyEvent:
    """Evento Shopify normalizado.

    Attributes:
        event_id: ID atribuído pela Shopify (checkout ou pedido)
        kind: Tipo do webhook de origem
        raw_recipient_phone: Primeiro telefone não vazio (customer → shipping → billing)
        display_name: Nome completo para auditoria (fallback "Unknown User")
        greeting_name: Primeiro nome usado no corpo da mensagem (fallback "there")
        is_already_completed: Checkout já concluído (nada a lembrar)
        total_amount: Valor total do pedido, quando informado
    """

    event_id: str
    kind: EventKind
    raw_recipient_phone: str | None
    display_name: str = UNKNOWN_DISPLAY_NAME
    greeting_name: str = DEFAULT_GREETING_NAME
    is_already_completed: bool = False
    total_amount: Decimal | None = None


__all__ = [
    "DEFAULT_GREETING_NAME",
    "UNKNOWN_DISPLAY_NAME",
    "CheckoutUpdated",
    "EventKind",
    "OrderCreated",
    "ShopifyEvent",
    "ShopifyWebhook",
    "webhook_for_kind",
]
