"""Normalizer Shopify — converte variantes de webhook em ShopifyEvent."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from app.domain.errors import MalformedPayloadError
from app.domain.shopify_event import (
    CheckoutUpdated,
    EventKind,
    ShopifyEvent,
    ShopifyWebhook,
    webhook_for_kind,
)

from .extractor import (
    parse_total_amount,
    resolve_display_name,
    resolve_greeting_name,
    resolve_phone,
)
from .models import ShopifyCheckoutPayload, ShopifyOrderPayload

logger = logging.getLogger(__name__)


def _validate(model: type[Any], payload: Any, kind: EventKind) -> Any:
    if not isinstance(payload, dict):
        raise MalformedPayloadError("payload_not_object")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        logger.warning(
            "shopify_payload_invalid",
            extra={"event_kind": str(kind), "invalid_fields": fields},
        )
        raise MalformedPayloadError("invalid_payload") from exc


def normalize_shopify_event(webhook: ShopifyWebhook) -> ShopifyEvent:
    """Normaliza webhook Shopify para o modelo interno.

    Args:
        webhook: ``CheckoutUpdated`` ou ``OrderCreated`` com payload bruto

    Returns:
        ShopifyEvent imutável

    Raises:
        MalformedPayloadError: Payload não é objeto, sem ``id`` ou com tipos inválidos
    """
    if isinstance(webhook, CheckoutUpdated):
        checkout: ShopifyCheckoutPayload = _validate(
            ShopifyCheckoutPayload, webhook.payload, webhook.kind
        )
        return ShopifyEvent(
            event_id=checkout.id,
            kind=webhook.kind,
            raw_recipient_phone=resolve_phone(checkout),
            display_name=resolve_display_name(checkout),
            greeting_name=resolve_greeting_name(checkout),
            is_already_completed=bool(checkout.completed_at),
            total_amount=parse_total_amount(checkout.total_price),
        )

    order: ShopifyOrderPayload = _validate(ShopifyOrderPayload, webhook.payload, webhook.kind)
    return ShopifyEvent(
        event_id=order.id,
        kind=webhook.kind,
        raw_recipient_phone=resolve_phone(order),
        display_name=resolve_display_name(order),
        greeting_name=resolve_greeting_name(order),
        is_already_completed=False,
        total_amount=parse_total_amount(order.total_price),
    )


def normalize_payload(kind: EventKind, payload: dict[str, Any]) -> ShopifyEvent:
    """Atalho: empacota ``payload`` na variante de ``kind`` e normaliza."""
    return normalize_shopify_event(webhook_for_kind(kind, payload))


__all__ = ["normalize_payload", "normalize_shopify_event"]
