"""Use cases Shopify: pipeline de webhook e dispatcher de notificação."""

from app.use_cases.shopify.dispatch_notification import NotificationDispatcher
from app.use_cases.shopify.process_shopify_event import (
    DEFAULT_CLAIM_TTL_SECONDS,
    ProcessShopifyEventUseCase,
    claim_key,
)

__all__ = [
    "DEFAULT_CLAIM_TTL_SECONDS",
    "NotificationDispatcher",
    "ProcessShopifyEventUseCase",
    "claim_key",
]
