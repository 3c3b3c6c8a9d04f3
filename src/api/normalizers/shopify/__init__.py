"""Normalizer Shopify — webhooks de checkout e pedido para ShopifyEvent."""

from .normalizer import normalize_payload, normalize_shopify_event

__all__ = ["normalize_payload", "normalize_shopify_event"]
