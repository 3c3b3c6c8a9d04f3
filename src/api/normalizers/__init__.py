"""Normalizers por canal — conversão de payloads externos para modelos internos.

Estrutura:
- shopify/: webhooks checkouts/update e orders/create
"""

from .shopify import normalize_payload, normalize_shopify_event

__all__ = ["normalize_payload", "normalize_shopify_event"]
