"""Protocolo de normalização de webhooks Shopify."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.shopify_event import ShopifyEvent, ShopifyWebhook


class ShopifyEventNormalizerProtocol(Protocol):
    """Contrato mínimo para extrair o evento canônico de um webhook.

    Lança ``MalformedPayloadError`` para payloads inesperados.
    """

    def normalize(self, webhook: ShopifyWebhook) -> ShopifyEvent: ...
