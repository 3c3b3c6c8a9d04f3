"""Protocolo de construção do payload de template."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.shopify_event import ShopifyEvent


class TemplatePayloadBuilderProtocol(Protocol):
    """Contrato mínimo para montar o payload do provedor.

    O template é escolhido pelo tipo do evento. Lança ``ValueError`` se o
    template do tipo não estiver configurado.
    """

    def build(self, event: ShopifyEvent, recipient_phone: str) -> dict[str, Any]: ...
