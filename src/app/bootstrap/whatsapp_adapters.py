"""Adapters concretos para Shopify/WhatsApp (wiring em app/bootstrap).

Este módulo é o único autorizado a acoplar app <-> api.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.http_base import HttpError
from api.connectors.whatsapp.http_client import WhatsAppHttpClient
from api.normalizers.shopify import normalize_shopify_event
from api.payload_builders.whatsapp.template import build_template_payload
from app.domain.notification import SendResult
from app.domain.shopify_event import EventKind

if TYPE_CHECKING:
    from app.domain.shopify_event import ShopifyEvent, ShopifyWebhook
    from config.settings import ShopifySettings, WhatsAppSettings

logger = logging.getLogger(__name__)


class ShopifyEventNormalizer:
    """Normalizador baseado nos modelos pydantic de webhook Shopify."""

    def normalize(self, webhook: ShopifyWebhook) -> ShopifyEvent:
        return normalize_shopify_event(webhook)


class ShopifyTemplatePayloadBuilder:
    """Builder de template escolhido pelo tipo do evento."""

    def __init__(self, shopify: ShopifySettings) -> None:
        self._shopify = shopify

    def build(self, event: ShopifyEvent, recipient_phone: str) -> dict[str, Any]:
        if event.kind is EventKind.CHECKOUT_UPDATED:
            template = self._shopify.checkout_template
        else:
            template = self._shopify.order_template
        return build_template_payload(
            event,
            recipient_phone,
            template,
            discount_code=self._shopify.discount_code,
        )


class GraphApiMessageSender:
    """Sender de templates usando cliente HTTP WhatsApp.

    Uma tentativa por chamada; falhas voltam como ``SendResult`` sem sucesso.
    """

    def __init__(self, whatsapp: WhatsAppSettings, http_client: WhatsAppHttpClient) -> None:
        self._whatsapp = whatsapp
        self._http_client = http_client

    async def send(self, payload: dict[str, Any]) -> SendResult:
        try:
            endpoint = self._whatsapp.get_messages_endpoint()
            response = await self._http_client.send_message(
                endpoint=endpoint,
                access_token=self._whatsapp.access_token,
                payload=payload,
            )
        except HttpError as exc:
            return SendResult(
                success=False,
                error_detail=exc.detail or str(exc),
            )
        except ValueError as exc:
            logger.error("whatsapp_sender_misconfigured", extra={"error": str(exc)})
            return SendResult(success=False, error_detail=str(exc))

        messages = response.get("messages")
        first = messages[0] if isinstance(messages, list) and messages else {}
        if not isinstance(first, dict):
            first = {}
        message_id = first.get("id")
        message_status = first.get("message_status")
        logger.info(
            "message_sent_to_whatsapp_api",
            extra={"message_id": message_id, "message_status": message_status},
        )
        return SendResult(
            success=True,
            message_id=str(message_id) if message_id is not None else None,
            message_status=str(message_status) if message_status is not None else None,
        )
