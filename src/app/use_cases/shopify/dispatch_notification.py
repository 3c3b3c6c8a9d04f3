"""Dispatcher: monta, envia e registra uma notificação.

Cada chamada a ``dispatch`` grava exatamente uma entrada no log,
SENT ou FAILED. Não há reenvio automático.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.notification import NotificationLogEntry, NotificationStatus, SendResult
from app.services.eligibility_gate import utc_now
from config.logging import mask_phone

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from app.domain.shopify_event import ShopifyEvent
    from app.protocols.message_sender import MessageSenderProtocol
    from app.protocols.notification_log import NotificationLogProtocol
    from app.protocols.payload_builder import TemplatePayloadBuilderProtocol

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Envia o template do evento e grava o resultado no log."""

    def __init__(
        self,
        builder: TemplatePayloadBuilderProtocol,
        sender: MessageSenderProtocol,
        notification_log: NotificationLogProtocol,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._builder = builder
        self._sender = sender
        self._log = notification_log
        self._clock = clock or utc_now

    async def dispatch(self, event: ShopifyEvent, recipient_phone: str) -> NotificationLogEntry:
        """Envia a notificação e retorna a entrada gravada.

        Erro de montagem do payload (template ausente) vira entrada FAILED,
        sem chamada ao provedor. Exceções inesperadas do sender também
        viram FAILED.
        """
        try:
            payload = self._builder.build(event, recipient_phone)
        except ValueError as exc:
            result = SendResult(success=False, error_detail=str(exc))
        else:
            result = await self._send(event, payload)

        entry = NotificationLogEntry(
            recipient_phone=recipient_phone,
            event_id=event.event_id,
            status=NotificationStatus.SENT if result.success else NotificationStatus.FAILED,
            timestamp=self._clock(),
            event_kind=str(event.kind),
            full_name=event.display_name,
            provider_message_id=result.message_id,
            provider_status=result.message_status,
            error_detail=None if result.success else result.error_detail,
        )
        await self._log.insert(entry)

        log_extra = {
            "event_id": event.event_id,
            "event_kind": str(event.kind),
            "recipient": mask_phone(recipient_phone),
        }
        if result.success:
            logger.info(
                "whatsapp_notification_sent",
                extra={**log_extra, "provider_status": result.message_status},
            )
        else:
            logger.warning(
                "whatsapp_send_failed",
                extra={**log_extra, "error_detail": result.error_detail},
            )
        return entry

    async def _send(self, event: ShopifyEvent, payload: dict[str, Any]) -> SendResult:
        # Qualquer falha do sender vira entrada FAILED; o claim do evento já foi feito
        try:
            return await self._sender.send(payload)
        except Exception as exc:
            logger.exception(
                "whatsapp_sender_unexpected_error",
                extra={"event_id": event.event_id, "error_type": type(exc).__name__},
            )
            return SendResult(success=False, error_detail=f"{type(exc).__name__}: {exc}")
