"""Firestore Notification Log — trilha de auditoria dos envios.

Store append-only consultado pelo gate de elegibilidade. O SDK Python do
Firestore é síncrono; as operações rodam em ``asyncio.to_thread`` para não
bloquear o event loop.

Índice composto necessário para o cooldown:
    recipient_phone ASC, status ASC, timestamp DESC
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from google.cloud.firestore_v1.base_query import FieldFilter

from app.domain.notification import NotificationLogEntry, NotificationStatus
from app.protocols.notification_log import NotificationLogProtocol
from config.logging import mask_phone
from config.settings.infra.firestore import DEFAULT_NOTIFICATIONS_COLLECTION
from utils.errors import NotificationLogUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)

DESCENDING = "DESCENDING"


class FirestoreNotificationLog(NotificationLogProtocol):
    """Log de notificações usando Firestore.

    Características:
        - Append-only (``add`` com id automático, sem updates)
        - Sem PII em logs (telefone mascarado)

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: shopify_notification_log)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = DEFAULT_NOTIFICATIONS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def insert(self, entry: NotificationLogEntry) -> None:
        await asyncio.to_thread(self._insert_sync, entry)

    async def find_by_event_id(self, event_id: str) -> NotificationLogEntry | None:
        return await asyncio.to_thread(self._find_by_event_id_sync, event_id)

    async def find_latest_by_phone(
        self,
        phone: str,
        status: NotificationStatus | None = None,
    ) -> NotificationLogEntry | None:
        return await asyncio.to_thread(self._find_latest_by_phone_sync, phone, status)

    def _insert_sync(self, entry: NotificationLogEntry) -> None:
        try:
            self._db.collection(self._collection).add(entry.to_dict())
        except Exception as exc:
            logger.error(
                "notification_log_insert_error",
                extra={"error": str(exc), "event_id": entry.event_id},
            )
            raise NotificationLogUnavailableError("Falha ao gravar no log de notificações") from exc
        logger.debug(
            "notification_log_entry_inserted",
            extra={"event_id": entry.event_id, "status": entry.status.value},
        )

    def _find_by_event_id_sync(self, event_id: str) -> NotificationLogEntry | None:
        query = (
            self._db.collection(self._collection)
            .where(filter=FieldFilter("event_id", "==", event_id))
            .limit(1)
        )
        return self._first(query, context={"event_id": event_id})

    def _find_latest_by_phone_sync(
        self,
        phone: str,
        status: NotificationStatus | None,
    ) -> NotificationLogEntry | None:
        query = self._db.collection(self._collection).where(
            filter=FieldFilter("recipient_phone", "==", phone)
        )
        if status is not None:
            query = query.where(filter=FieldFilter("status", "==", status.value))
        query = query.order_by("timestamp", direction=DESCENDING).limit(1)
        return self._first(query, context={"phone": mask_phone(phone)})

    def _first(self, query: Any, context: dict[str, Any]) -> NotificationLogEntry | None:
        try:
            docs = list(query.stream())
        except Exception as exc:
            logger.error(
                "notification_log_query_error",
                extra={"error": str(exc), **context},
            )
            raise NotificationLogUnavailableError("Falha ao consultar o log de notificações") from exc

        if not docs:
            return None
        data = docs[0].to_dict() or {}
        try:
            return NotificationLogEntry.from_dict(data)
        except ValueError as exc:
            logger.error(
                "notification_log_document_invalid",
                extra={"error": str(exc), "document_id": docs[0].id, **context},
            )
            raise NotificationLogUnavailableError("Documento inválido no log de notificações") from exc
