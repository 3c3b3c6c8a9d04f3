"""Protocolo do log de notificações.

Fonte única de verdade para idempotência e cooldown: nenhum cache em
memória é autoritativo entre entregas de webhook.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.notification import NotificationLogEntry, NotificationStatus


class NotificationLogProtocol(ABC):
    """Store append-only de tentativas de envio.

    Implementações não alteram nem removem entradas gravadas.
    """

    @abstractmethod
    async def insert(self, entry: NotificationLogEntry) -> None:
        """Grava uma nova entrada."""

    @abstractmethod
    async def find_by_event_id(self, event_id: str) -> NotificationLogEntry | None:
        """Retorna alguma entrada do evento (qualquer status) ou None."""

    @abstractmethod
    async def find_latest_by_phone(
        self,
        phone: str,
        status: NotificationStatus | None = None,
    ) -> NotificationLogEntry | None:
        """Retorna a entrada mais recente do telefone, por timestamp.

        Args:
            phone: Telefone canônico (E.164)
            status: Se informado, considera apenas entradas com esse status
        """
