"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios
e sem compartilhamento entre processos.
"""

from __future__ import annotations

import asyncio
import time
from datetime import UTC, datetime

from app.domain.notification import NotificationLogEntry, NotificationStatus
from app.protocols.dedupe import AsyncDedupeProtocol
from app.protocols.notification_log import NotificationLogProtocol

_EPOCH = datetime.min.replace(tzinfo=UTC)


class MemoryNotificationLog(NotificationLogProtocol):
    """Log de notificações em memória — apenas para dev/test."""

    def __init__(self) -> None:
        self._entries: list[NotificationLogEntry] = []

    async def insert(self, entry: NotificationLogEntry) -> None:
        self._entries.append(entry)

    async def find_by_event_id(self, event_id: str) -> NotificationLogEntry | None:
        for entry in self._entries:
            if entry.event_id == event_id:
                return entry
        return None

    async def find_latest_by_phone(
        self,
        phone: str,
        status: NotificationStatus | None = None,
    ) -> NotificationLogEntry | None:
        matches = [
            entry
            for entry in self._entries
            if entry.recipient_phone == phone and (status is None or entry.status == status)
        ]
        if not matches:
            return None
        return max(matches, key=lambda entry: entry.timestamp or _EPOCH)

    def get_entries(self) -> list[NotificationLogEntry]:
        """Retorna todas as entradas (apenas para testes)."""
        return list(self._entries)


class MemoryDedupeStore(AsyncDedupeProtocol):
    """Claim de eventos em memória — apenas para dev/test."""

    def __init__(self) -> None:
        self._store: dict[str, float] = {}  # key -> expires_at
        self._lock = asyncio.Lock()

    def _cleanup_expired(self) -> None:
        """Remove entradas expiradas."""
        now = time.time()
        expired = [k for k, v in self._store.items() if v < now]
        for k in expired:
            del self._store[k]

    async def seen(self, key: str, ttl: int) -> bool:
        """Verifica e reserva chave atomicamente."""
        async with self._lock:
            self._cleanup_expired()
            now = time.time()
            if key in self._store and self._store[key] > now:
                return True  # Duplicado
            self._store[key] = now + ttl
            return False  # Novo
