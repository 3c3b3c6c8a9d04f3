"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - firestore_notification_log: Log de notificações usando Firestore
    - redis_dedupe_store: Claim atômico de eventos usando Redis
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.firestore_notification_log import FirestoreNotificationLog
from app.infra.stores.memory_stores import MemoryDedupeStore, MemoryNotificationLog
from app.infra.stores.redis_dedupe_store import RedisDedupeStore

__all__ = [
    # Firestore
    "FirestoreNotificationLog",
    # Memory (dev/test)
    "MemoryDedupeStore",
    "MemoryNotificationLog",
    # Redis
    "RedisDedupeStore",
]
