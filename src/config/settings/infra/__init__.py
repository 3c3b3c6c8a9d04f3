"""Agregador de settings de infraestrutura.

Re-exporta as settings de persistência para uso externo.
"""

from __future__ import annotations

from config.settings.infra.firestore import (
    DEFAULT_NOTIFICATIONS_COLLECTION,
    FirestoreSettings,
    get_firestore_settings,
)
from config.settings.infra.notification_log import (
    NotificationLogBackend,
    NotificationLogSettings,
    get_notification_log_settings,
)

__all__ = [
    "DEFAULT_NOTIFICATIONS_COLLECTION",
    "FirestoreSettings",
    "NotificationLogBackend",
    "NotificationLogSettings",
    "get_firestore_settings",
    "get_notification_log_settings",
]
