"""Agregador de settings do relay.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    DedupeBackend,
    DedupeSettings,
    Environment,
    get_base_settings,
    get_dedupe_settings,
)

# Infrastructure settings
from config.settings.infra import (
    DEFAULT_NOTIFICATIONS_COLLECTION,
    FirestoreSettings,
    NotificationLogBackend,
    NotificationLogSettings,
    get_firestore_settings,
    get_notification_log_settings,
)

# Channel-specific settings
from config.settings.shopify import (
    DEFAULT_PHONE_REGION,
    ShopifySettings,
    TemplateSettings,
    get_shopify_settings,
)
from config.settings.whatsapp import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    # Constants
    "DEFAULT_NOTIFICATIONS_COLLECTION",
    "DEFAULT_PHONE_REGION",
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    # Base
    "BaseSettings",
    "DedupeBackend",
    "DedupeSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    "NotificationLogBackend",
    "NotificationLogSettings",
    # Channels
    "ShopifySettings",
    "TemplateSettings",
    "WhatsAppSettings",
    "get_base_settings",
    "get_dedupe_settings",
    "get_firestore_settings",
    "get_notification_log_settings",
    "get_shopify_settings",
    "get_whatsapp_settings",
]
