"""Factories de stores e do pipeline — criação de implementações concretas.

Centraliza a escolha de backends conforme as settings de ambiente.
"""

from __future__ import annotations

import logging

from api.connectors.whatsapp.http_client import create_whatsapp_http_client
from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.bootstrap.whatsapp_adapters import (
    GraphApiMessageSender,
    ShopifyEventNormalizer,
    ShopifyTemplatePayloadBuilder,
)
from app.infra.stores import (
    FirestoreNotificationLog,
    MemoryDedupeStore,
    MemoryNotificationLog,
    RedisDedupeStore,
)
from app.protocols.dedupe import AsyncDedupeProtocol
from app.protocols.notification_log import NotificationLogProtocol
from app.services.eligibility_gate import EligibilityGate
from app.use_cases.shopify import NotificationDispatcher, ProcessShopifyEventUseCase
from config.settings import (
    get_base_settings,
    get_dedupe_settings,
    get_firestore_settings,
    get_notification_log_settings,
    get_shopify_settings,
    get_whatsapp_settings,
)

logger = logging.getLogger(__name__)


def _warn_memory_backend(component: str) -> None:
    environment = get_base_settings().environment
    if environment != "development":
        logger.warning(
            "memory_store_in_non_dev",
            extra={"component": component, "backend": "memory", "environment": environment},
        )


def create_notification_log() -> NotificationLogProtocol:
    """Cria log de notificações conforme NOTIFICATION_LOG_BACKEND.

    - "memory": MemoryNotificationLog (dev/testes)
    - "firestore": FirestoreNotificationLog (staging/production)
    """
    backend = get_notification_log_settings().backend

    if backend == "firestore":
        store = FirestoreNotificationLog(
            create_firestore_client(),
            collection_name=get_firestore_settings().collection_notifications,
        )
        logger.info("notification_log_created", extra={"backend": "firestore"})
        return store

    _warn_memory_backend("notification_log")
    logger.info("notification_log_created", extra={"backend": "memory"})
    return MemoryNotificationLog()


def create_dedupe_store() -> AsyncDedupeProtocol:
    """Cria store de claim de eventos conforme DEDUPE_BACKEND.

    - "memory": MemoryDedupeStore (dev/testes, instância única)
    - "redis": RedisDedupeStore (SET NX EX)
    """
    backend = get_dedupe_settings().backend

    if backend == "redis":
        store = RedisDedupeStore(create_async_redis_client())
        logger.info("dedupe_store_created", extra={"backend": "redis"})
        return store

    _warn_memory_backend("dedupe")
    logger.info("dedupe_store_created", extra={"backend": "memory"})
    return MemoryDedupeStore()


def create_message_sender() -> GraphApiMessageSender:
    """Cria sender de templates da Graph API."""
    whatsapp = get_whatsapp_settings()
    return GraphApiMessageSender(whatsapp, create_whatsapp_http_client(whatsapp))


def create_process_shopify_event(
    notification_log: NotificationLogProtocol,
    dedupe_store: AsyncDedupeProtocol,
) -> ProcessShopifyEventUseCase:
    """Monta o pipeline completo sobre os stores informados."""
    shopify = get_shopify_settings()
    gate = EligibilityGate(
        notification_log,
        cooldown=get_notification_log_settings().cooldown,
    )
    dispatcher = NotificationDispatcher(
        builder=ShopifyTemplatePayloadBuilder(shopify),
        sender=create_message_sender(),
        notification_log=notification_log,
    )
    return ProcessShopifyEventUseCase(
        normalizer=ShopifyEventNormalizer(),
        gate=gate,
        claims=dedupe_store,
        dispatcher=dispatcher,
        default_region=shopify.default_region,
        claim_ttl_seconds=get_dedupe_settings().ttl_seconds,
    )
