"""Bootstrap da aplicação — inicialização e wiring.

Composition root: configura logging, valida settings e conecta
implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_process_shopify_event

    initialize_app()
    use_case = get_process_shopify_event()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_dedupe_settings,
    get_firestore_settings,
    get_notification_log_settings,
    get_shopify_settings,
    get_whatsapp_settings,
)

if TYPE_CHECKING:
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.protocols.notification_log import NotificationLogProtocol
    from app.use_cases.shopify import ProcessShopifyEventUseCase

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=get_base_settings().service_name,
        correlation_id_getter=get_correlation_id,
    )


def collect_settings_errors() -> list[str]:
    """Agrega erros de todas as settings, prefixados pelo componente."""
    base = get_base_settings()
    errors: list[str] = [f"base: {error}" for error in base.validate()]

    errors.extend(f"dedupe: {error}" for error in get_dedupe_settings().validate(base))

    notification_log = get_notification_log_settings()
    errors.extend(
        f"notification_log: {error}" for error in notification_log.validate(base)
    )
    if notification_log.backend == "firestore":
        firestore_errors = get_firestore_settings().validate(base.gcp_project)
        errors.extend(f"firestore: {error}" for error in firestore_errors)

    errors.extend(f"whatsapp: {error}" for error in get_whatsapp_settings().validate())
    errors.extend(f"shopify: {error}" for error in get_shopify_settings().validate())
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    environment = get_base_settings().environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_notification_log() -> NotificationLogProtocol:
    """Obtém log de notificações (singleton)."""
    from app.bootstrap.dependencies import create_notification_log
    return create_notification_log()


@lru_cache(maxsize=1)
def get_dedupe_store() -> AsyncDedupeProtocol:
    """Obtém store de claim de eventos (singleton)."""
    from app.bootstrap.dependencies import create_dedupe_store
    return create_dedupe_store()


@lru_cache(maxsize=1)
def get_process_shopify_event() -> ProcessShopifyEventUseCase:
    """Obtém pipeline Shopify montado sobre os stores singleton."""
    from app.bootstrap.dependencies import create_process_shopify_event
    return create_process_shopify_event(get_notification_log(), get_dedupe_store())
