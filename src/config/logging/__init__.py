"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="shopify_whatsapp_relay")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("shopify_webhook_received", extra={"event_kind": "order_created"})

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime

Telefones nunca vão crus para o log: use ``mask_phone``.
"""

from config.logging.config import configure_logging, get_logger, mask_phone
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    # Filters
    "CorrelationIdFilter",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "get_logger",
    "mask_phone",
]
