"""Helpers de logging para API Meta/WhatsApp (sem PII)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .meta_errors import WhatsAppApiError

logger = logging.getLogger(__name__)


def log_meta_error(
    meta_error: WhatsAppApiError | None,
    endpoint: str,
    status_code: int,
) -> None:
    """Loga erro da Meta sem expor tokens ou destinatário."""
    logger.warning(
        "whatsapp_api_error",
        extra={
            "endpoint": endpoint,
            "status_code": status_code,
            "error_type": meta_error.error_type if meta_error else None,
            "error_code": meta_error.error_code if meta_error else None,
        },
    )


def log_success(endpoint: str, status_code: int) -> None:
    """Loga sucesso sem expor dados sensíveis."""
    logger.debug(
        "whatsapp_api_success",
        extra={"endpoint": endpoint, "status_code": status_code},
    )
