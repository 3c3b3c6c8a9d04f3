"""Runtime helpers para processamento dos webhooks Shopify.

Depois da assinatura validada a resposta é sempre 200: nenhum erro do
pipeline (nem da montagem dele) volta para a rota.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.routes.shopify.webhook_runtime_tasks import (
    ProcessingContext,
    drain_processing_tasks,
    schedule_processing_task,
)
from app.domain.errors import ShopifyEventError
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from app.domain.notification import ProcessingOutcome
    from app.domain.shopify_event import ShopifyWebhook
    from app.use_cases.shopify import ProcessShopifyEventUseCase

logger = logging.getLogger(__name__)


def get_process_use_case() -> ProcessShopifyEventUseCase:
    """Obtém o pipeline Shopify (lazy-loading via bootstrap)."""
    from app.bootstrap import get_process_shopify_event

    return get_process_shopify_event()


async def process_webhook_safe(
    *,
    webhook: ShopifyWebhook,
    correlation_id: str,
    use_case: ProcessShopifyEventUseCase,
) -> ProcessingOutcome | None:
    """Executa o pipeline com classificação explícita de erros.

    Erros de validação são absorvidos; erros de infraestrutura e inesperados
    são logados e propagados para o callback da task.
    """
    try:
        outcome = await use_case.execute(webhook)
    except Exception as exc:
        if _is_validation_error(exc):
            logger.warning(
                "webhook_processing_validation_failed",
                extra={
                    "channel": "shopify",
                    "correlation_id": correlation_id,
                    "event_kind": str(webhook.kind),
                    "error_type": type(exc).__name__,
                },
            )
            return None
        if _is_infrastructure_error(exc):
            logger.error(
                "webhook_processing_infra_failed",
                extra={
                    "channel": "shopify",
                    "correlation_id": correlation_id,
                    "event_kind": str(webhook.kind),
                    "error_type": type(exc).__name__,
                },
            )
            raise
        logger.exception(
            "webhook_processing_failed",
            extra={"channel": "shopify", "correlation_id": correlation_id},
        )
        raise

    logger.info(
        "webhook_processing_completed",
        extra={
            "channel": "shopify",
            "correlation_id": correlation_id,
            "event_kind": str(webhook.kind),
            "outcome": str(outcome),
        },
    )
    return outcome


async def run_pipeline(
    *,
    webhook: ShopifyWebhook,
    correlation_id: str,
) -> ProcessingOutcome | None:
    """Monta o pipeline e processa o webhook.

    Falha na montagem (credenciais do Firestore, REDIS_URL) é logada e
    propagada como os demais erros de infraestrutura.
    """
    try:
        use_case = get_process_use_case()
    except Exception:
        logger.exception(
            "webhook_pipeline_unavailable",
            extra={
                "channel": "shopify",
                "correlation_id": correlation_id,
                "event_kind": str(webhook.kind),
            },
        )
        raise

    return await process_webhook_safe(
        webhook=webhook,
        correlation_id=correlation_id,
        use_case=use_case,
    )


async def dispatch_processing(
    *,
    webhook: ShopifyWebhook,
    correlation_id: str,
    processing_mode: str,
) -> None:
    """Despacha processamento inline ou async conforme configuração.

    Não propaga erros: no modo inline eles já foram logados pelo pipeline;
    no modo async o callback da task registra a falha.
    """
    if processing_mode.lower() == "inline":
        try:
            await run_pipeline(webhook=webhook, correlation_id=correlation_id)
        except Exception as exc:
            logger.warning(
                "webhook_inline_processing_absorbed",
                extra={
                    "channel": "shopify",
                    "correlation_id": correlation_id,
                    "event_kind": str(webhook.kind),
                    "error_type": type(exc).__name__,
                },
            )
        return

    schedule_processing_task(
        context=ProcessingContext(
            correlation_id=correlation_id,
            event_kind=str(webhook.kind),
        ),
        coroutine=run_pipeline(webhook=webhook, correlation_id=correlation_id),
    )


async def drain_background_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda tasks async pendentes durante shutdown do processo."""
    await drain_processing_tasks(timeout_seconds=timeout_seconds)


def _is_validation_error(exc: Exception) -> bool:
    return isinstance(exc, ShopifyEventError)


def _is_infrastructure_error(exc: Exception) -> bool:
    if isinstance(exc, InfrastructureError):
        return True
    module_name = type(exc).__module__
    return module_name.startswith(("redis.", "google.api_core."))


__all__ = [
    "dispatch_processing",
    "drain_background_tasks",
    "get_process_use_case",
    "process_webhook_safe",
    "run_pipeline",
]
