"""Execução em background do pipeline Shopify.

Cada entrega aceita vira uma task asyncio identificada por correlation_id e
tipo de evento. O número de pipelines rodando ao mesmo tempo é limitado por
``WEBHOOK_MAX_CONCURRENT_TASKS``; as demais tasks aguardam o semáforo.
No shutdown, ``drain_processing_tasks`` espera as pendentes e cancela as
que passarem do timeout.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any

from config.settings import get_shopify_settings

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from app.domain.notification import ProcessingOutcome

    PipelineCoroutine = Coroutine[Any, Any, ProcessingOutcome | None]

logger = logging.getLogger(__name__)

_semaphore: asyncio.Semaphore | None = None
_active_tasks: set[asyncio.Task[ProcessingOutcome | None]] = set()


@dataclass(frozen=True)
class ProcessingContext:
    """Entrega de webhook processada por uma task."""

    correlation_id: str
    event_kind: str

    def log_extra(self) -> dict[str, Any]:
        return {
            "channel": "shopify",
            "correlation_id": self.correlation_id,
            "event_kind": self.event_kind,
        }


def _get_semaphore() -> asyncio.Semaphore:
    global _semaphore
    if _semaphore is None:
        _semaphore = asyncio.Semaphore(get_shopify_settings().max_concurrent_tasks)
    return _semaphore


def schedule_processing_task(
    *,
    context: ProcessingContext,
    coroutine: PipelineCoroutine,
) -> asyncio.Task[ProcessingOutcome | None]:
    """Agenda o pipeline de uma entrega sem bloquear a resposta HTTP."""
    task = asyncio.create_task(
        _run_with_limit(coroutine),
        name=f"shopify:{context.event_kind}:{context.correlation_id}",
    )
    _active_tasks.add(task)
    task.add_done_callback(partial(_on_processing_task_done, context))
    logger.info(
        "webhook_processing_scheduled",
        extra={**context.log_extra(), "mode": "async", "active_tasks": len(_active_tasks)},
    )
    return task


async def _run_with_limit(coroutine: PipelineCoroutine) -> ProcessingOutcome | None:
    async with _get_semaphore():
        return await coroutine


def _on_processing_task_done(
    context: ProcessingContext,
    task: asyncio.Task[ProcessingOutcome | None],
) -> None:
    _active_tasks.discard(task)
    extra = {**context.log_extra(), "active_tasks": len(_active_tasks)}

    if task.cancelled():
        logger.warning("webhook_processing_task_cancelled", extra=extra)
        return

    exc = task.exception()
    if exc is not None:
        logger.error(
            "webhook_processing_task_failed",
            extra={**extra, "error_type": type(exc).__name__},
        )
        return

    outcome = task.result()
    logger.debug(
        "webhook_processing_task_done",
        extra={**extra, "outcome": str(outcome) if outcome is not None else "absorbed"},
    )


async def drain_processing_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda tasks pendentes durante shutdown; cancela as que passarem do timeout."""
    if not _active_tasks:
        return

    pending_now = list(_active_tasks)
    logger.info(
        "webhook_processing_shutdown_wait",
        extra={
            "channel": "shopify",
            "pending_tasks": len(pending_now),
            "timeout_seconds": timeout_seconds,
        },
    )
    _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
    if not pending:
        return

    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    logger.warning(
        "webhook_processing_shutdown_cancelled",
        extra={"channel": "shopify", "cancelled_tasks": len(pending)},
    )
