"""Gate de elegibilidade: dedup por evento + cooldown por destinatário.

As duas checagens são consultas ao log de notificações, sem transação.
A reserva atômica do evento fica a cargo do claim no pipeline.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from app.domain.notification import (
    EligibilityDecision,
    IneligibleReason,
    NotificationStatus,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.notification_log import NotificationLogProtocol

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN = timedelta(hours=24)


def utc_now() -> datetime:
    return datetime.now(UTC)


class EligibilityGate:
    """Decide se um par evento/destinatário deve receber notificação agora.

    Args:
        notification_log: Store consultado nas duas checagens
        cooldown: Janela mínima entre dois envios ao mesmo telefone
        clock: Fonte de "agora" (injetável para testes)
    """

    def __init__(
        self,
        notification_log: NotificationLogProtocol,
        cooldown: timedelta = DEFAULT_COOLDOWN,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._log = notification_log
        self._cooldown = cooldown
        self._clock = clock or utc_now

    async def check_eligible(self, event_id: str, recipient_phone: str) -> EligibilityDecision:
        """Executa dedup e cooldown, nessa ordem.

        1. Qualquer entrada do evento (enviada ou falha) bloqueia.
        2. Um envio bem-sucedido ao telefone há menos que o cooldown bloqueia.
           Entradas com falha não contam para o cooldown.
        """
        existing = await self._log.find_by_event_id(event_id)
        if existing is not None:
            return EligibilityDecision.deny(IneligibleReason.ALREADY_PROCESSED)

        latest = await self._log.find_latest_by_phone(
            recipient_phone, status=NotificationStatus.SENT
        )
        if latest is None or latest.timestamp is None:
            return EligibilityDecision.allow()

        last_sent_at = latest.timestamp
        if last_sent_at.tzinfo is None:
            last_sent_at = last_sent_at.replace(tzinfo=UTC)

        elapsed = self._clock() - last_sent_at
        if elapsed < self._cooldown:
            logger.debug(
                "eligibility_cooldown_active",
                extra={
                    "event_id": event_id,
                    "elapsed_seconds": int(elapsed.total_seconds()),
                },
            )
            return EligibilityDecision.deny(IneligibleReason.RATE_LIMITED)

        return EligibilityDecision.allow()
