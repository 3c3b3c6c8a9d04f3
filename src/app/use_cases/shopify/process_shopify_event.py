"""Use case de processamento de webhook Shopify.

normalizar → checkout concluído? → telefone → gate → claim → dispatch.
Falhas esperadas viram ``ProcessingOutcome`` com log; erros de
infraestrutura propagam para o runner em background.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.errors import InvalidPhoneError, MalformedPayloadError
from app.domain.notification import (
    IneligibleReason,
    NotificationStatus,
    ProcessingOutcome,
)
from app.services.phone_normalizer import normalize_phone
from config.logging import mask_phone

if TYPE_CHECKING:
    from app.domain.shopify_event import ShopifyWebhook
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.protocols.normalizer import ShopifyEventNormalizerProtocol
    from app.services.eligibility_gate import EligibilityGate
    from app.use_cases.shopify.dispatch_notification import NotificationDispatcher

logger = logging.getLogger(__name__)

DEFAULT_CLAIM_TTL_SECONDS = 86400

_INELIGIBLE_OUTCOMES = {
    IneligibleReason.ALREADY_PROCESSED: ProcessingOutcome.ALREADY_PROCESSED,
    IneligibleReason.RATE_LIMITED: ProcessingOutcome.RATE_LIMITED,
}


def claim_key(event_id: str) -> str:
    return f"shopify_event:{event_id}"


class ProcessShopifyEventUseCase:
    """Orquestra o pipeline de uma entrega de webhook Shopify."""

    def __init__(
        self,
        normalizer: ShopifyEventNormalizerProtocol,
        gate: EligibilityGate,
        claims: AsyncDedupeProtocol,
        dispatcher: NotificationDispatcher,
        default_region: str,
        claim_ttl_seconds: int = DEFAULT_CLAIM_TTL_SECONDS,
    ) -> None:
        self._normalizer = normalizer
        self._gate = gate
        self._claims = claims
        self._dispatcher = dispatcher
        self._default_region = default_region
        self._claim_ttl_seconds = claim_ttl_seconds

    async def execute(self, webhook: ShopifyWebhook) -> ProcessingOutcome:
        """Processa um webhook já autenticado."""
        try:
            event = self._normalizer.normalize(webhook)
        except MalformedPayloadError as exc:
            logger.warning(
                "shopify_event_malformed",
                extra={"event_kind": str(webhook.kind), "error": str(exc)},
            )
            return ProcessingOutcome.MALFORMED_PAYLOAD

        log_extra = {"event_id": event.event_id, "event_kind": str(event.kind)}

        if event.is_already_completed:
            logger.info("shopify_event_already_completed", extra=log_extra)
            return ProcessingOutcome.ALREADY_COMPLETED

        if event.raw_recipient_phone is None:
            logger.info("shopify_event_missing_recipient", extra=log_extra)
            return ProcessingOutcome.MISSING_RECIPIENT

        try:
            phone = normalize_phone(event.raw_recipient_phone, self._default_region)
        except InvalidPhoneError as exc:
            logger.info(
                "shopify_event_invalid_phone",
                extra={**log_extra, "reason": str(exc)},
            )
            return ProcessingOutcome.INVALID_PHONE

        decision = await self._gate.check_eligible(event.event_id, phone)
        if not decision.eligible:
            logger.info(
                "shopify_event_ineligible",
                extra={
                    **log_extra,
                    "recipient": mask_phone(phone),
                    "reason": str(decision.reason),
                },
            )
            return _INELIGIBLE_OUTCOMES[decision.reason]

        if await self._claims.seen(claim_key(event.event_id), self._claim_ttl_seconds):
            logger.info("shopify_event_claim_conflict", extra=log_extra)
            return ProcessingOutcome.ALREADY_PROCESSED

        entry = await self._dispatcher.dispatch(event, phone)
        if entry.status is NotificationStatus.SENT:
            return ProcessingOutcome.SENT
        return ProcessingOutcome.FAILED
