"""Testes do pipeline completo de webhook Shopify."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from app.bootstrap.whatsapp_adapters import ShopifyEventNormalizer, ShopifyTemplatePayloadBuilder
from app.domain.notification import (
    NotificationLogEntry,
    NotificationStatus,
    ProcessingOutcome,
    SendResult,
)
from app.domain.shopify_event import CheckoutUpdated, OrderCreated
from app.infra.stores import MemoryDedupeStore, MemoryNotificationLog
from app.services.eligibility_gate import EligibilityGate
from app.use_cases.shopify import NotificationDispatcher, ProcessShopifyEventUseCase
from config.settings import ShopifySettings, TemplateSettings
from tests.fakes.fake_message_sender import FakeMessageSender, FixedClock
from utils.errors import NotificationLogUnavailableError

PHONE = "+919876543210"
NOW = datetime(2026, 10, 17, 12, 0, tzinfo=UTC)
SHOPIFY = ShopifySettings(
    webhook_secret="secret",
    discount_code="SAVE10",
    checkout_template=TemplateSettings(name="abandoned_cart", image_url="https://cdn.test/a.png"),
    order_template=TemplateSettings(
        name="order_confirmation", language="en", image_url="https://cdn.test/a.png"
    ),
)


def _checkout_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": "chk_1",
        "completed_at": None,
        "customer": {"first_name": "Asha", "last_name": "Rao", "phone": "9876543210"},
    }
    payload.update(overrides)
    return payload


class _Pipeline:
    def __init__(self, sender: FakeMessageSender | None = None) -> None:
        self.log = MemoryNotificationLog()
        self.claims = MemoryDedupeStore()
        self.sender = sender or FakeMessageSender()
        clock = FixedClock(NOW)
        self.use_case = ProcessShopifyEventUseCase(
            normalizer=ShopifyEventNormalizer(),
            gate=EligibilityGate(self.log, cooldown=timedelta(hours=24), clock=clock),
            claims=self.claims,
            dispatcher=NotificationDispatcher(
                builder=ShopifyTemplatePayloadBuilder(SHOPIFY),
                sender=self.sender,
                notification_log=self.log,
                clock=clock,
            ),
            default_region="IN",
        )


@pytest.mark.asyncio
async def test_abandoned_checkout_is_sent_and_logged() -> None:
    pipeline = _Pipeline()

    outcome = await pipeline.use_case.execute(CheckoutUpdated(payload=_checkout_payload()))

    assert outcome is ProcessingOutcome.SENT
    assert len(pipeline.sender.payloads) == 1
    payload = pipeline.sender.payloads[0]
    assert payload["to"] == PHONE
    assert payload["template"]["name"] == "abandoned_cart"
    [entry] = pipeline.log.get_entries()
    assert entry.status is NotificationStatus.SENT
    assert entry.event_id == "chk_1"
    assert entry.recipient_phone == PHONE


@pytest.mark.asyncio
async def test_redelivered_checkout_adds_no_entry() -> None:
    pipeline = _Pipeline()
    await pipeline.log.insert(
        NotificationLogEntry(
            recipient_phone=PHONE,
            event_id="chk_1",
            status=NotificationStatus.SENT,
            timestamp=NOW - timedelta(days=2),
        )
    )

    outcome = await pipeline.use_case.execute(CheckoutUpdated(payload=_checkout_payload()))

    assert outcome is ProcessingOutcome.ALREADY_PROCESSED
    assert pipeline.sender.payloads == []
    assert len(pipeline.log.get_entries()) == 1


@pytest.mark.asyncio
async def test_order_one_hour_after_send_is_rate_limited() -> None:
    pipeline = _Pipeline()
    await pipeline.log.insert(
        NotificationLogEntry(
            recipient_phone=PHONE,
            event_id="chk_1",
            status=NotificationStatus.SENT,
            timestamp=NOW - timedelta(hours=1),
        )
    )
    order = {"id": 1001, "customer": {"first_name": "Asha", "phone": "+91 98765 43210"}}

    outcome = await pipeline.use_case.execute(OrderCreated(payload=order))

    assert outcome is ProcessingOutcome.RATE_LIMITED
    assert pipeline.sender.payloads == []
    assert len(pipeline.log.get_entries()) == 1


@pytest.mark.asyncio
async def test_order_confirmation_body() -> None:
    pipeline = _Pipeline()
    order = {
        "id": 1001,
        "total_price": "1299.00",
        "customer": {"first_name": "Asha", "phone": "9876543210"},
    }

    outcome = await pipeline.use_case.execute(OrderCreated(payload=order))

    assert outcome is ProcessingOutcome.SENT
    body = pipeline.sender.payloads[0]["template"]["components"][1]
    assert [p["text"] for p in body["parameters"]] == ["Asha", "1001", "1299"]


@pytest.mark.asyncio
async def test_completed_checkout_is_skipped() -> None:
    pipeline = _Pipeline()

    outcome = await pipeline.use_case.execute(
        CheckoutUpdated(payload=_checkout_payload(completed_at="2026-10-17T11:00:00Z"))
    )

    assert outcome is ProcessingOutcome.ALREADY_COMPLETED
    assert pipeline.sender.payloads == []
    assert pipeline.log.get_entries() == []


@pytest.mark.asyncio
async def test_missing_phone_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    pipeline = _Pipeline()

    with caplog.at_level("INFO"):
        outcome = await pipeline.use_case.execute(
            CheckoutUpdated(payload=_checkout_payload(customer={"first_name": "Asha"}))
        )

    assert outcome is ProcessingOutcome.MISSING_RECIPIENT
    assert pipeline.log.get_entries() == []
    assert "shopify_event_missing_recipient" in caplog.text


@pytest.mark.asyncio
async def test_invalid_phone_is_skipped() -> None:
    pipeline = _Pipeline()

    outcome = await pipeline.use_case.execute(
        CheckoutUpdated(payload=_checkout_payload(customer={"phone": "12345"}))
    )

    assert outcome is ProcessingOutcome.INVALID_PHONE
    assert pipeline.sender.payloads == []
    assert pipeline.log.get_entries() == []


@pytest.mark.asyncio
async def test_malformed_payload_is_absorbed() -> None:
    pipeline = _Pipeline()

    outcome = await pipeline.use_case.execute(CheckoutUpdated(payload={"completed_at": None}))

    assert outcome is ProcessingOutcome.MALFORMED_PAYLOAD
    assert pipeline.log.get_entries() == []


@pytest.mark.asyncio
async def test_failed_send_is_logged_and_blocks_redelivery() -> None:
    pipeline = _Pipeline(FakeMessageSender(SendResult(success=False, error_detail="boom")))
    webhook = CheckoutUpdated(payload=_checkout_payload())

    first = await pipeline.use_case.execute(webhook)
    second = await pipeline.use_case.execute(webhook)

    assert first is ProcessingOutcome.FAILED
    assert second is ProcessingOutcome.ALREADY_PROCESSED
    [entry] = pipeline.log.get_entries()
    assert entry.status is NotificationStatus.FAILED
    assert entry.error_detail == "boom"


@pytest.mark.asyncio
async def test_concurrent_redeliveries_send_once() -> None:
    pipeline = _Pipeline()
    webhook = CheckoutUpdated(payload=_checkout_payload())

    outcomes = await asyncio.gather(*(pipeline.use_case.execute(webhook) for _ in range(5)))

    assert outcomes.count(ProcessingOutcome.SENT) == 1
    assert len(pipeline.sender.payloads) == 1
    assert len(pipeline.log.get_entries()) == 1


@pytest.mark.asyncio
async def test_infrastructure_errors_propagate() -> None:
    class _BrokenLog(MemoryNotificationLog):
        async def find_by_event_id(self, event_id: str) -> NotificationLogEntry | None:
            raise NotificationLogUnavailableError("down")

    pipeline = _Pipeline()
    pipeline.use_case._gate = EligibilityGate(_BrokenLog())

    with pytest.raises(NotificationLogUnavailableError):
        await pipeline.use_case.execute(CheckoutUpdated(payload=_checkout_payload()))
