"""Testes do NotificationDispatcher."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import httpx
import pytest

from app.domain.notification import NotificationStatus, SendResult
from app.domain.shopify_event import EventKind, ShopifyEvent
from app.infra.stores import MemoryNotificationLog
from app.use_cases.shopify import NotificationDispatcher
from tests.fakes.fake_message_sender import FakeMessageSender, FixedClock

PHONE = "+919876543210"
NOW = datetime(2026, 10, 17, 12, 0, tzinfo=UTC)
EVENT = ShopifyEvent(
    event_id="chk_1",
    kind=EventKind.CHECKOUT_UPDATED,
    raw_recipient_phone="9876543210",
    display_name="Asha Rao",
    greeting_name="Asha",
)


class _Builder:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error

    def build(self, event: ShopifyEvent, recipient_phone: str) -> dict[str, Any]:
        if self.error is not None:
            raise self.error
        return {"to": recipient_phone, "event": event.event_id}


def _dispatcher(
    sender: FakeMessageSender, builder: _Builder | None = None
) -> tuple[NotificationDispatcher, MemoryNotificationLog]:
    log = MemoryNotificationLog()
    dispatcher = NotificationDispatcher(
        builder=builder or _Builder(),
        sender=sender,
        notification_log=log,
        clock=FixedClock(NOW),
    )
    return dispatcher, log


@pytest.mark.asyncio
async def test_successful_send_records_sent_entry() -> None:
    sender = FakeMessageSender()
    dispatcher, log = _dispatcher(sender)

    entry = await dispatcher.dispatch(EVENT, PHONE)

    assert sender.payloads == [{"to": PHONE, "event": "chk_1"}]
    assert log.get_entries() == [entry]
    assert entry.status is NotificationStatus.SENT
    assert entry.recipient_phone == PHONE
    assert entry.timestamp == NOW
    assert entry.provider_message_id == "wamid.TEST"
    assert entry.provider_status == "accepted"
    assert entry.full_name == "Asha Rao"
    assert entry.event_kind == "checkout_updated"
    assert entry.error_detail is None


@pytest.mark.asyncio
async def test_failed_send_records_failed_entry_with_detail() -> None:
    sender = FakeMessageSender(SendResult(success=False, error_detail="OAuthException (190): expired"))
    dispatcher, log = _dispatcher(sender)

    entry = await dispatcher.dispatch(EVENT, PHONE)

    assert len(log.get_entries()) == 1
    assert entry.status is NotificationStatus.FAILED
    assert entry.error_detail == "OAuthException (190): expired"
    assert entry.provider_message_id is None


@pytest.mark.asyncio
async def test_build_error_records_failed_entry_without_sending() -> None:
    sender = FakeMessageSender()
    dispatcher, log = _dispatcher(sender, _Builder(ValueError("template não configurado")))

    entry = await dispatcher.dispatch(EVENT, PHONE)

    assert sender.payloads == []
    assert log.get_entries() == [entry]
    assert entry.status is NotificationStatus.FAILED
    assert "template" in (entry.error_detail or "")


@pytest.mark.asyncio
async def test_unexpected_sender_error_records_failed_entry(
    caplog: pytest.LogCaptureFixture,
) -> None:
    sender = FakeMessageSender(error=httpx.InvalidURL("Invalid URL 'graph'"))
    dispatcher, log = _dispatcher(sender)

    with caplog.at_level("ERROR"):
        entry = await dispatcher.dispatch(EVENT, PHONE)

    assert len(sender.payloads) == 1
    assert log.get_entries() == [entry]
    assert entry.status is NotificationStatus.FAILED
    assert entry.error_detail == "InvalidURL: Invalid URL 'graph'"
    assert "whatsapp_sender_unexpected_error" in caplog.text
