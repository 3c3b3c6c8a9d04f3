"""Testes de serialização do NotificationLogEntry."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from app.domain.notification import NotificationLogEntry, NotificationStatus

TS = datetime(2026, 10, 17, 12, 0, tzinfo=UTC)


def test_to_dict_uses_snake_case_and_native_timestamp() -> None:
    entry = NotificationLogEntry(
        recipient_phone="+919876543210",
        event_id="chk_1",
        status=NotificationStatus.SENT,
        timestamp=TS,
        event_kind="checkout_updated",
        full_name="Asha Rao",
        provider_message_id="wamid.1",
        provider_status="accepted",
    )

    data = entry.to_dict()

    assert data["status"] == "sent"
    assert data["timestamp"] is TS
    assert data["provider_message_id"] == "wamid.1"
    assert NotificationLogEntry.from_dict(data) == entry


def test_from_dict_parses_iso_and_naive_timestamps() -> None:
    entry = NotificationLogEntry.from_dict(
        {"recipient_phone": "+1", "event_id": "1", "status": "failed", "timestamp": "2026-10-17T12:00:00"}
    )
    assert entry.timestamp == TS
    assert entry.status is NotificationStatus.FAILED


def test_from_dict_missing_timestamp_is_none() -> None:
    entry = NotificationLogEntry.from_dict({"event_id": "1", "status": "sent"})
    assert entry.timestamp is None


def test_from_dict_rejects_status_outside_enum() -> None:
    with pytest.raises(ValueError):
        NotificationLogEntry.from_dict({"event_id": "1", "status": "accepted", "provider_message_id": "wamid.1"})

    with pytest.raises(ValueError):
        NotificationLogEntry.from_dict({"event_id": "2", "status": None})
