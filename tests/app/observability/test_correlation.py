"""Testes do correlation_id por entrega."""

from __future__ import annotations

import uuid

from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


def test_set_and_reset_correlation_id() -> None:
    token = set_correlation_id("cid-1")
    try:
        assert get_correlation_id() == "cid-1"
    finally:
        reset_correlation_id(token)
    assert get_correlation_id() == ""


def test_header_priority() -> None:
    headers = {"X-Correlation-Id": "cid-1", "X-Shopify-Webhook-Id": "wh-1"}
    assert correlation_id_from_headers(headers) == "cid-1"
    assert correlation_id_from_headers({"x-shopify-webhook-id": "wh-1"}) == "wh-1"


def test_generates_uuid_when_absent_or_oversized() -> None:
    generated = correlation_id_from_headers({"x-correlation-id": "x" * 500})
    assert uuid.UUID(generated)
    assert uuid.UUID(correlation_id_from_headers({}))
