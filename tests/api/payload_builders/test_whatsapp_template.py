"""Testes do builder de template WhatsApp."""

from __future__ import annotations

from decimal import Decimal

import pytest

from api.payload_builders.whatsapp import build_template_payload, format_amount
from app.domain.shopify_event import EventKind, ShopifyEvent
from config.settings import TemplateSettings

PHONE = "+919876543210"
CHECKOUT_TEMPLATE = TemplateSettings(
    name="abandoned_cart", language="en_US", image_url="https://cdn.test/banner.png"
)
ORDER_TEMPLATE = TemplateSettings(
    name="order_confirmation", language="en", image_url="https://cdn.test/banner.png"
)


def _event(kind: EventKind, **overrides: object) -> ShopifyEvent:
    fields: dict[str, object] = {
        "event_id": "chk_1",
        "kind": kind,
        "raw_recipient_phone": "9876543210",
        "greeting_name": "Asha",
    }
    fields.update(overrides)
    return ShopifyEvent(**fields)  # type: ignore[arg-type]


def _component(payload: dict, component_type: str) -> dict:
    components = payload["template"]["components"]
    return next(c for c in components if c["type"] == component_type)


def test_checkout_payload_shape() -> None:
    payload = build_template_payload(
        _event(EventKind.CHECKOUT_UPDATED), PHONE, CHECKOUT_TEMPLATE, discount_code="SAVE10"
    )

    assert payload["messaging_product"] == "whatsapp"
    assert payload["to"] == PHONE
    assert payload["type"] == "template"
    assert payload["template"]["name"] == "abandoned_cart"
    assert payload["template"]["language"] == {"code": "en_US"}

    header = _component(payload, "header")
    assert header["parameters"] == [
        {"type": "image", "image": {"link": "https://cdn.test/banner.png"}}
    ]
    body = _component(payload, "body")
    assert [p["text"] for p in body["parameters"]] == ["Asha", "SAVE10"]

    button = _component(payload, "button")
    assert button["sub_type"] == "COPY_CODE"
    assert button["index"] == 0
    assert button["parameters"] == [{"type": "coupon_code", "coupon_code": "SAVE10"}]


def test_order_payload_shape() -> None:
    event = _event(EventKind.ORDER_CREATED, event_id="1001", total_amount=Decimal("1299.00"))
    payload = build_template_payload(event, PHONE, ORDER_TEMPLATE)

    assert payload["template"]["language"] == {"code": "en"}
    body = _component(payload, "body")
    assert [p["text"] for p in body["parameters"]] == ["Asha", "1001", "1299"]
    assert all(c["type"] != "button" for c in payload["template"]["components"])


def test_order_without_total_renders_zero() -> None:
    payload = build_template_payload(_event(EventKind.ORDER_CREATED), PHONE, ORDER_TEMPLATE)
    body = _component(payload, "body")
    assert body["parameters"][2]["text"] == "0"


def test_header_omitted_without_image() -> None:
    template = TemplateSettings(name="order_confirmation", language="en", image_url="")
    payload = build_template_payload(_event(EventKind.ORDER_CREATED), PHONE, template)
    assert [c["type"] for c in payload["template"]["components"]] == ["body"]


def test_missing_template_name_raises() -> None:
    with pytest.raises(ValueError, match="template"):
        build_template_payload(_event(EventKind.CHECKOUT_UPDATED), PHONE, TemplateSettings())


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (None, "0"),
        (Decimal("1299.00"), "1299"),
        (Decimal("49.50"), "49.5"),
        (Decimal("0.00"), "0"),
        (Decimal("1E+3"), "1000"),
    ],
)
def test_format_amount(amount: Decimal | None, expected: str) -> None:
    assert format_amount(amount) == expected
