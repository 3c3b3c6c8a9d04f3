"""Builder de payload de template WhatsApp para eventos Shopify."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.shopify_event import EventKind

if TYPE_CHECKING:
    from decimal import Decimal

    from app.domain.shopify_event import ShopifyEvent
    from config.settings import TemplateSettings


def format_amount(amount: Decimal | None) -> str:
    """Renderiza o total sem zeros à direita (``1299.00`` → ``1299``)."""
    if amount is None:
        return "0"
    text = format(amount.normalize(), "f")
    return text if text != "-0" else "0"


def _text(value: str) -> dict[str, str]:
    return {"type": "text", "text": value}


def _body_parameters(event: ShopifyEvent, discount_code: str) -> list[dict[str, str]]:
    if event.kind is EventKind.CHECKOUT_UPDATED:
        return [_text(event.greeting_name), _text(discount_code)]
    return [
        _text(event.greeting_name),
        _text(event.event_id),
        _text(format_amount(event.total_amount)),
    ]


def build_template_payload(
    event: ShopifyEvent,
    recipient_phone: str,
    template: TemplateSettings,
    discount_code: str = "",
) -> dict[str, Any]:
    """Constrói payload completo de template para a Cloud API.

    Checkout abandonado leva saudação, cupom no body e botão COPY_CODE;
    confirmação de pedido leva saudação, id do pedido e total.

    Args:
        event: Evento normalizado
        recipient_phone: Destinatário em E.164
        template: Nome, idioma e imagem do template do tipo de evento
        discount_code: Cupom (apenas checkout)

    Returns:
        Payload pronto para POST em /messages

    Raises:
        ValueError: Template sem nome configurado
    """
    if not template.name:
        raise ValueError(f"template não configurado para {event.kind}")

    components: list[dict[str, Any]] = []
    if template.image_url:
        components.append({
            "type": "header",
            "parameters": [{"type": "image", "image": {"link": template.image_url}}],
        })

    components.append({
        "type": "body",
        "parameters": _body_parameters(event, discount_code),
    })

    if event.kind is EventKind.CHECKOUT_UPDATED:
        components.append({
            "type": "button",
            "sub_type": "COPY_CODE",
            "index": 0,
            "parameters": [{"type": "coupon_code", "coupon_code": discount_code}],
        })

    return {
        "messaging_product": "whatsapp",
        "to": recipient_phone,
        "type": "template",
        "template": {
            "name": template.name,
            "language": {"code": template.language},
            "components": components,
        },
    }


__all__ = ["build_template_payload", "format_amount"]
