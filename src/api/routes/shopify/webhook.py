"""Endpoints de webhook da Shopify.

Endpoints:
- POST /webhooks/checkouts/update: checkout atualizado (lembrete de abandono)
- POST /webhooks/orders/create: pedido criado (confirmação)

Fluxo:
1. Valida HMAC (X-Shopify-Hmac-Sha256) sobre o body bruto
2. Responde 200 imediatamente; o pipeline roda em background

Segurança:
- Assinatura ausente, secret ausente ou divergente → 403, body não é lido
- Qualquer outro problema é absorvido com 200 para evitar retry da Shopify
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from api.connectors.shopify.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from api.routes.shopify.webhook_runtime import dispatch_processing
from app.domain.shopify_event import EventKind, webhook_for_kind
from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from config.settings import get_shopify_settings

logger = logging.getLogger(__name__)

router = APIRouter()


async def receive_shopify_webhook(request: Request, kind: EventKind) -> Response | dict[str, Any]:
    """Valida e encaminha um webhook Shopify do tipo informado."""
    headers = dict(request.headers)
    token = set_correlation_id(correlation_id_from_headers(headers))

    try:
        settings = get_shopify_settings()
        raw_body = await request.body()

        try:
            payload, _signature = parse_webhook_request(
                raw_body=raw_body,
                headers=headers,
                secret=settings.webhook_secret or None,
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "shopify_webhook_signature_invalid",
                extra={
                    "channel": "shopify",
                    "event_kind": str(kind),
                    "error": str(exc),
                },
            )
            return Response(
                content="Forbidden",
                media_type="text/plain",
                status_code=status.HTTP_403_FORBIDDEN,
            )
        except InvalidJsonError as exc:
            logger.warning(
                "shopify_webhook_json_invalid",
                extra={
                    "channel": "shopify",
                    "event_kind": str(kind),
                    "error": str(exc),
                    "payload_size": len(raw_body),
                },
            )
            return {"status": "received", "correlation_id": get_correlation_id()}

        logger.info(
            "shopify_webhook_received",
            extra={
                "channel": "shopify",
                "event_kind": str(kind),
                "payload_size": len(raw_body),
            },
        )

        await dispatch_processing(
            webhook=webhook_for_kind(kind, payload),
            correlation_id=get_correlation_id(),
            processing_mode=settings.webhook_processing_mode,
        )
        return {"status": "received", "correlation_id": get_correlation_id()}

    finally:
        reset_correlation_id(token)


@router.post("/checkouts/update", response_model=None)
async def checkouts_update(request: Request) -> Response | dict[str, Any]:
    """Webhook ``checkouts/update``."""
    return await receive_shopify_webhook(request, EventKind.CHECKOUT_UPDATED)


@router.post("/orders/create", response_model=None)
async def orders_create(request: Request) -> Response | dict[str, Any]:
    """Webhook ``orders/create``."""
    return await receive_shopify_webhook(request, EventKind.ORDER_CREATED)
