"""Cliente HTTP especializado para WhatsApp/Meta API.

Estende HttpClient genérico com comportamentos específicos de WhatsApp:
- Bearer token no header Authorization
- Tratamento de erros Meta (error.type, error.message)
- Logging estruturado sem PII (tokens, números, etc.)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.whatsapp.meta_errors import describe_error_body, parse_meta_error
from api.connectors.whatsapp.meta_logging import log_meta_error, log_success

if TYPE_CHECKING:
    import httpx

    from config.settings import WhatsAppSettings

logger: logging.Logger = logging.getLogger(__name__)


class WhatsAppHttpClient(HttpClient):
    """Cliente HTTP para Meta/WhatsApp API.

    Qualquer resposta fora de 2xx, ou com objeto ``error``, vira HttpError
    com ``detail`` legível para o log de notificações.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        phone_number_id: str | None = None,
    ) -> None:
        super().__init__(config)
        self.phone_number_id = phone_number_id

    async def send_message(
        self,
        endpoint: str,
        access_token: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Envia mensagem via WhatsApp API.

        Args:
            endpoint: URL do endpoint (ex: .../messages)
            access_token: Bearer token para autenticação
            payload: Payload JSON da mensagem

        Returns:
            Response JSON da Meta

        Raises:
            ValueError: Se access_token está vazio
            HttpError: Se erro HTTP, de transporte ou Meta
        """
        if not access_token or not access_token.strip():
            logger.error("whatsapp_access_token_missing", extra={"endpoint": endpoint})
            raise ValueError("access_token é obrigatório (WHATSAPP_ACCESS_TOKEN)")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        response = await self.post(endpoint, json=payload, headers=headers)
        return self._process_whatsapp_response(response, endpoint)

    def _process_whatsapp_response(
        self,
        response: httpx.Response,
        endpoint: str,
    ) -> dict[str, Any]:
        try:
            response_data: Any = response.json()
        except (json.JSONDecodeError, ValueError):
            response_data = None

        meta_error = parse_meta_error(response_data)
        if meta_error is not None or not response.is_success:
            log_meta_error(meta_error, endpoint, response.status_code)
            body = response_data if response_data is not None else response.text
            raise HttpError(
                "whatsapp_api_error",
                status_code=response.status_code,
                detail=describe_error_body(body),
            )

        if not isinstance(response_data, dict):
            logger.error("whatsapp_invalid_response", extra={"endpoint": endpoint})
            raise HttpError(
                "whatsapp_invalid_response",
                status_code=response.status_code,
                detail=describe_error_body(response.text),
            )

        log_success(endpoint, response.status_code)
        return response_data


def create_whatsapp_http_client(
    settings: WhatsAppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WhatsAppHttpClient:
    """Factory para criar cliente WhatsApp com config padrão."""
    from config.settings import get_whatsapp_settings

    whatsapp = settings or get_whatsapp_settings()
    config = HttpClientConfig(
        timeout_seconds=whatsapp.request_timeout_seconds,
        transport=transport,
    )
    return WhatsAppHttpClient(config=config, phone_number_id=whatsapp.phone_number_id)
