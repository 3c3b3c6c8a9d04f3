"""Erros e helpers de parsing para API Meta/WhatsApp."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

# Limite do texto de erro gravado no log de notificações
MAX_ERROR_DETAIL_LENGTH = 500


@dataclass(frozen=True)
class WhatsAppApiError:
    """Erro retornado pela API Meta/WhatsApp."""

    error_type: str
    error_code: int
    error_message: str


def parse_meta_error(response_data: Any) -> WhatsAppApiError | None:
    """Extrai informações de erro do response da Meta.

    Args:
        response_data: JSON do response (qualquer tipo)

    Returns:
        WhatsAppApiError se houver erro, None se sucesso
    """
    if not isinstance(response_data, dict):
        return None
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    error_type = str(error_obj.get("type", "unknown"))
    error_code = error_obj.get("code", 0)
    if not isinstance(error_code, int):
        error_code = 0
    error_message = str(error_obj.get("message", "Erro desconhecido"))

    return WhatsAppApiError(
        error_type=error_type,
        error_code=error_code,
        error_message=error_message,
    )


def describe_error_body(body: Any) -> str:
    """Descrição best-effort de um corpo de erro para auditoria.

    Usa a mensagem do erro Meta quando existir; senão o corpo serializado.
    """
    meta_error = parse_meta_error(body)
    if meta_error is not None:
        text = f"{meta_error.error_type} ({meta_error.error_code}): {meta_error.error_message}"
    elif isinstance(body, (dict, list)):
        text = json.dumps(body, ensure_ascii=False, default=str)
    else:
        text = str(body or "").strip() or "empty_response"
    return text[:MAX_ERROR_DETAIL_LENGTH]
