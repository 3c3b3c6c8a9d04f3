"""Protocolo de envio de mensagens ao provedor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.notification import SendResult


class MessageSenderProtocol(Protocol):
    """Contrato mínimo para enviar um payload de template.

    Falhas de transporte ou do provedor voltam como ``SendResult`` com
    ``success=False``; o método não lança para erros de envio.
    """

    async def send(self, payload: dict[str, Any]) -> SendResult: ...
