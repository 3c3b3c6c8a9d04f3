"""Modelos do log de notificações e das decisões de elegibilidade."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class NotificationStatus(StrEnum):
    """Resultado de uma tentativa de envio."""

    SENT = "sent"
    FAILED = "failed"


class IneligibleReason(StrEnum):
    """Motivo de supressão de uma notificação."""

    ALREADY_PROCESSED = "already_processed"
    RATE_LIMITED = "rate_limited"


class ProcessingOutcome(StrEnum):
    """Desfecho do processamento de um webhook Shopify."""

    SENT = "sent"
    FAILED = "failed"
    ALREADY_COMPLETED = "already_completed"
    MISSING_RECIPIENT = "missing_recipient"
    INVALID_PHONE = "invalid_phone"
    MALFORMED_PAYLOAD = "malformed_payload"
    ALREADY_PROCESSED = "already_processed"
    RATE_LIMITED = "rate_limited"


@dataclass(frozen=True)
class NotificationLogEntry:
    """Registro append-only de uma tentativa de envio.

    Nunca é alterado nem removido depois de gravado. ``timestamp`` pode vir
    ausente em documentos antigos do Firestore; o gate trata esse caso
    como "sem envio anterior".
    """

    recipient_phone: str
    event_id: str
    status: NotificationStatus
    timestamp: datetime | None
    event_kind: str = ""
    full_name: str = ""
    provider_message_id: str | None = None
    provider_status: str | None = None
    error_detail: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serializa para documento do store (timestamp nativo)."""
        return {
            "recipient_phone": self.recipient_phone,
            "event_id": self.event_id,
            "status": self.status.value,
            "timestamp": self.timestamp,
            "event_kind": self.event_kind,
            "full_name": self.full_name,
            "provider_message_id": self.provider_message_id,
            "provider_status": self.provider_status,
            "error_detail": self.error_detail,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NotificationLogEntry:
        """Reconstrói entrada a partir de documento do store.

        Raises:
            ValueError: Se ``status`` não for um NotificationStatus conhecido
        """
        return cls(
            recipient_phone=str(data.get("recipient_phone", "")),
            event_id=str(data.get("event_id", "")),
            status=NotificationStatus(data.get("status")),
            timestamp=_coerce_timestamp(data.get("timestamp")),
            event_kind=data.get("event_kind") or "",
            full_name=data.get("full_name") or "",
            provider_message_id=data.get("provider_message_id"),
            provider_status=data.get("provider_status"),
            error_detail=data.get("error_detail"),
        )


def _coerce_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return None


@dataclass(frozen=True)
class EligibilityDecision:
    """Decisão do gate: elegível ou suprimido com motivo."""

    eligible: bool
    reason: IneligibleReason | None = None

    @classmethod
    def allow(cls) -> EligibilityDecision:
        return cls(eligible=True)

    @classmethod
    def deny(cls, reason: IneligibleReason) -> EligibilityDecision:
        return cls(eligible=False, reason=reason)


@dataclass(frozen=True)
class SendResult:
    """Resposta do provedor de mensagens para um envio."""

    success: bool
    message_id: str | None = None
    message_status: str | None = None
    error_detail: str | None = None


__all__ = [
    "EligibilityDecision",
    "IneligibleReason",
    "NotificationLogEntry",
    "NotificationStatus",
    "ProcessingOutcome",
    "SendResult",
]
