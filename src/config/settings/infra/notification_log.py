"""Settings do log de notificações e da janela de cooldown."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

NotificationLogBackend = Literal["memory", "firestore"]


@dataclass(frozen=True)
class NotificationLogSettings:
    """Configurações do log de notificações.

    Attributes:
        backend: Backend do log (memory|firestore)
        cooldown_hours: Janela em que um destinatário recebe no máximo uma mensagem
    """

    backend: NotificationLogBackend = "memory"
    cooldown_hours: int = 24

    @property
    def cooldown(self) -> timedelta:
        return timedelta(hours=self.cooldown_hours)

    def validate(self, base: BaseSettings) -> list[str]:
        errors: list[str] = []

        if self.backend not in {"memory", "firestore"}:
            errors.append(f"NOTIFICATION_LOG_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append(
                "NOTIFICATION_LOG_BACKEND=memory proibido em staging/production. "
                "Use Firestore."
            )

        if self.cooldown_hours <= 0:
            errors.append("NOTIFICATION_COOLDOWN_HOURS deve ser > 0")

        return errors


def _load_notification_log_from_env() -> NotificationLogSettings:
    """Carrega NotificationLogSettings de variáveis de ambiente."""
    backend_str = os.getenv("NOTIFICATION_LOG_BACKEND", "memory").lower()
    backend: NotificationLogBackend = "firestore" if backend_str == "firestore" else "memory"
    return NotificationLogSettings(
        backend=backend,
        cooldown_hours=int(os.getenv("NOTIFICATION_COOLDOWN_HOURS", "24")),
    )


@lru_cache(maxsize=1)
def get_notification_log_settings() -> NotificationLogSettings:
    """Retorna instância cacheada de NotificationLogSettings."""
    return _load_notification_log_from_env()
