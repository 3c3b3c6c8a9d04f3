"""Exceções de infraestrutura compartilhadas entre camadas."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class NotificationLogUnavailableError(InfrastructureError):
    """Falha ao ler ou gravar no log de notificações (Firestore)."""
