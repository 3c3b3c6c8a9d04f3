"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    InfrastructureError,
    NotificationLogUnavailableError,
    RedisConnectionError,
)

__all__ = [
    "InfrastructureError",
    "NotificationLogUnavailableError",
    "RedisConnectionError",
]
