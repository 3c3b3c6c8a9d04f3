"""Protocolo do claim atômico de eventos.

Interface leve (ABC) dependida por Application.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AsyncDedupeProtocol(ABC):
    """Contrato mínimo assíncrono para reserva de chaves.

    Método canônico:
    - seen(key: str, ttl: int) -> bool
      Retorna True se a chave já foi reservada (duplicado). Se não, reserva-a
      com TTL e retorna False. Verificar e reservar é uma única operação
      atômica (insert-if-absent).
    """

    @abstractmethod
    async def seen(self, key: str, ttl: int) -> bool:
        """Verifica e reserva a chave de forma atômica.

        Args:
            key: Chave opaca (ex.: id do evento Shopify). Nunca PII.
            ttl: TTL em segundos

        Returns:
            True se já foi vista (duplicado); False se foi reservada agora.
        """
