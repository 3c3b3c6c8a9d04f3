"""Redis Dedupe Store — claim atômico de eventos com Redis.

Usa SET NX (set if not exists) para reservar o id do evento Shopify numa
única operação, fechando a janela de corrida entre a checagem no log e a
gravação do resultado.

Contrato de Keys:
    As keys devem ser IDs opacos (ex.: id do checkout/pedido).
    NUNCA passar dados sensíveis (PII, telefones, emails) como key.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.dedupe import AsyncDedupeProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# Prefixo para namespace de dedupe
DEDUPE_PREFIX = "dedupe:"


class RedisDedupeStore(AsyncDedupeProtocol):
    """Store de claim usando Redis assíncrono.

    Args:
        async_redis_client: Cliente Redis assíncrono
    """

    def __init__(self, async_redis_client: AsyncRedis[bytes]) -> None:
        self._redis = async_redis_client

    def _key(self, key: str) -> str:
        """Gera chave Redis com namespace."""
        return f"{DEDUPE_PREFIX}{key}"

    async def seen(self, key: str, ttl: int) -> bool:
        """Verifica e reserva chave atomicamente.

        Usa SET NX EX:
        - Se chave não existe: cria com TTL e retorna False (novo)
        - Se chave existe: retorna True (duplicado)

        Raises:
            RedisConnectionError: Se o Redis não responder
        """
        try:
            was_set = await self._redis.set(self._key(key), "1", nx=True, ex=ttl)
        except Exception as exc:
            raise RedisConnectionError("Falha ao reservar chave no Redis") from exc

        is_duplicate = not was_set
        if is_duplicate:
            key_masked = key[:8] + "..." if len(key) > 8 else key
            logger.debug("dedupe_duplicate_detected", extra={"key": key_masked})
        return is_duplicate
