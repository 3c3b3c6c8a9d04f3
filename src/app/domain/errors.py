"""Erros de domínio do pipeline de notificações Shopify.

Todos são falhas esperadas: o webhook já foi respondido quando ocorrem,
então o pipeline apenas registra em log e encerra o processamento.
"""

from __future__ import annotations


class ShopifyEventError(ValueError):
    """Base para eventos que não podem gerar notificação."""


class MalformedPayloadError(ShopifyEventError):
    """Payload ilegível ou com estrutura inesperada."""


class InvalidPhoneError(ShopifyEventError):
    """Telefone não passa na validação estrutural da região."""


__all__ = ["InvalidPhoneError", "MalformedPayloadError", "ShopifyEventError"]
