"""Modelos pydantic dos payloads de webhook Shopify.

Só os campos usados pelo relay são declarados; o resto é ignorado.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class ShopifyContact(BaseModel):
    """Bloco com nome e telefone (customer, shipping_address, billing_address)."""

    model_config = ConfigDict(extra="ignore")

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class _ShopifyResourcePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    customer: ShopifyContact | None = None
    shipping_address: ShopifyContact | None = None
    billing_address: ShopifyContact | None = None
    total_price: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        # Shopify envia ids numéricos; bool é subclasse de int e não vale
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str) and not value.strip():
            raise ValueError("id vazio")
        return value

    @field_validator("total_price", mode="before")
    @classmethod
    def _coerce_total_price(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class ShopifyCheckoutPayload(_ShopifyResourcePayload):
    """Payload de ``checkouts/update``."""

    completed_at: str | None = None


class ShopifyOrderPayload(_ShopifyResourcePayload):
    """Payload de ``orders/create``."""


__all__ = ["ShopifyCheckoutPayload", "ShopifyContact", "ShopifyOrderPayload"]
