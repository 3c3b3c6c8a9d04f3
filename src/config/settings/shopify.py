"""Settings do canal Shopify.

Segredo de assinatura dos webhooks, região padrão para parsing de
telefone e templates WhatsApp por tipo de evento.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

DEFAULT_PHONE_REGION = "IN"
DEFAULT_MAX_CONCURRENT_TASKS = 100


@dataclass(frozen=True)
class TemplateSettings:
    """Template WhatsApp aprovado para um tipo de evento.

    Attributes:
        name: Nome do template no WhatsApp Manager
        language: Código de idioma do template (ex: en_US)
        image_url: Link da imagem do header
    """

    name: str = ""
    language: str = "en_US"
    image_url: str = ""


@dataclass(frozen=True)
class ShopifySettings:
    """Configurações dos webhooks Shopify.

    Attributes:
        webhook_secret: Secret compartilhado para HMAC dos webhooks
        default_region: Região assumida para telefones sem código do país
        webhook_processing_mode: async (task em background) ou inline
        max_concurrent_tasks: Limite de pipelines rodando ao mesmo tempo (modo async)
        discount_code: Cupom enviado no lembrete de checkout abandonado
        checkout_template: Template de checkout abandonado
        order_template: Template de confirmação de pedido
    """

    webhook_secret: str = ""
    default_region: str = DEFAULT_PHONE_REGION
    webhook_processing_mode: str = "async"
    max_concurrent_tasks: int = DEFAULT_MAX_CONCURRENT_TASKS
    discount_code: str = ""
    checkout_template: TemplateSettings = field(default_factory=TemplateSettings)
    order_template: TemplateSettings = field(
        default_factory=lambda: TemplateSettings(language="en")
    )

    def validate(self) -> list[str]:
        """Valida configurações mínimas do canal.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.webhook_secret:
            errors.append("SHOPIFY_SECRET_KEY não configurado")

        if len(self.default_region) != 2 or not self.default_region.isalpha():
            errors.append(f"PHONE_DEFAULT_REGION inválida: {self.default_region}")

        if self.webhook_processing_mode not in ("async", "inline"):
            errors.append("WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'")

        if self.max_concurrent_tasks <= 0:
            errors.append("WEBHOOK_MAX_CONCURRENT_TASKS deve ser > 0")

        if not self.checkout_template.name:
            errors.append("ABANDONED_CHECKOUT_TEMPLATE não configurado")

        if not self.order_template.name:
            errors.append("ORDER_CREATE_TEMPLATE não configurado")

        if not self.discount_code:
            errors.append("DISCOUNT_CODE não configurado")

        return errors


def _load_shopify_from_env() -> ShopifySettings:
    """Carrega ShopifySettings de variáveis de ambiente."""
    image_url = os.getenv("IMAGE_URL", "")
    return ShopifySettings(
        webhook_secret=os.getenv("SHOPIFY_SECRET_KEY", ""),
        default_region=os.getenv("PHONE_DEFAULT_REGION", DEFAULT_PHONE_REGION).upper(),
        webhook_processing_mode=os.getenv("WEBHOOK_PROCESSING_MODE", "async").lower(),
        max_concurrent_tasks=int(
            os.getenv("WEBHOOK_MAX_CONCURRENT_TASKS", str(DEFAULT_MAX_CONCURRENT_TASKS))
        ),
        discount_code=os.getenv("DISCOUNT_CODE", ""),
        checkout_template=TemplateSettings(
            name=os.getenv("ABANDONED_CHECKOUT_TEMPLATE", ""),
            language=os.getenv("ABANDONED_CHECKOUT_LANGUAGE", "en_US"),
            image_url=os.getenv("ABANDONED_CHECKOUT_IMAGE_URL", image_url),
        ),
        order_template=TemplateSettings(
            name=os.getenv("ORDER_CREATE_TEMPLATE", ""),
            language=os.getenv("ORDER_CREATE_LANGUAGE", "en"),
            image_url=os.getenv("ORDER_CREATE_IMAGE_URL", image_url),
        ),
    )


@lru_cache(maxsize=1)
def get_shopify_settings() -> ShopifySettings:
    """Retorna instância cacheada de ShopifySettings."""
    return _load_shopify_from_env()
