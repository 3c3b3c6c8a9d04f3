"""Protocolos e contratos do core da aplicação."""

from .dedupe import AsyncDedupeProtocol
from .message_sender import MessageSenderProtocol
from .normalizer import ShopifyEventNormalizerProtocol
from .notification_log import NotificationLogProtocol
from .payload_builder import TemplatePayloadBuilderProtocol

__all__ = [
    "AsyncDedupeProtocol",
    "MessageSenderProtocol",
    "NotificationLogProtocol",
    "ShopifyEventNormalizerProtocol",
    "TemplatePayloadBuilderProtocol",
]
