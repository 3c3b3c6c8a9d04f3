"""Builders de payload para API Meta/WhatsApp."""

from api.payload_builders.whatsapp.template import build_template_payload, format_amount

__all__ = ["build_template_payload", "format_amount"]
