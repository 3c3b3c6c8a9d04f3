"""Payload builders por canal — construção de payloads para APIs externas.

Estrutura:
- whatsapp/: templates da WhatsApp Cloud API
"""

__all__: list[str] = []
