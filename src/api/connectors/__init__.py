"""Connectors por canal — adapters de borda para APIs externas.

Estrutura:
- shopify/: webhooks da loja (assinatura e parsing)
- whatsapp/: WhatsApp Cloud API (envio de templates)
"""

__all__: list[str] = []
