"""API — camada de borda e adapters de Shopify e WhatsApp.

Responsabilidades:
- Receber requests de canais externos (webhooks)
- Validar assinaturas e payloads
- Normalizar dados para modelos internos
- Construir payloads para APIs externas

Subpastas:
- connectors/: adapters HTTP por canal
- normalizers/: conversão de payloads externos → modelos internos
- payload_builders/: construção de payloads para APIs externas
- routes/: endpoints HTTP por canal (webhooks Shopify, health)

NÃO PODE conter: regras de elegibilidade, persistência, orquestração de use cases.
"""
