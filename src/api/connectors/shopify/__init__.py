"""Conector Shopify - adapter de borda para os webhooks da loja.

Responsabilidades:
- Verificação HMAC do corpo bruto
- Parsing seguro do JSON do webhook
"""

from .signature import (
    SHOPIFY_SIGNATURE_HEADER,
    SignatureResult,
    compute_shopify_signature,
    verify_request_signature,
    verify_shopify_signature,
)

__all__ = [
    "SHOPIFY_SIGNATURE_HEADER",
    "SignatureResult",
    "compute_shopify_signature",
    "verify_request_signature",
    "verify_shopify_signature",
]
