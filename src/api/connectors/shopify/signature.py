"""Validação de assinatura HMAC-SHA256 dos webhooks Shopify.

A Shopify assina o corpo bruto da requisição e envia o digest em base64
no header ``X-Shopify-Hmac-Sha256``. A verificação precisa usar os bytes
exatos recebidos: re-serializar o JSON parseado altera o conteúdo.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SHOPIFY_SIGNATURE_HEADER = "x-shopify-hmac-sha256"


@dataclass(frozen=True)
class SignatureResult:
    """Resultado da verificação de assinatura."""

    valid: bool
    error: str | None = None


def compute_shopify_signature(raw_body: bytes, secret: str) -> str:
    """Calcula o HMAC-SHA256 em base64 do corpo bruto."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_shopify_signature(
    raw_body: bytes,
    presented_signature: str | None,
    secret: str | None,
) -> bool:
    """Valida assinatura do webhook Shopify.

    Args:
        raw_body: Corpo bruto da requisição
        presented_signature: Valor do header X-Shopify-Hmac-Sha256
        secret: Secret compartilhado do app Shopify

    Returns:
        True se assinatura válida; False se ausente, sem secret ou divergente
    """
    if not presented_signature or not secret:
        return False

    computed = compute_shopify_signature(raw_body, secret)
    return hmac.compare_digest(computed.encode("ascii"), presented_signature.strip().encode("utf-8"))


def verify_request_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Valida assinatura a partir dos headers da requisição.

    Header lido sem diferenciar maiúsculas/minúsculas.
    """
    if not secret:
        return SignatureResult(valid=False, error="missing_secret")

    signature = _get_header(headers, SHOPIFY_SIGNATURE_HEADER)
    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    if not verify_shopify_signature(raw_body, signature, secret):
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None
