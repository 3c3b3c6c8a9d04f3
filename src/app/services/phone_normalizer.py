"""Normalização de telefone para E.164.

O E.164 é a chave de junção do log de notificações: o cooldown por
destinatário só funciona se o mesmo número sempre chegar na mesma forma.
"""

from __future__ import annotations

import phonenumbers

from app.domain.errors import InvalidPhoneError


def normalize_phone(raw: str | None, default_region: str) -> str:
    """Converte telefone bruto em E.164.

    Args:
        raw: Telefone como veio do payload (com ou sem código do país)
        default_region: Região ISO-3166 assumida quando não há código do país

    Returns:
        Telefone no formato E.164 (ex: +919876543210)

    Raises:
        InvalidPhoneError: Se vazio, ilegível ou inválido para a região inferida
    """
    candidate = (raw or "").strip()
    if not candidate:
        raise InvalidPhoneError("empty_phone")

    try:
        parsed = phonenumbers.parse(candidate, default_region.upper())
    except phonenumbers.NumberParseException as exc:
        raise InvalidPhoneError("unparseable_phone") from exc

    if not phonenumbers.is_valid_number(parsed):
        raise InvalidPhoneError("invalid_phone")

    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
