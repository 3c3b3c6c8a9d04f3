"""Serviços de aplicação.

Unidades reutilizáveis de decisão (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.eligibility_gate import DEFAULT_COOLDOWN, EligibilityGate
from app.services.phone_normalizer import normalize_phone

__all__ = [
    "DEFAULT_COOLDOWN",
    "EligibilityGate",
    "normalize_phone",
]
