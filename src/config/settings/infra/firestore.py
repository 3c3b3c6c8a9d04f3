"""Settings do Firestore.

Configurações para Google Cloud Firestore (backend do log de notificações).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_NOTIFICATIONS_COLLECTION = "shopify_notification_log"


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore.

    Attributes:
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        collection_notifications: Collection do log de notificações
    """

    project_id: str = ""
    collection_notifications: str = DEFAULT_NOTIFICATIONS_COLLECTION

    def validate(self, gcp_project: str) -> list[str]:
        """Valida configurações do Firestore.

        Args:
            gcp_project: Projeto GCP padrão para fallback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not (self.project_id or gcp_project):
            errors.append("FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado")

        if not self.collection_notifications:
            errors.append("FIRESTORE_COLLECTION_NOTIFICATIONS não pode ser vazio")

        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    """Carrega FirestoreSettings de variáveis de ambiente."""
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        collection_notifications=os.getenv(
            "FIRESTORE_COLLECTION_NOTIFICATIONS", DEFAULT_NOTIFICATIONS_COLLECTION
        ),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
