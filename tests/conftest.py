"""Configuração do pytest para o relay Shopify → WhatsApp."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ e a raiz do repo ao PYTHONPATH (imports absolutos e tests.fakes)
root_path = Path(__file__).parent.parent
for path in (root_path / "src", root_path):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def clear_settings_cache():
    """Limpa caches de settings/singletons antes e depois do teste."""
    from app import bootstrap
    from config import settings

    getters = [
        settings.get_base_settings,
        settings.get_dedupe_settings,
        settings.get_firestore_settings,
        settings.get_notification_log_settings,
        settings.get_shopify_settings,
        settings.get_whatsapp_settings,
        bootstrap.get_notification_log,
        bootstrap.get_dedupe_store,
        bootstrap.get_process_shopify_event,
    ]
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()
