"""Testes do composition root (validação de settings e factories)."""

from __future__ import annotations

import pytest

from app import bootstrap
from app.bootstrap import dependencies
from app.infra.stores import MemoryDedupeStore, MemoryNotificationLog
from app.use_cases.shopify import ProcessShopifyEventUseCase

VALID_ENV = {
    "ENVIRONMENT": "production",
    "SHOPIFY_SECRET_KEY": "secret",
    "WHATSAPP_ACCESS_TOKEN": "tok",
    "WHATSAPP_PHONE_NUMBER_ID": "123",
    "ABANDONED_CHECKOUT_TEMPLATE": "abandoned_cart",
    "ORDER_CREATE_TEMPLATE": "order_confirmation",
    "DISCOUNT_CODE": "SAVE10",
    "IMAGE_URL": "https://cdn.test/a.png",
    "DEDUPE_BACKEND": "redis",
    "REDIS_URL": "redis://localhost:6379/0",
    "NOTIFICATION_LOG_BACKEND": "firestore",
    "GCP_PROJECT": "relay-prod",
}


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch, clear_settings_cache):
    for key in VALID_ENV:
        monkeypatch.delenv(key, raising=False)

    def _apply(values: dict[str, str]) -> None:
        for key, value in values.items():
            monkeypatch.setenv(key, value)

    return _apply


def test_valid_production_settings_pass(env) -> None:
    env(VALID_ENV)
    assert bootstrap.collect_settings_errors() == []
    bootstrap.validate_runtime_settings()


def test_missing_secret_fails_fast_in_production(env) -> None:
    env({**VALID_ENV, "SHOPIFY_SECRET_KEY": ""})

    errors = bootstrap.collect_settings_errors()
    assert any(error.startswith("shopify: SHOPIFY_SECRET_KEY") for error in errors)
    with pytest.raises(RuntimeError, match="production"):
        bootstrap.validate_runtime_settings()


def test_development_only_warns(env, caplog: pytest.LogCaptureFixture) -> None:
    env({"ENVIRONMENT": "development"})

    with caplog.at_level("WARNING"):
        bootstrap.validate_runtime_settings()

    assert "settings_validation_failed" in caplog.text


def test_memory_backends_by_default(env) -> None:
    env({"ENVIRONMENT": "development"})

    assert isinstance(dependencies.create_notification_log(), MemoryNotificationLog)
    assert isinstance(dependencies.create_dedupe_store(), MemoryDedupeStore)


def test_pipeline_is_wired_over_singletons(env) -> None:
    env({"ENVIRONMENT": "development", "WHATSAPP_PHONE_NUMBER_ID": "123"})

    use_case = bootstrap.get_process_shopify_event()

    assert isinstance(use_case, ProcessShopifyEventUseCase)
    assert bootstrap.get_process_shopify_event() is use_case
    assert bootstrap.get_notification_log() is bootstrap.get_notification_log()


def test_initialize_app_configures_logging_from_env(
    env, monkeypatch: pytest.MonkeyPatch
) -> None:
    env({"ENVIRONMENT": "development", "SERVICE_NAME": "relay-test"})
    monkeypatch.setenv("LOG_LEVEL", "debug")
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(bootstrap, "configure_logging", lambda **kwargs: calls.append(kwargs))

    bootstrap.initialize_app()

    assert len(calls) == 1
    assert calls[0]["level"] == "DEBUG"
    assert calls[0]["service_name"] == "relay-test"
    assert calls[0]["correlation_id_getter"] is bootstrap.get_correlation_id
