import base64
import hashlib
import hmac
import json

import pytest

from api.connectors.shopify.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)


def _sign(payload: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def test_parse_webhook_request_ok() -> None:
    secret = "secret"
    body = json.dumps({"id": "chk_1"}).encode("utf-8")
    headers = {"x-shopify-hmac-sha256": _sign(body, secret)}

    payload, result = parse_webhook_request(body, headers, secret)

    assert payload == {"id": "chk_1"}
    assert result.valid is True


def test_parse_webhook_request_invalid_signature() -> None:
    body = json.dumps({"id": "chk_1"}).encode("utf-8")
    headers = {"x-shopify-hmac-sha256": "ZGVhZGJlZWY="}

    with pytest.raises(InvalidSignatureError, match="signature_mismatch"):
        parse_webhook_request(body, headers, "secret")


def test_parse_webhook_request_checks_signature_before_json() -> None:
    # Body inválido sem assinatura: erro é de assinatura, JSON nunca é lido
    with pytest.raises(InvalidSignatureError, match="missing_signature"):
        parse_webhook_request(b"{invalid}", {}, "secret")


def test_parse_webhook_request_without_secret() -> None:
    body = b"{}"
    with pytest.raises(InvalidSignatureError, match="missing_secret"):
        parse_webhook_request(body, {"x-shopify-hmac-sha256": _sign(body, "x")}, None)


def test_parse_webhook_request_invalid_json() -> None:
    secret = "secret"
    body = b"{invalid}"
    headers = {"x-shopify-hmac-sha256": _sign(body, secret)}

    with pytest.raises(InvalidJsonError, match="invalid_json"):
        parse_webhook_request(body, headers, secret)


def test_parse_webhook_request_rejects_non_object() -> None:
    secret = "secret"
    body = b"[1, 2]"
    headers = {"x-shopify-hmac-sha256": _sign(body, secret)}

    with pytest.raises(InvalidJsonError, match="payload_not_object"):
        parse_webhook_request(body, headers, secret)
