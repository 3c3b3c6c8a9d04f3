"""Endpoints de health check para Cloud Run."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import (
    get_base_settings,
    get_dedupe_settings,
    get_notification_log_settings,
)

logger = logging.getLogger(__name__)

router = APIRouter()

HEALTH_COLLECTION = "_health"
HEALTH_DOCUMENT = "check"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed", "skipped"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: settings válidas e backends configurados acessíveis.

    Redis só é checado com DEDUPE_BACKEND=redis; Firestore só com
    NOTIFICATION_LOG_BACKEND=firestore.
    """
    config_check = _check_config()

    redis_coro = (
        _check_redis(getattr(request.app.state, "redis_client", None))
        if get_dedupe_settings().backend == "redis"
        else _skipped()
    )
    firestore_coro = (
        _check_firestore(getattr(request.app.state, "firestore_client", None))
        if get_notification_log_settings().backend == "firestore"
        else _skipped()
    )
    redis_check, firestore_check = await asyncio.gather(redis_coro, firestore_coro)

    ready = (
        config_check.status == "ok"
        and redis_check.status in {"ok", "skipped"}
        and firestore_check.status in {"ok", "degraded", "skipped"}
    )

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "config": config_check.as_dict(),
            "redis": redis_check.as_dict(),
            "firestore": firestore_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _skipped() -> DependencyCheck:
    return DependencyCheck(status="skipped")


def _check_config() -> DependencyCheck:
    from app.bootstrap import collect_settings_errors

    errors = collect_settings_errors()
    if errors:
        logger.warning("readiness_config_invalid", extra={"error_count": len(errors)})
        return DependencyCheck(status="failed", error=f"{len(errors)} setting(s) invalid")
    return DependencyCheck(status="ok")


async def _check_redis(redis_client: Any | None) -> DependencyCheck:
    if redis_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(redis_client.ping(), timeout=2.0)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))


async def _check_firestore(firestore_client: Any | None) -> DependencyCheck:
    if firestore_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        exists = await asyncio.wait_for(
            asyncio.to_thread(_read_firestore_health_doc, firestore_client),
            timeout=3.0,
        )
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    status = "ok" if exists else "degraded"
    return DependencyCheck(status=status, latency_ms=round(latency_ms, 2))


def _read_firestore_health_doc(firestore_client: Any) -> bool:
    doc = firestore_client.collection(HEALTH_COLLECTION).document(HEALTH_DOCUMENT).get()
    return bool(getattr(doc, "exists", False))
