"""Endpoints de health check (liveness/readiness)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "failed"]
    latency_ms: float | None = None
    error: str | None = None
    district: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
            "district": self.district,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: sonda o upstream com as credenciais configuradas."""
    iiq_check = await _check_incidentiq(getattr(request.app.state, "iiq_client", None))
    ready = iiq_check.status == "ok"

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {"incidentiq": iiq_check.as_dict()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_incidentiq(client: Any | None) -> DependencyCheck:
    if client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    status = await client.test_connection()
    latency_ms = round((time.perf_counter() - started_at) * 1000, 2)
    if not status.connected:
        logger.warning("readiness_iiq_check_failed", extra={"error": status.error})
        return DependencyCheck(status="failed", latency_ms=latency_ms, error=status.error)
    return DependencyCheck(status="ok", latency_ms=latency_ms, district=status.district_name)
