"""Helpers de logging para a API IncidentIQ (sem credenciais)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.models import ResponseShape

    from .iiq_errors import IIQApiError

logger = logging.getLogger(__name__)


def log_request(method: str, path: str) -> None:
    """Linha de debug por chamada upstream (DEBUG_API)."""
    logger.info("iiq_request", extra={"method": method, "path": path})


def log_iiq_error(error: IIQApiError, method: str, path: str) -> None:
    """Loga erro do upstream sem expor dados sensíveis."""
    logger.warning(
        "iiq_http_error",
        extra={
            "method": method,
            "path": path,
            "status_code": error.status_code,
            "error_code": error.error_code,
            "upstream_message": error.message,
        },
    )


def log_success(method: str, path: str, status_code: int) -> None:
    logger.debug(
        "iiq_request_ok",
        extra={"method": method, "path": path, "status_code": status_code},
    )


def log_shape_mismatch(
    path: str,
    declared: ResponseShape,
    observed: ResponseShape | None,
) -> None:
    """Formato observado difere do declarado (normalização segue normal)."""
    logger.debug(
        "iiq_shape_mismatch",
        extra={
            "path": path,
            "declared_shape": declared.value,
            "observed_shape": observed.value if observed else None,
        },
    )
