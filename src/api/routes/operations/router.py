"""Superfície HTTP do dispatcher de operações.

- GET /operations: capacidades {operations: [{name, description, inputSchema}]}
- POST /operations/call: {name, arguments} -> envelope {content, isError}

Sucesso e erro de operação respondem HTTP 200; o erro vai no envelope.
503 só quando o dispatcher não foi montado (sessão sem credencial).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.observability import reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

router = APIRouter()

CORRELATION_HEADER = "x-correlation-id"


class OperationCall(BaseModel):
    """Corpo de POST /operations/call."""

    name: str = Field(..., min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict)


def _not_configured() -> JSONResponse:
    return JSONResponse(
        content={"detail": "IncidentIQ client is not configured"},
        status_code=503,
    )


@router.get("/operations")
async def list_operations(request: Request) -> JSONResponse:
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        return _not_configured()
    return JSONResponse(content={"operations": dispatcher.list_operations()})


@router.post("/operations/call")
async def call_operation(call: OperationCall, request: Request) -> JSONResponse:
    """Invoca uma operação pelo nome exato.

    Propaga X-Correlation-Id quando informado pelo chamador.
    """
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        return _not_configured()

    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    try:
        envelope = await dispatcher.dispatch(call.name, call.arguments)
    finally:
        reset_correlation_id(token)
    return JSONResponse(content=envelope.to_payload())
