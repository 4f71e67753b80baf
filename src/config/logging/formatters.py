"""Formatter JSON das linhas de log do gateway.

Cada linha carrega, além dos campos padrão do logging, o contexto da
invocação: correlation_id e a operação que disparou a chamada upstream.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem de saída dos campos fixos de cada linha
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "service",
    "correlation_id",
    "operation",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Formatter JSON com os campos de contexto da invocação.

    Exemplo de linha emitida pelo conector durante ticket_get:
        {"asctime": "...", "level": "WARNING", "logger": "api.connectors.incidentiq.iiq_logging",
         "message": "iiq_http_error", "service": "iiq-gateway", "correlation_id": "abc-123",
         "operation": "ticket_get", "status_code": 404, "path": "/tickets/t-1"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
    )
