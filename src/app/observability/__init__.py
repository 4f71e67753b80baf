"""Observabilidade - correlation_id e métricas via log estruturado.

Re-exporta funções de correlation_id e métricas para uso em toda a aplicação.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_operation_outcome
"""

from app.observability.correlation import (
    ensure_correlation_id,
    generate_correlation_id,
    get_correlation_id,
    get_current_operation,
    reset_correlation_id,
    reset_current_operation,
    set_correlation_id,
    set_current_operation,
)
from app.observability.metrics import record_latency, record_operation_outcome

__all__ = [
    "ensure_correlation_id",
    "generate_correlation_id",
    "get_correlation_id",
    "get_current_operation",
    "record_latency",
    "record_operation_outcome",
    "reset_correlation_id",
    "reset_current_operation",
    "set_correlation_id",
    "set_current_operation",
]
