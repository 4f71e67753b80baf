"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente por sistemas como BigQuery, CloudWatch Insights, etc.

Métricas suportadas:
- Latência: histogram de tempos de execução por componente/operação
- Resultado: counter de invocações por operação e desfecho

Uso:
    from app.observability.metrics import record_latency, record_operation_outcome

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("dispatcher", "ticket_search", latency_ms, correlation_id)
    record_operation_outcome("ticket_search", "success", correlation_id)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

VALID_OUTCOMES = frozenset({"success", "error", "unknown_operation", "invalid_arguments"})


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "dispatcher", "iiq_client")
        operation: Nome da operação (ex: "ticket_search")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_operation_outcome(
    operation: str,
    outcome: str,
    correlation_id: str | None = None,
) -> None:
    """Registra o desfecho de uma invocação.

    Args:
        operation: Nome da operação invocada
        outcome: Um de VALID_OUTCOMES (outros valores viram "error")
        correlation_id: ID de correlação para rastreamento
    """
    if outcome not in VALID_OUTCOMES:
        outcome = "error"
    logger.info(
        "metric_operation_outcome",
        extra={
            "metric_type": "counter",
            "operation": operation,
            "outcome": outcome,
            "correlation_id": correlation_id,
        },
    )
