"""Configuração do logging JSON do gateway.

Um único handler no root: formatter JSON, contexto da invocação
(correlation_id + operation) e mascaramento de credenciais. Chamada
uma vez pelo bootstrap.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CredentialRedactionFilter, InvocationContextFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "iiq-gateway"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    operation_getter: Callable[[], str | None] | None = None,
    secrets: Iterable[str] = (),
) -> None:
    """Substitui os handlers do root pelo handler JSON do gateway.

    Args:
        level: DEBUG, INFO, WARNING, ERROR ou CRITICAL (case-insensitive)
        service_name: Valor do campo `service`
        correlation_id_getter: Lê o correlation_id da invocação corrente
        operation_getter: Lê o nome da operação em execução
        secrets: Valores literais a mascarar (ex: a API key do distrito)

    Raises:
        ValueError: Se o nível de log for inválido
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CredentialRedactionFilter(secrets))
    handler.addFilter(
        InvocationContextFilter(service_name, correlation_id_getter, operation_getter)
    )

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    *,
    path: str | None = None,
) -> None:
    """Evento `iiq_fallback_used`: rota alternativa do upstream acionada.

    Ex: prédios filtrados de /locations/all quando o endpoint dedicado
    volta vazio.
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component}
    if reason:
        extra["reason"] = reason
    if path:
        extra["path"] = path
    logger.info("iiq_fallback_used", extra=extra)
