"""Bootstrap da aplicação: composition root.

Configura logging, valida settings e constrói explicitamente a sessão
IncidentIQ, o registry e o dispatcher. A sessão é criada uma vez e
passada por referência; nada aqui é singleton implícito de módulo.

Uso:
    from app.bootstrap import create_dispatcher, initialize_app

    initialize_app()
    dispatcher = create_dispatcher()
    envelope = await dispatcher.dispatch("connection_test", {})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability import get_correlation_id, get_current_operation
from app.operations import Dispatcher, build_registry
from config.logging import configure_logging
from config.settings import get_base_settings, get_incidentiq_settings

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol
    from config.settings import IncidentIQSettings

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging JSON com correlation_id, operação e API key mascarada.

    Deve ser chamada uma vez no início do serviço.
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
        operation_getter=get_current_operation,
        secrets=(get_incidentiq_settings().api_key,),
    )


def initialize_test_app() -> None:
    """Inicializa logging em nível DEBUG para testes."""
    configure_logging(
        level="DEBUG",
        service_name=f"{get_base_settings().service_name}_test",
        correlation_id_getter=get_correlation_id,
        operation_getter=get_current_operation,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"incidentiq: {error}" for error in get_incidentiq_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.is_strict:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


def create_client(settings: IncidentIQSettings | None = None) -> IncidentIQClientProtocol:
    """Sessão IncidentIQ a partir das settings (ConfigurationError sem API key)."""
    from api.connectors.incidentiq import create_incidentiq_client

    return create_incidentiq_client(settings or get_incidentiq_settings())


def create_dispatcher(
    client: IncidentIQClientProtocol | None = None,
    settings: IncidentIQSettings | None = None,
) -> Dispatcher:
    """Monta registry + dispatcher sobre a sessão informada (ou uma nova).

    Args:
        client: Sessão já construída (testes injetam fakes aqui)
        settings: Settings IncidentIQ; default lido do ambiente

    Returns:
        Dispatcher pronto para uso
    """
    settings = settings or get_incidentiq_settings()
    if client is None:
        client = create_client(settings)
    return Dispatcher(
        build_registry(),
        client,
        strict_arguments=settings.strict_arguments,
    )


__all__ = [
    "create_client",
    "create_dispatcher",
    "initialize_app",
    "initialize_test_app",
    "validate_runtime_settings",
]
