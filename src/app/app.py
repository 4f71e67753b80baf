"""Entrypoint da aplicação IncidentIQ gateway.

Expõe a aplicação ASGI (FastAPI) com health/readiness e a superfície
de operações (listagem e invocação).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import create_dispatcher, initialize_app, validate_runtime_settings
from config.settings import get_base_settings
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.operations import Dispatcher

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Ciclo de vida: valida settings e monta o dispatcher no startup.

    Sem API key o serviço sobe (fora de staging/production) com
    dispatcher ausente; as rotas respondem 503 até a configuração.
    """
    service = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service})
    validate_runtime_settings()

    app.state.dispatcher = None
    app.state.iiq_client = None
    try:
        dispatcher: Dispatcher = create_dispatcher()
    except ConfigurationError as exc:
        logger.warning("iiq_client_not_configured", extra={"error": str(exc)})
    else:
        app.state.dispatcher = dispatcher
        app.state.iiq_client = dispatcher.client

    yield

    logger.info("app_shutting_down", extra={"service": service})


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    fastapi_app = FastAPI(
        title="IncidentIQ Gateway",
        description="Operações nomeadas sobre a API IncidentIQ (K-12)",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting IncidentIQ gateway in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
