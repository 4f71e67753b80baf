"""correlation_id por invocação de operação.

Cada chamada ao Dispatcher roda sob um correlation_id; todas as linhas
de log emitidas durante a chamada (inclusive as do conector HTTP)
carregam o mesmo id, e o nome da operação, via InvocationContextFilter.

Uso:
    token = ensure_correlation_id()
    try:
        ...
    finally:
        if token is not None:
            reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """correlation_id do contexto atual ("" se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id do contexto (gera UUID v4 se None).

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def ensure_correlation_id() -> Token[str] | None:
    """Gera um id só quando o contexto ainda não tem um.

    Returns:
        Token do novo id, ou None se um id externo já estava definido
        (ex: header X-Correlation-Id propagado pela rota).
    """
    if _correlation_id.get():
        return None
    return set_correlation_id()


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


_current_operation: ContextVar[str | None] = ContextVar("current_operation", default=None)


def get_current_operation() -> str | None:
    """Nome da operação em execução no contexto (None fora do Dispatcher)."""
    return _current_operation.get()


def set_current_operation(name: str) -> Token[str | None]:
    return _current_operation.set(name)


def reset_current_operation(token: Token[str | None]) -> None:
    _current_operation.reset(token)
