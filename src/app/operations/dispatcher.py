"""Dispatcher de operações.

Roteia (nome, argumentos) para o handler registrado e embrulha o
retorno ou a exceção no envelope uniforme. Nenhuma falha de handler
escapa para o canal de protocolo; só cancelamento propaga.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from app.observability import (
    ensure_correlation_id,
    get_correlation_id,
    record_latency,
    record_operation_outcome,
    reset_correlation_id,
    reset_current_operation,
    set_current_operation,
)
from app.operations.envelope import ContentEnvelope
from utils.errors import ArgumentValidationError, UnknownOperationError, UpstreamError

if TYPE_CHECKING:
    from app.operations.descriptor import OperationDescriptor
    from app.operations.registry import OperationRegistry
    from app.protocols import IncidentIQClientProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "dispatcher"


class Dispatcher:
    """Ponto de entrada único para invocação de operações."""

    def __init__(
        self,
        registry: OperationRegistry,
        client: IncidentIQClientProtocol,
        *,
        strict_arguments: bool = False,
    ) -> None:
        """Inicializa o dispatcher.

        Args:
            registry: Catálogo de operações já validado
            client: Sessão IncidentIQ compartilhada (imutável)
            strict_arguments: Valida argumentos contra o schema antes do handler
        """
        self._registry = registry
        self._client = client
        self._strict_arguments = strict_arguments

    @property
    def registry(self) -> OperationRegistry:
        return self._registry

    @property
    def client(self) -> IncidentIQClientProtocol:
        return self._client

    def list_operations(self) -> list[dict[str, Any]]:
        return self._registry.describe()

    async def dispatch(
        self,
        name: str,
        arguments: Mapping[str, Any] | None = None,
    ) -> ContentEnvelope:
        """Invoca a operação e devolve sempre um envelope.

        Args:
            name: Nome exato da operação
            arguments: Argumentos (None equivale a {})

        Returns:
            ContentEnvelope de sucesso ou de erro
        """
        token = ensure_correlation_id()
        operation_token = set_current_operation(name)
        start = time.perf_counter()
        outcome = "success"
        try:
            envelope = await self._invoke(name, dict(arguments or {}))
            if envelope.is_error:
                outcome = "error"
            return envelope
        except UnknownOperationError as exc:
            outcome = "unknown_operation"
            logger.warning("operation_unknown", extra={"operation": name})
            return ContentEnvelope.error(str(exc))
        except ArgumentValidationError as exc:
            outcome = "invalid_arguments"
            logger.info(
                "operation_invalid_arguments",
                extra={"operation": name, "problems": exc.problems},
            )
            return ContentEnvelope.error(str(exc))
        finally:
            correlation_id = get_correlation_id()
            record_latency(_COMPONENT, name, (time.perf_counter() - start) * 1000, correlation_id)
            record_operation_outcome(name, outcome, correlation_id)
            reset_current_operation(operation_token)
            if token is not None:
                reset_correlation_id(token)

    async def _invoke(self, name: str, arguments: dict[str, Any]) -> ContentEnvelope:
        descriptor = self._registry.get(name)

        if self._strict_arguments:
            problems = descriptor.validate_arguments(arguments)
            if problems:
                raise ArgumentValidationError(name, problems)

        try:
            result = await descriptor.handler(self._client, arguments)
        except UpstreamError as exc:
            logger.warning(
                "operation_upstream_error",
                extra={"operation": name, "status_code": exc.status_code},
            )
            return ContentEnvelope.error(str(exc))
        except KeyError as exc:
            argument = _missing_argument(exc, descriptor, arguments)
            if argument is None:
                # Chave ausente em registro do upstream, não nos argumentos
                return _unexpected_failure(name, exc)
            logger.warning(
                "operation_missing_argument",
                extra={"operation": name, "argument": argument},
            )
            return ContentEnvelope.error(f"Missing required argument: {argument}")
        except Exception as exc:
            return _unexpected_failure(name, exc)

        return ContentEnvelope.from_result(result)


def _missing_argument(
    exc: KeyError,
    descriptor: OperationDescriptor,
    arguments: dict[str, Any],
) -> str | None:
    """Nome do parâmetro declarado e ausente que causou o KeyError, se for o caso."""
    if not exc.args or not isinstance(exc.args[0], str):
        return None
    key = exc.args[0]
    declared = {param.name for param in descriptor.parameters}
    if key in declared and key not in arguments:
        return key
    return None


def _unexpected_failure(name: str, exc: Exception) -> ContentEnvelope:
    logger.exception("operation_failed", extra={"operation": name})
    return ContentEnvelope.error(str(exc) or type(exc).__name__)
