"""Catálogo e despacho de operações nomeadas.

Uso:
    from app.operations import Dispatcher, build_registry

    dispatcher = Dispatcher(build_registry(), client)
    envelope = await dispatcher.dispatch("ticket_search", {"searchText": "projector"})
"""

from __future__ import annotations

from collections.abc import Iterable

from app.operations.descriptor import (
    DomainModule,
    OperationDescriptor,
    ParameterSpec,
)
from app.operations.dispatcher import Dispatcher
from app.operations.domains import ALL_DOMAINS
from app.operations.envelope import ContentEnvelope, TextContent, render_result
from app.operations.registry import OperationRegistry


def build_registry(domains: Iterable[DomainModule] = ALL_DOMAINS) -> OperationRegistry:
    """Registry com todos os domínios (ou os informados, em testes)."""
    return OperationRegistry(domains)


__all__ = [
    "ContentEnvelope",
    "Dispatcher",
    "DomainModule",
    "OperationDescriptor",
    "OperationRegistry",
    "ParameterSpec",
    "TextContent",
    "build_registry",
    "render_result",
]
