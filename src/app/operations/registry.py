"""Catálogo de operações: mapa nome-exato -> descritor.

Invariantes verificados no build (DuplicateOperationError):
- nomes globalmente únicos
- todo nome começa com o prefixo do seu domínio seguido de "_"
- prefixos únicos e sem "_" (um nome pertence a no máximo um domínio)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Any

from app.operations.descriptor import DomainModule, OperationDescriptor
from utils.errors import DuplicateOperationError, UnknownOperationError

logger = logging.getLogger(__name__)


class OperationRegistry:
    """Registro imutável de operações, consultado por nome exato (O(1))."""

    def __init__(self, domains: Iterable[DomainModule]) -> None:
        domains = tuple(domains)
        _check_prefixes(domains)

        operations: dict[str, OperationDescriptor] = {}
        owners: dict[str, str] = {}
        for domain in domains:
            for descriptor in domain.operations:
                if not descriptor.name.startswith(f"{domain.prefix}_"):
                    raise DuplicateOperationError(
                        f'operation "{descriptor.name}" is outside domain prefix "{domain.prefix}_"'
                    )
                if descriptor.name in operations:
                    raise DuplicateOperationError(
                        f'operation "{descriptor.name}" registered twice '
                        f"({owners[descriptor.name]}, {domain.prefix})"
                    )
                operations[descriptor.name] = descriptor
                owners[descriptor.name] = domain.prefix

        self._operations = MappingProxyType(operations)
        self._owners = MappingProxyType(owners)
        self._prefixes = tuple(domain.prefix for domain in domains)

        logger.info(
            "operation_registry_built",
            extra={"domains": len(self._prefixes), "operations": len(operations)},
        )

    def get(self, name: str) -> OperationDescriptor:
        """Descritor pelo nome exato.

        Raises:
            UnknownOperationError: nome não registrado
        """
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownOperationError(name) from None

    def domain_of(self, name: str) -> str:
        """Prefixo do domínio dono da operação."""
        try:
            return self._owners[name]
        except KeyError:
            raise UnknownOperationError(name) from None

    @property
    def prefixes(self) -> tuple[str, ...]:
        return self._prefixes

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._operations)

    def describe(self) -> list[dict[str, Any]]:
        """Listagem de capacidades (nome, descrição, schema)."""
        return [descriptor.describe() for descriptor in self._operations.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self) -> Iterator[OperationDescriptor]:
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)


def _check_prefixes(domains: tuple[DomainModule, ...]) -> None:
    seen: set[str] = set()
    for domain in domains:
        prefix = domain.prefix
        if not prefix or "_" in prefix:
            raise DuplicateOperationError(f'invalid domain prefix "{prefix}"')
        if prefix in seen:
            raise DuplicateOperationError(f'domain prefix "{prefix}" registered twice')
        seen.add(prefix)
