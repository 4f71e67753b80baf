"""Descritores de operação: nome, schema de parâmetros e handler.

Construídos uma vez no startup e imutáveis. O schema serve à listagem
de capacidades e, no modo estrito, à validação antes do handler.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

Handler = Callable[["IncidentIQClientProtocol", dict[str, Any]], Awaitable[Any]]

# Tipos primitivos do schema e o teste de instância correspondente
_TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "string": lambda value: isinstance(value, str),
    "number": lambda value: isinstance(value, (int, float)) and not isinstance(value, bool),
    "integer": lambda value: isinstance(value, int) and not isinstance(value, bool),
    "boolean": lambda value: isinstance(value, bool),
    "object": lambda value: isinstance(value, dict),
    "array": lambda value: isinstance(value, list),
}


@dataclass(frozen=True)
class ParameterSpec:
    """Parâmetro declarado de uma operação."""

    name: str
    type: str = "string"
    description: str = ""
    required: bool = False
    enum: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.type not in _TYPE_CHECKS:
            raise ValueError(f"tipo de parâmetro inválido: {self.type}")

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.enum:
            schema["enum"] = list(self.enum)
        return schema

    def problems_with(self, value: Any) -> list[str]:
        """Problemas de tipo/enum para um valor presente."""
        if not _TYPE_CHECKS[self.type](value):
            return [f"{self.name} must be of type {self.type}"]
        if self.enum and value not in self.enum:
            return [f"{self.name} must be one of: {', '.join(self.enum)}"]
        return []


@dataclass(frozen=True)
class OperationDescriptor:
    """Operação nomeada e invocável de forma independente."""

    name: str
    description: str
    handler: Handler
    parameters: tuple[ParameterSpec, ...] = ()

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(param.name for param in self.parameters if param.required)

    def input_schema(self) -> dict[str, Any]:
        """JSON schema estrutural dos argumentos."""
        return {
            "type": "object",
            "properties": {param.name: param.to_schema() for param in self.parameters},
            "required": list(self.required),
        }

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }

    def validate_arguments(self, arguments: dict[str, Any]) -> list[str]:
        """Valida argumentos contra o schema (modo estrito).

        Argumentos desconhecidos são ignorados; None conta como ausente.
        """
        problems: list[str] = []
        for param in self.parameters:
            value = arguments.get(param.name)
            if value is None:
                if param.required:
                    problems.append(f"{param.name} is required")
                continue
            problems.extend(param.problems_with(value))
        return problems


@dataclass(frozen=True)
class DomainModule:
    """Conjunto de operações de um domínio sob um prefixo comum."""

    prefix: str
    operations: tuple[OperationDescriptor, ...]


def operation(
    name: str,
    description: str,
    handler: Handler,
    *parameters: ParameterSpec,
) -> OperationDescriptor:
    return OperationDescriptor(
        name=name,
        description=description,
        handler=handler,
        parameters=parameters,
    )


def string(
    name: str,
    description: str = "",
    *,
    required: bool = False,
    enum: tuple[str, ...] = (),
) -> ParameterSpec:
    return ParameterSpec(name, "string", description, required, enum)


def number(name: str, description: str = "", *, required: bool = False) -> ParameterSpec:
    return ParameterSpec(name, "number", description, required)


def boolean(name: str, description: str = "", *, required: bool = False) -> ParameterSpec:
    return ParameterSpec(name, "boolean", description, required)
