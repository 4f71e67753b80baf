"""Exceções compartilhadas entre as camadas api e app."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Configuração inválida detectada na construção de um componente.

    Falha imediata, nunca retentada.
    """


class UpstreamError(Exception):
    """Falha vinda do serviço upstream (transporte ou status não-2xx).

    A camada api especializa (HttpError); a camada app captura por esta
    base sem depender do conector.
    """

    status_code: int | None = None

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class UnknownOperationError(LookupError):
    """Nome de operação não registrado no catálogo."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Unknown operation "{name}".')
        self.name = name


class DuplicateOperationError(ValueError):
    """Violação de invariante do catálogo detectada no build."""


class ArgumentValidationError(ValueError):
    """Argumentos rejeitados no modo estrito de validação."""

    def __init__(self, operation: str, problems: list[str]) -> None:
        joined = "; ".join(problems)
        super().__init__(f"Invalid arguments for {operation}: {joined}")
        self.operation = operation
        self.problems = problems
