"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ArgumentValidationError,
    ConfigurationError,
    DuplicateOperationError,
    UnknownOperationError,
    UpstreamError,
)

__all__ = [
    "ArgumentValidationError",
    "ConfigurationError",
    "DuplicateOperationError",
    "UnknownOperationError",
    "UpstreamError",
]
