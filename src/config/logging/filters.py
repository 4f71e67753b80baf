"""Filters que enriquecem e higienizam os records de log."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

REDACTED = "***"

_BEARER_TOKEN = re.compile(r"(Bearer\s+)[^\s\"',]+", re.IGNORECASE)


class InvocationContextFilter(logging.Filter):
    """Carimba service, correlation_id e operation em cada record.

    Valores passados explicitamente via `extra` têm precedência sobre os
    getters de contexto (ex: o Dispatcher loga extra={"operation": name}).
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        operation_getter: Callable[[], str | None] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")
        self._get_operation = operation_getter or (lambda: None)

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self._service_name
        record.correlation_id = getattr(record, "correlation_id", None) or self._get_correlation_id()
        record.operation = getattr(record, "operation", None) or self._get_operation()
        return True


class CredentialRedactionFilter(logging.Filter):
    """Mascara credenciais que escapem para a mensagem final.

    Cobre tokens Bearer em qualquer mensagem e os segredos configurados
    (a API key do distrito) quando aparecem literalmente.
    """

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        self._secrets = tuple(secret for secret in secrets if secret and secret.strip())

    def redact(self, text: str) -> str:
        text = _BEARER_TOKEN.sub(rf"\g<1>{REDACTED}", text)
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = self.redact(message)
        if redacted != message:
            # Mensagem já interpolada; args zerados para não reformatar
            record.msg = redacted
            record.args = None
        return True
