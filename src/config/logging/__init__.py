"""Logging JSON estruturado do gateway.

Toda linha traz service, correlation_id e a operação em execução; o
Dispatcher define os dois últimos por invocação, então as linhas do
conector (iiq_request, iiq_http_error) apontam a operação de origem.
Credenciais (token Bearer, API key) são mascaradas antes da saída.
"""

from config.logging.config import configure_logging, log_fallback
from config.logging.filters import CredentialRedactionFilter, InvocationContextFilter
from config.logging.formatters import FIELD_RENAME_MAP, REQUIRED_LOG_FIELDS, create_json_formatter

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CredentialRedactionFilter",
    "InvocationContextFilter",
    "configure_logging",
    "create_json_formatter",
    "log_fallback",
]
