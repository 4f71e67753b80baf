"""Conector IncidentIQ - adapter de borda para a API REST do distrito.

Este módulo é o único ponto de IO com o upstream.
Responsabilidades:
- Sessão HTTP autenticada (bearer + headers de escopo)
- Catálogo de endpoints com formato de resposta declarado
- Erros tipados do upstream
- Recursos por domínio (tickets, users, assets, locations...)
"""

from .endpoints import Endpoint
from .http_base import HttpClientConfig, HttpError
from .http_client import IncidentIQHttpClient, create_incidentiq_client
from .iiq_errors import IIQApiError, parse_iiq_error

__all__ = [
    "Endpoint",
    "HttpClientConfig",
    "HttpError",
    "IIQApiError",
    "IncidentIQHttpClient",
    "create_incidentiq_client",
    "parse_iiq_error",
]
