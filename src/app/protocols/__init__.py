"""Protocolos e contratos do core da aplicação."""

from .http_client import IncidentIQClientProtocol
from .models import ConnectionStatus, Filter, PagedResult, ResponseShape, SearchRequest

__all__ = [
    "ConnectionStatus",
    "Filter",
    "IncidentIQClientProtocol",
    "PagedResult",
    "ResponseShape",
    "SearchRequest",
]
