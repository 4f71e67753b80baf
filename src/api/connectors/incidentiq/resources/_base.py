"""Base comum dos recursos por domínio."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from api.connectors.incidentiq.http_client import IncidentIQHttpClient


class Resource:
    """Agrupa os métodos de um domínio sobre a sessão compartilhada."""

    def __init__(self, session: IncidentIQHttpClient) -> None:
        self._session = session
