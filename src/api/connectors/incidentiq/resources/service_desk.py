"""Recursos de equipes, SLAs e notificações."""

from __future__ import annotations

from typing import Any

from api.connectors.incidentiq import endpoints as ep
from api.connectors.incidentiq.resources._base import Resource
from api.payload_builders.incidentiq import (
    DEFAULT_SORT_DIRECTION,
    build_paged_query,
    build_search_payload,
)
from app.protocols.models import PagedResult, SearchRequest


class TeamsResource(Resource):
    async def all(
        self,
        page_index: int = 0,
        page_size: int = 100,
        sort_direction: str = DEFAULT_SORT_DIRECTION,
    ) -> PagedResult:
        return await self._session.fetch_collection(
            ep.TEAM_ALL, query=build_paged_query(page_index, page_size, sort_direction)
        )

    async def search(self, request: SearchRequest) -> PagedResult:
        return await self._session.fetch_collection(
            ep.TEAM_SEARCH, body=build_search_payload(request)
        )

    async def get(self, team_id: str) -> Any | None:
        return await self._session.fetch_entity(ep.TEAM_GET, team_id=team_id)

    async def members(self, team_id: str) -> PagedResult:
        return await self._session.fetch_collection(ep.TEAM_MEMBERS, team_id=team_id)


class SlasResource(Resource):
    async def all(self) -> PagedResult:
        return await self._session.fetch_collection(ep.SLA_LIST)

    async def metrics(self) -> PagedResult:
        return await self._session.fetch_collection(ep.SLA_METRICS)

    async def metric_types(self) -> PagedResult:
        return await self._session.fetch_collection(ep.SLA_METRIC_TYPES)


class NotificationsResource(Resource):
    async def ticket_emails(self, ticket_id: str) -> PagedResult:
        return await self._session.fetch_collection(
            ep.NOTIFICATION_TICKET_EMAILS, ticket_id=ticket_id
        )

    async def query(
        self,
        include_read: bool = True,
        include_archived: bool = False,
        include_unarchived: bool = True,
    ) -> PagedResult:
        body = {
            "IncludeRead": include_read,
            "IncludeArchived": include_archived,
            "IncludeUnarchived": include_unarchived,
        }
        return await self._session.fetch_collection(ep.NOTIFICATION_QUERY, body=body)

    async def unread(self) -> PagedResult:
        return await self._session.fetch_collection(ep.NOTIFICATION_UNREAD)

    async def unarchived(self) -> PagedResult:
        return await self._session.fetch_collection(ep.NOTIFICATION_UNARCHIVED)

    async def mark_all_read(self) -> bool:
        response = await self._session.fetch_raw(ep.NOTIFICATION_MARK_ALL_READ)
        return _acknowledged(response)

    async def mark_read(self, notification_id: str) -> bool:
        response = await self._session.fetch_raw(
            ep.NOTIFICATION_MARK_READ, notification_id=notification_id
        )
        return _acknowledged(response)


def _acknowledged(response: Any) -> bool:
    # O upstream sinaliza sucesso no corpo (StatusCode), não só no status HTTP
    return isinstance(response, dict) and response.get("StatusCode") == 200
