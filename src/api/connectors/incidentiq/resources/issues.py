"""Recurso de issues: tipos, categorias e prioridades usados na triagem."""

from __future__ import annotations

from typing import Any

from api.connectors.incidentiq import endpoints as ep
from api.connectors.incidentiq.resources._base import Resource
from api.payload_builders.incidentiq import build_search_payload
from app.protocols.models import PagedResult, SearchRequest


class IssuesResource(Resource):
    async def for_site(self) -> PagedResult:
        return await self._session.fetch_collection(ep.ISSUE_SITE)

    async def types(self) -> PagedResult:
        return await self._session.fetch_collection(ep.ISSUE_TYPES)

    async def search_types(self, request: SearchRequest) -> PagedResult:
        return await self._session.fetch_collection(
            ep.ISSUE_TYPE_SEARCH, body=build_search_payload(request)
        )

    async def get_type(self, type_id: str) -> Any | None:
        return await self._session.fetch_entity(
            ep.ISSUE_TYPE_GET, absorb_not_found=False, type_id=type_id
        )

    async def categories(self, parent_id: str | None = None) -> PagedResult:
        return await self._session.fetch_collection(
            ep.ISSUE_CATEGORIES, query={"parentId": parent_id}
        )

    async def priorities(self) -> PagedResult:
        return await self._session.fetch_collection(ep.ISSUE_PRIORITIES)

    async def common(self) -> PagedResult:
        return await self._session.fetch_collection(ep.ISSUE_COMMON)
