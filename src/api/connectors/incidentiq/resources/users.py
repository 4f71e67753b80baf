"""Recurso de usuários (alunos, equipe, agentes)."""

from __future__ import annotations

from typing import Any

from api.connectors.incidentiq import endpoints as ep
from api.connectors.incidentiq.resources._base import Resource
from api.payload_builders.incidentiq import build_search_payload
from app.protocols.models import PagedResult, SearchRequest


class UsersResource(Resource):
    async def search(self, request: SearchRequest) -> PagedResult:
        return await self._session.fetch_collection(
            ep.USER_SEARCH, body=build_search_payload(request)
        )

    async def get(self, user_id: str) -> Any | None:
        return await self._session.fetch_entity(
            ep.USER_GET, absorb_not_found=False, user_id=user_id
        )

    async def current(self) -> Any | None:
        # 404 aqui significa token sem contexto de usuário; quem chama decide
        return await self._session.fetch_entity(ep.USER_CURRENT, absorb_not_found=False)

    async def agents(self) -> PagedResult:
        return await self._session.fetch_collection(ep.USER_AGENTS)

    async def grade_statistics(self, location_id: str | None = None) -> PagedResult:
        return await self._session.fetch_collection(
            ep.USER_GRADE_STATISTICS, query={"locationId": location_id}
        )

    async def location_statistics(self) -> PagedResult:
        return await self._session.fetch_collection(ep.USER_LOCATION_STATISTICS)

    async def by_location(self, location_id: str) -> PagedResult:
        return await self._session.fetch_collection(
            ep.USER_BY_LOCATION, location_id=location_id
        )

    async def quick_search(self, query: str, limit: int = 10) -> PagedResult:
        return await self._session.fetch_collection(
            ep.USER_QUICK_SEARCH, query={"q": query, "limit": limit}
        )
