"""Recursos de views, campos customizados e relatórios analíticos."""

from __future__ import annotations

from typing import Any

from api.connectors.incidentiq import endpoints as ep
from api.connectors.incidentiq.resources._base import Resource
from api.payload_builders.incidentiq import build_search_payload
from app.protocols.models import PagedResult, SearchRequest


class ViewsResource(Resource):
    async def all(self) -> PagedResult:
        return await self._session.fetch_collection(ep.VIEW_ALL)

    async def for_current_user(self) -> PagedResult:
        return await self._session.fetch_collection(ep.USER_VIEWS)

    async def tickets(self) -> PagedResult:
        return await self._session.fetch_collection(ep.VIEW_TICKETS)

    async def assets(self) -> PagedResult:
        return await self._session.fetch_collection(ep.VIEW_ASSETS)

    async def users(self) -> PagedResult:
        return await self._session.fetch_collection(ep.VIEW_USERS)


class CustomFieldsResource(Resource):
    async def search(self, request: SearchRequest) -> PagedResult:
        return await self._session.fetch_collection(
            ep.CUSTOM_FIELD_SEARCH, body=build_search_payload(request)
        )

    async def types(self) -> PagedResult:
        return await self._session.fetch_collection(ep.CUSTOM_FIELD_TYPES)


class AnalyticsResource(Resource):
    async def reports(self) -> PagedResult:
        return await self._session.fetch_collection(ep.ANALYTICS_REPORTS)

    async def report(self, report_id: str) -> Any | None:
        return await self._session.fetch_entity(ep.ANALYTICS_REPORT, report_id=report_id)
