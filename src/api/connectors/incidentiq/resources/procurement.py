"""Recursos de peças e ordens de compra."""

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


class PartsResource(Resource):
    async def all(self) -> PagedResult:
        return await self._session.fetch_collection(ep.PARTS_ALL)

    async def get(self, part_id: str) -> Any | None:
        return await self._session.fetch_entity(
            ep.PARTS_GET, absorb_not_found=False, part_id=part_id
        )

    async def suppliers(self) -> PagedResult:
        return await self._session.fetch_collection(ep.PARTS_SUPPLIERS)

    async def search(self, request: SearchRequest) -> PagedResult:
        return await self._session.fetch_collection(
            ep.PARTS_SEARCH, body=build_search_payload(request)
        )


class PurchaseOrdersResource(Resource):
    async def all(
        self,
        status: str | None = None,
        page_index: int = 0,
        page_size: int = 100,
        sort_direction: str = DEFAULT_SORT_DIRECTION,
    ) -> PagedResult:
        query = build_paged_query(page_index, page_size, sort_direction)
        if status:
            return await self._session.fetch_collection(
                ep.PURCHASE_ORDER_BY_STATUS, query=query, status=status
            )
        return await self._session.fetch_collection(ep.PURCHASE_ORDER_ALL, query=query)

    async def get(self, purchase_order_id: str) -> Any | None:
        return await self._session.fetch_entity(
            ep.PURCHASE_ORDER_GET, purchase_order_id=purchase_order_id
        )
