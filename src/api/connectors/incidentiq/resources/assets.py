"""Recurso de ativos de TI (Chromebooks, iPads, etc.)."""

from __future__ import annotations

from typing import Any

from api.connectors.incidentiq import endpoints as ep
from api.connectors.incidentiq.resources._base import Resource
from api.normalizers.incidentiq import normalize_collection
from api.payload_builders.incidentiq import build_search_payload
from app.protocols.models import PagedResult, SearchRequest

_ENVELOPE_KEYS = frozenset({"Items", "Data"})


class AssetsResource(Resource):
    async def search(self, request: SearchRequest) -> PagedResult:
        return await self._session.fetch_collection(
            ep.ASSET_SEARCH, body=build_search_payload(request)
        )

    async def get(self, asset_id: str) -> Any | None:
        return await self._session.fetch_entity(ep.ASSET_GET, asset_id=asset_id)

    async def find_by_tag(self, asset_tag: str) -> Any | None:
        return await self._session.fetch_entity(
            ep.ASSET_BY_TAG, absorb_not_found=False, asset_tag=asset_tag
        )

    async def search_by_tag(self, pattern: str) -> PagedResult:
        return await self._session.fetch_collection(ep.ASSET_TAG_SEARCH, pattern=pattern)

    async def find_by_serial(self, serial_number: str) -> Any | None:
        return await self._session.fetch_entity(
            ep.ASSET_BY_SERIAL, absorb_not_found=False, serial_number=serial_number
        )

    async def for_user(self, user_id: str, include_inactive: bool = False) -> PagedResult:
        endpoint = ep.ASSET_FOR_USER_ALL if include_inactive else ep.ASSET_FOR_USER
        return await self._session.fetch_collection(endpoint, user_id=user_id)

    async def by_room(self, room_id: str) -> PagedResult:
        return await self._session.fetch_collection(ep.ASSET_BY_ROOM, room_id=room_id)

    async def status_types(self) -> PagedResult:
        return await self._session.fetch_collection(ep.ASSET_STATUS_TYPES)

    async def funding_types(self) -> PagedResult:
        return await self._session.fetch_collection(ep.ASSET_FUNDING_TYPES)

    async def history(self, asset_id: str) -> PagedResult:
        return await self._session.fetch_collection(ep.ASSET_ACTIVITIES, asset_id=asset_id)

    async def inventory_counts(self, include_deleted: bool = False) -> list[dict[str, Any]]:
        """Contagens de inventário como pares Name/Count.

        O endpoint devolve array, envelope Items ou um dict chave->valor
        conforme o distrito; os três viram a mesma lista.
        """
        payload = await self._session.fetch_raw(
            ep.ASSET_COUNT,
            body=build_search_payload(SearchRequest(only_show_deleted=include_deleted)),
        )
        if isinstance(payload, dict) and not (_ENVELOPE_KEYS & payload.keys()):
            return [{"Name": key, "Count": value} for key, value in payload.items()]

        counts: list[dict[str, Any]] = []
        for item in normalize_collection(payload).items:
            if not isinstance(item, dict):
                continue
            count = item.get("Count")
            counts.append(
                {
                    "Name": item.get("Name") or item.get("Category"),
                    "Count": count if count is not None else item.get("Value"),
                }
            )
        return counts

    async def spares(self, asset_tag: str) -> PagedResult:
        return await self._session.fetch_collection(ep.ASSET_SPARES, asset_tag=asset_tag)

    async def manufacturers(self) -> PagedResult:
        return await self._session.fetch_collection(ep.ASSET_MANUFACTURERS)
