"""Recurso de localizações (distrito, prédios, salas)."""

from __future__ import annotations

import logging
from typing import Any

from api.connectors.incidentiq import endpoints as ep
from api.connectors.incidentiq.resources._base import Resource
from api.payload_builders.incidentiq import build_search_payload
from app.protocols.models import Filter, PagedResult, SearchRequest
from config.logging import log_fallback

logger = logging.getLogger(__name__)

_SPECIAL_ROOMS_PAGE_SIZE = 100
_CODE_SEARCH_PAGE_SIZE = 10


class LocationsResource(Resource):
    async def all(self) -> PagedResult:
        return await self._session.fetch_collection(ep.LOCATION_ALL)

    async def search(self, request: SearchRequest) -> PagedResult:
        return await self._session.fetch_collection(
            ep.LOCATION_SEARCH, body=build_search_payload(request)
        )

    async def get(self, location_id: str) -> Any | None:
        return await self._session.fetch_entity(
            ep.LOCATION_GET, absorb_not_found=False, location_id=location_id
        )

    async def rooms(self) -> PagedResult:
        return await self._session.fetch_collection(ep.LOCATION_ROOMS)

    async def building_rooms(self, building_id: str) -> PagedResult:
        return await self._session.fetch_collection(
            ep.LOCATION_BUILDING_ROOMS, building_id=building_id
        )

    async def buildings(self) -> PagedResult:
        """Prédios do distrito.

        Vários distritos devolvem lista vazia em /locations/buildings;
        nesse caso filtra /locations/all por tipo (contém "building") ou
        por ausência de pai (exceto o próprio District).
        """
        result = await self._session.fetch_collection(ep.LOCATION_BUILDINGS)
        if not result.is_empty:
            return result

        log_fallback(logger, "location_buildings", reason="empty_result", path=ep.LOCATION_ALL.path)
        everything = await self.all()
        buildings = [loc for loc in everything.items if _looks_like_building(loc)]
        return PagedResult(
            items=buildings,
            total_count=len(buildings),
            page_index=0,
            page_size=len(buildings),
        )

    async def types(self) -> PagedResult:
        return await self._session.fetch_collection(ep.LOCATION_TYPES)

    async def assets(self, location_id: str) -> PagedResult:
        return await self._session.fetch_collection(ep.LOCATION_ASSETS, location_id=location_id)

    async def find_special_rooms(
        self,
        room_type: str,
        building_id: str | None = None,
    ) -> PagedResult:
        """Salas de uso especial (ex: Library, Gym) via busca textual."""
        request = SearchRequest(
            search_text=room_type,
            filters=Filter.collect(("LocationType", "Room"), ("ParentLocation", building_id)),
            page_index=0,
            page_size=_SPECIAL_ROOMS_PAGE_SIZE,
        )
        return await self.search(request)

    async def find_by_code(self, code: str) -> Any | None:
        """Localização pela abreviação; cai para busca + match exato."""
        location = await self._session.fetch_entity(ep.LOCATION_BY_CODE, code=code)
        if location:
            return location

        log_fallback(logger, "location_find_by_code", reason="no_direct_match", path=ep.LOCATION_SEARCH.path)
        request = SearchRequest(search_text=code, page_index=0, page_size=_CODE_SEARCH_PAGE_SIZE)
        matches = await self.search(request)
        for candidate in matches.items:
            if isinstance(candidate, dict) and candidate.get("Abbreviation") == code:
                return candidate
        return None


def _looks_like_building(location: Any) -> bool:
    if not isinstance(location, dict):
        return False
    type_name = location.get("LocationTypeName") or ""
    if "building" in type_name.lower():
        return True
    return not location.get("ParentLocationId") and type_name != "District"
