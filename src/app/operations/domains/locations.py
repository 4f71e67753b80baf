"""Operações de localizações (prédios, salas, campi)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, boolean, number, operation, string
from app.operations.handlers import (
    absorbs_not_found,
    active_label,
    bullet_list,
    first_of,
    group_by,
    grouped_listing,
    int_arg,
    more_line,
)
from app.protocols.models import Filter, SearchRequest

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "location"

_DEFAULT_PAGE_SIZE = 100
_SUMMARY_LIMIT = 10
_ROOM_LIMIT = 20
_GROUP_LIMIT = 5

_NOT_FOUND = "Location or resource not found."
_BUILDINGS_UNAVAILABLE = (
    "This endpoint may not be available. "
    "Try using location_get_all or location_search_advanced instead."
)


def _location_name(location: Any) -> str:
    return str(first_of(location, "LocationName", "Name", default="Unknown"))


def _with_code(location: Any) -> str:
    code = first_of(location, "Abbreviation", default="")
    return f"{_location_name(location)}{f' ({code})' if code else ''}"


def _optional_lines(location: dict[str, Any], *fields: tuple[str, str]) -> list[str]:
    return [f"{label}: {location[key]}" for key, label in fields if location.get(key)]


@absorbs_not_found(_NOT_FOUND)
async def _get_all(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.locations.all()
    if result.is_empty:
        return "No locations found in the district."
    groups = group_by(result.items, lambda loc: str(first_of(loc, "LocationTypeName", default="Unknown")))
    return grouped_listing(
        f"District Locations ({len(result.items)} total):",
        groups,
        _with_code,
        limit=_GROUP_LIMIT,
    )


@absorbs_not_found(_NOT_FOUND)
async def _search_advanced(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    request = SearchRequest(
        search_text=args.get("searchText") or None,
        only_show_deleted=bool(args.get("includeDeleted")),
        filters=Filter.collect(
            ("LocationType", args.get("locationType")),
            ("ParentLocation", args.get("buildingId")),
        ),
        page_index=int_arg(args, "pageIndex", 0),
        page_size=int_arg(args, "pageSize", _DEFAULT_PAGE_SIZE),
    )
    result = await client.locations.search(request)
    if result.is_empty:
        return "No locations found matching your criteria."

    def line(loc: dict[str, Any]) -> str:
        building = f" | Building: {loc['BuildingName']}" if loc.get("BuildingName") else ""
        details = " | ".join(_optional_lines(loc, ("RoomNumber", "Room"), ("Floor", "Floor")))
        text = (
            f"• {_with_code(loc)}\n"
            f"  Type: {first_of(loc, 'LocationTypeName', default='Unknown')}{building}"
        )
        return f"{text}\n  {details}" if details else text

    shown = result.items[:_SUMMARY_LIMIT]
    return (
        f"Found {result.total_count} locations (showing {len(shown)}):\n\n"
        f"{bullet_list(shown, line)}{more_line(len(result.items), len(shown), 'locations')}"
    )


@absorbs_not_found(_NOT_FOUND)
async def _get_details(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    location = await client.locations.get(args["locationId"])
    if not location:
        return "Location not found."
    lines = [
        "Location Details:",
        f"Name: {_location_name(location)}",
        f"Type: {first_of(location, 'LocationTypeName', default='Unknown')}",
        *_optional_lines(
            location,
            ("Abbreviation", "Code"),
            ("BuildingName", "Building"),
            ("RoomNumber", "Room"),
            ("Floor", "Floor"),
            ("Wing", "Wing"),
            ("Capacity", "Capacity"),
        ),
        f"Status: {active_label(location)}",
        f"ID: {first_of(location, 'LocationId')}",
    ]
    return "\n".join(lines)


def _room_label(room: dict[str, Any]) -> str:
    name = f" - {room['RoomName']}" if room.get("RoomName") else ""
    return f"Room {first_of(room, 'RoomNumber')}{name}"


@absorbs_not_found(_NOT_FOUND)
async def _get_all_rooms(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.locations.rooms()
    if result.is_empty:
        return "No rooms found."

    rooms = [room for room in result.items if isinstance(room, dict)]
    room_type = args.get("roomType")
    if room_type:
        rooms = [room for room in rooms if room.get("RoomType") == room_type]
    min_capacity = int_arg(args, "minCapacity", 0)
    if min_capacity:
        rooms = [room for room in rooms if (room.get("Capacity") or 0) >= min_capacity]

    shown = rooms[:_ROOM_LIMIT]
    listing = bullet_list(
        shown,
        lambda room: (
            f"• {_room_label(room)}\n"
            f"  Type: {first_of(room, 'RoomType')} | Capacity: {first_of(room, 'Capacity')}"
        ),
    )
    return f"Rooms ({len(rooms)} matching):\n\n{listing}{more_line(len(rooms), len(shown), 'rooms')}"


@absorbs_not_found(_NOT_FOUND)
async def _get_building_rooms(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.locations.building_rooms(args["buildingId"])
    if result.is_empty:
        return "No rooms found in this building."
    groups = group_by(
        result.items,
        lambda room: f"Floor {room['Floor']}" if room.get("Floor") else "Unspecified",
    )
    return grouped_listing(
        f"Building Rooms ({len(result.items)} total):",
        groups,
        lambda room: _room_label(room)
        + (f" (Cap: {room['Capacity']})" if room.get("Capacity") else ""),
    )


@absorbs_not_found(_BUILDINGS_UNAVAILABLE)
async def _get_buildings(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.locations.buildings()
    if result.is_empty:
        return "No buildings found."
    listing = "\n".join(f"• {_with_code(building)}" for building in result.items)
    return f"District Buildings ({len(result.items)}):\n\n{listing}"


@absorbs_not_found(_NOT_FOUND)
async def _get_types(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.locations.types()
    if result.is_empty:
        return "No location types found."
    listing = "\n".join(
        f"• {first_of(kind, 'Name')}"
        + (f" - {kind['Description']}" if kind.get("Description") else "")
        for kind in result.items
    )
    return f"Location Types ({len(result.items)}):\n\n{listing}"


@absorbs_not_found(_NOT_FOUND)
async def _find_special_rooms(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    room_type = args["roomType"]
    result = await client.locations.find_special_rooms(room_type, args.get("buildingId"))
    if result.is_empty:
        return f"No {room_type} rooms found."
    listing = "\n".join(
        f"• {_location_name(room)} - {first_of(room, 'BuildingName', default='Unknown Building')}"
        for room in result.items
    )
    return f"{room_type} Rooms ({len(result.items)}):\n\n{listing}"


@absorbs_not_found(_NOT_FOUND)
async def _get_assets(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.locations.assets(args["locationId"])
    if result.is_empty:
        return "No assets found at this location."
    shown = result.items[:_SUMMARY_LIMIT]
    listing = "\n".join(
        f"• {first_of(asset, 'AssetTag')} - {first_of(asset, 'AssetTypeName', default='Unknown Type')}"
        for asset in shown
    )
    return (
        f"Assets at Location ({len(result.items)}):\n\n"
        f"{listing}{more_line(len(result.items), len(shown), 'assets')}"
    )


async def _find_by_code(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    code = args["code"]
    location = await client.locations.find_by_code(code)
    if not location:
        return f"No location found with code: {code}"
    return (
        "Location Found:\n"
        f"Name: {_location_name(location)}\n"
        f"Code: {first_of(location, 'Abbreviation', default=code)}\n"
        f"Type: {first_of(location, 'LocationTypeName', default='Unknown')}\n"
        f"ID: {first_of(location, 'LocationId')}"
    )


_BUILDING_ID = string("buildingId", "Parent building ID (GUID)")

DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation("location_get_all", "All district locations grouped by type", _get_all),
        operation(
            "location_search_advanced",
            "Search locations by text, type and parent building",
            _search_advanced,
            string("searchText", "Text to search in names and codes"),
            string("locationType", "Filter by location type"),
            _BUILDING_ID,
            boolean("includeDeleted", "Include deleted locations"),
            number("pageSize", "Results per page (default: 100)"),
            number("pageIndex", "Page number (0-based)"),
        ),
        operation(
            "location_get_details",
            "Get full details of a location",
            _get_details,
            string("locationId", "Location ID (GUID)", required=True),
        ),
        operation(
            "location_get_all_rooms",
            "List rooms with optional type and capacity filters",
            _get_all_rooms,
            string("roomType", "Filter by room type"),
            number("minCapacity", "Minimum room capacity"),
        ),
        operation(
            "location_get_building_rooms",
            "Rooms of a building grouped by floor",
            _get_building_rooms,
            string("buildingId", "Building ID (GUID)", required=True),
        ),
        operation("location_get_buildings", "List district buildings", _get_buildings),
        operation("location_get_types", "List location types", _get_types),
        operation(
            "location_find_special_rooms",
            "Find special-purpose rooms such as Library or Gym",
            _find_special_rooms,
            string("roomType", "Room purpose to look for", required=True),
            _BUILDING_ID,
        ),
        operation(
            "location_get_assets",
            "List assets at a location",
            _get_assets,
            string("locationId", "Location ID (GUID)", required=True),
        ),
        operation(
            "location_find_by_code",
            "Find a location by its abbreviation code",
            _find_by_code,
            string("code", "Location abbreviation", required=True),
        ),
    ),
)
