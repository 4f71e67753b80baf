"""Operações de ativos (inventário de dispositivos)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, boolean, number, operation, string
from app.operations.handlers import (
    absorbs_not_found,
    bullet_list,
    first_of,
    group_by,
    grouped_listing,
    int_arg,
    more_line,
    page_line,
)
from app.protocols.models import Filter, SearchRequest

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "asset"

_DEFAULT_PAGE_SIZE = 100
_SUMMARY_LIMIT = 10

# Lookups por identificador (find_by/search_by) tratam 404 como "não achou"
_IDENTIFIER_NOT_FOUND = "No asset found with the specified identifier."


def _short_line(asset: dict[str, Any]) -> str:
    return (
        f"• {first_of(asset, 'AssetTag')} - {first_of(asset, 'AssetTypeName')}"
        f" ({first_of(asset, 'StatusName')})"
    )


async def _search_advanced(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    page_index = int_arg(args, "pageIndex", 0)
    page_size = int_arg(args, "pageSize", _DEFAULT_PAGE_SIZE)
    request = SearchRequest(
        search_text=args.get("searchText") or None,
        only_show_deleted=bool(args.get("includeDeleted")),
        filters=Filter.collect(
            ("View", args.get("viewId")),
            ("AssetType", args.get("assetType")),
            ("Status", args.get("status")),
            ("Location", args.get("locationId")),
        ),
        page_index=page_index,
        page_size=page_size,
    )
    result = await client.assets.search(request)
    if result.is_empty:
        return "No assets found matching your criteria."

    shown = result.items[:_SUMMARY_LIMIT]
    listing = bullet_list(
        shown,
        lambda asset: (
            f"• {first_of(asset, 'AssetTag')} - {first_of(asset, 'AssetTypeName', default='Unknown Type')}\n"
            f"  Model: {first_of(asset, 'ModelName')} | Serial: {first_of(asset, 'SerialNumber')}\n"
            f"  Status: {first_of(asset, 'StatusName', default='Unknown')}"
            f" | Location: {first_of(asset, 'LocationName')}\n"
            f"  User: {first_of(asset, 'AssignedUserName', default='Unassigned')}"
        ),
    )
    return (
        f"Found {result.total_count} assets (showing {len(shown)}):\n\n"
        f"{listing}{more_line(len(result.items), len(shown), 'assets')}\n\n"
        f"{page_line(page_index, page_size, result.total_count)}"
    )


@absorbs_not_found(_IDENTIFIER_NOT_FOUND)
async def _find_by_tag(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    asset_tag = args["assetTag"]
    asset = await client.assets.find_by_tag(asset_tag)
    if not asset:
        return f"No asset found with tag: {asset_tag}"
    return (
        f"Asset Found: {first_of(asset, 'AssetTag')}\n"
        f"Type: {first_of(asset, 'AssetTypeName', default='Unknown')}\n"
        f"Model: {first_of(asset, 'ModelName')}\n"
        f"Manufacturer: {first_of(asset, 'ManufacturerName')}\n"
        f"Serial: {first_of(asset, 'SerialNumber')}\n"
        f"Status: {first_of(asset, 'StatusName', default='Unknown')}\n"
        f"Location: {first_of(asset, 'LocationName')}\n"
        f"Room: {first_of(asset, 'RoomNumber')}\n"
        f"Assigned To: {first_of(asset, 'AssignedUserName', default='Unassigned')}\n"
        f"Purchase Date: {first_of(asset, 'PurchaseDate')}\n"
        f"Warranty: {first_of(asset, 'WarrantyExpirationDate')}\n"
        f"Funding: {first_of(asset, 'FundingTypeName')}\n"
        f"Notes: {first_of(asset, 'Notes', default='None')}"
    )


@absorbs_not_found(_IDENTIFIER_NOT_FOUND)
async def _search_by_tag(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    pattern = args["tagPattern"]
    result = await client.assets.search_by_tag(pattern)
    if result.is_empty:
        return f"No assets found matching tag pattern: {pattern}"
    listing = bullet_list(result.items, _short_line, separator="\n")
    return f'Found {result.total_count} assets matching "{pattern}":\n\n{listing}'


@absorbs_not_found(_IDENTIFIER_NOT_FOUND)
async def _find_by_serial(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    serial_number = args["serialNumber"]
    asset = await client.assets.find_by_serial(serial_number)
    if not asset:
        return f"No asset found with serial: {serial_number}"
    return (
        f"Asset Found by Serial: {first_of(asset, 'SerialNumber')}\n"
        f"Tag: {first_of(asset, 'AssetTag')}\n"
        f"Type: {first_of(asset, 'AssetTypeName')}\n"
        f"Model: {first_of(asset, 'ModelName')}\n"
        f"Status: {first_of(asset, 'StatusName')}\n"
        f"Location: {first_of(asset, 'LocationName')}\n"
        f"User: {first_of(asset, 'AssignedUserName', default='Unassigned')}"
    )


async def _get_user_devices(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.assets.for_user(args["userId"], bool(args.get("includeInactive")))
    if result.is_empty:
        return "No devices assigned to this user."
    listing = bullet_list(
        result.items,
        lambda asset: (
            f"• {first_of(asset, 'AssetTag')} - {first_of(asset, 'AssetTypeName')}\n"
            f"  Status: {first_of(asset, 'StatusName')} | Serial: {first_of(asset, 'SerialNumber')}"
        ),
    )
    return f"User has {result.total_count} assigned device(s):\n\n{listing}"


async def _get_by_room(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.assets.by_room(args["roomId"])
    if result.is_empty:
        return "No assets found in this room."
    groups = group_by(result.items, lambda asset: str(first_of(asset, "AssetTypeName", default="Unknown")))
    return grouped_listing(
        f"Room Inventory ({result.total_count} assets):",
        groups,
        lambda asset: f"{first_of(asset, 'AssetTag')} - {first_of(asset, 'StatusName')}",
    )


async def _get_status_types(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.assets.status_types()
    if result.is_empty:
        return "No status types available."
    listing = "\n".join(
        f"• {first_of(status, 'Name')}{' (Retired)' if status.get('IsRetired') else ''}"
        for status in result.items
    )
    return f"Available Asset Status Types ({result.total_count}):\n\n{listing}"


async def _get_funding_types(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.assets.funding_types()
    if result.is_empty:
        return "No funding types available."
    listing = "\n".join(f"• {first_of(funding, 'Name')}" for funding in result.items)
    return (
        f"Available Funding Types ({result.total_count}):\n\n{listing}\n\n"
        "Use funding types to track grant compliance and budget sources"
    )


async def _get_history(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.assets.history(args["assetId"])
    if result.is_empty:
        return "No history available for this asset."
    shown = result.items[:_SUMMARY_LIMIT]
    listing = bullet_list(
        shown,
        lambda activity: (
            f"• {first_of(activity, 'ActivityDate')} - {first_of(activity, 'ActivityType')}\n"
            f"  {first_of(activity, 'Description', default='')}\n"
            f"  By: {first_of(activity, 'UserName', default='System')}"
        ),
    )
    return f"Asset History (showing recent {len(shown)} of {result.total_count}):\n\n{listing}"


async def _get_inventory_counts(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    counts = await client.assets.inventory_counts(bool(args.get("includeDeleted")))
    if not counts:
        return "No inventory counts available."
    listing = "\n".join(f"• {count['Name']}: {count['Count']}" for count in counts)
    return f"Asset Inventory Counts:\n\n{listing}"


async def _get_spares(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    asset_tag = args["assetTag"]
    result = await client.assets.spares(asset_tag)
    if result.is_empty:
        return f"No spare parts found for asset: {asset_tag}"
    listing = bullet_list(result.items, _short_line, separator="\n")
    return f"Spare Parts for {asset_tag} ({result.total_count}):\n\n{listing}"


async def _get_manufacturers(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.assets.manufacturers()
    if result.is_empty:
        return "No manufacturers found."
    listing = "\n".join(
        f"• {first_of(maker, 'Name')} (ID: {first_of(maker, 'ManufacturerId')})"
        for maker in result.items
    )
    return f"Asset Manufacturers ({result.total_count}):\n\n{listing}"


DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation(
            "asset_search_advanced",
            "Search assets with filters for type, status, location and saved views",
            _search_advanced,
            string("searchText", "Text to search in tags, serials and models"),
            string("assetType", "Filter by asset type ID"),
            string("status", "Filter by status ID"),
            string("locationId", "Filter by location ID (GUID)"),
            string("viewId", "Saved view ID to apply"),
            boolean("includeDeleted", "Include deleted assets"),
            number("pageSize", "Results per page (default: 100)"),
            number("pageIndex", "Page number (0-based)"),
        ),
        operation(
            "asset_find_by_tag",
            "Find an asset by its exact asset tag",
            _find_by_tag,
            string("assetTag", "Asset tag", required=True),
        ),
        operation(
            "asset_search_by_tag",
            "Search assets by partial asset tag",
            _search_by_tag,
            string("tagPattern", "Partial asset tag", required=True),
        ),
        operation(
            "asset_find_by_serial",
            "Find an asset by serial number",
            _find_by_serial,
            string("serialNumber", "Serial number", required=True),
        ),
        operation(
            "asset_get_user_devices",
            "List devices assigned to a user",
            _get_user_devices,
            string("userId", "User ID (GUID)", required=True),
            boolean("includeInactive", "Include inactive assignments"),
        ),
        operation(
            "asset_get_by_room",
            "Room inventory grouped by asset type",
            _get_by_room,
            string("roomId", "Room location ID (GUID)", required=True),
        ),
        operation("asset_get_status_types", "List asset status types", _get_status_types),
        operation("asset_get_funding_types", "List asset funding types", _get_funding_types),
        operation(
            "asset_get_history",
            "Recent activity history of an asset",
            _get_history,
            string("assetId", "Asset ID (GUID)", required=True),
        ),
        operation(
            "asset_get_inventory_counts",
            "Asset counts by category",
            _get_inventory_counts,
            boolean("includeDeleted", "Include deleted assets"),
        ),
        operation(
            "asset_get_spares",
            "List spare parts for an asset tag",
            _get_spares,
            string("assetTag", "Asset tag", required=True),
        ),
        operation("asset_get_manufacturers", "List asset manufacturers", _get_manufacturers),
    ),
)
