"""Operações de peças de reposição e fornecedores."""

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
)
from app.protocols.models import Filter, SearchRequest

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "parts"

_DEFAULT_PAGE_SIZE = 50
_SUMMARY_LIMIT = 10
_GROUP_LIMIT = 5

_NOT_FOUND = "Part or resource not found."


def _part_name(part: Any) -> str:
    return str(first_of(part, "Name", "PartNumber", default="Unnamed part"))


def _stock_label(part: dict[str, Any]) -> str:
    label = _part_name(part)
    if part.get("QuantityOnHand") is not None:
        label += f" - Stock: {part['QuantityOnHand']}"
    if part.get("StandardCostEach"):
        label += f" - ${part['StandardCostEach']}"
    return label


@absorbs_not_found(_NOT_FOUND)
async def _get_all(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.parts.all()
    if result.is_empty:
        return "No parts found in inventory."
    groups = group_by(
        result.items,
        lambda part: str(first_of(part, "Category", "DeviceType", default="Uncategorized")),
    )
    return grouped_listing(
        f"Parts Inventory ({len(result.items)} total):",
        groups,
        _stock_label,
        limit=_GROUP_LIMIT,
    )


@absorbs_not_found(_NOT_FOUND)
async def _get_details(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    part = await client.parts.get(args["partId"])
    if not part:
        return "Part not found."
    return (
        "Part Details:\n"
        f"Name: {_part_name(part)}\n"
        f"Part Number: {first_of(part, 'PartNumber')}\n"
        f"Category: {first_of(part, 'Category')}\n"
        f"Device Type: {first_of(part, 'DeviceType')}\n"
        f"Stock: {first_of(part, 'QuantityOnHand', default=0)}"
        f" | Available: {first_of(part, 'QuantityAvailable', default=0)}\n"
        f"Cost: ${first_of(part, 'StandardCostEach')}\n"
        f"Supplier: {first_of(part, 'SupplierName')}\n"
        f"Description: {first_of(part, 'Description', default='No description')}\n"
        f"ID: {first_of(part, 'PartId')}"
    )


@absorbs_not_found(_NOT_FOUND)
async def _get_suppliers(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.parts.suppliers()
    if result.is_empty:
        return "No suppliers found."

    suppliers = [supplier for supplier in result.items if isinstance(supplier, dict)]
    if args.get("preferred"):
        suppliers = [supplier for supplier in suppliers if supplier.get("IsPreferred")]

    def line(supplier: dict[str, Any]) -> str:
        text = (
            f"• {first_of(supplier, 'Name')}{' (Preferred)' if supplier.get('IsPreferred') else ''}\n"
            f"  Contact: {first_of(supplier, 'ContactName')}"
            f" | {first_of(supplier, 'Phone', default='No phone')}\n"
            f"  {first_of(supplier, 'Email', default='No email')}"
        )
        if supplier.get("LeadTimeDays"):
            text += f"\n  Lead Time: {supplier['LeadTimeDays']} days"
        return text

    return f"Suppliers ({len(suppliers)}):\n\n{bullet_list(suppliers, line)}"


@absorbs_not_found(_NOT_FOUND)
async def _search(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    request = SearchRequest(
        search_text=args.get("searchText") or None,
        only_show_deleted=bool(args.get("includeDeleted")),
        filters=Filter.collect(
            ("Category", args.get("category")),
            ("DeviceType", args.get("deviceType")),
            ("Supplier", args.get("supplierId")),
        ),
        page_index=int_arg(args, "pageIndex", 0),
        page_size=int_arg(args, "pageSize", _DEFAULT_PAGE_SIZE),
    )
    result = await client.parts.search(request)
    if result.is_empty:
        return "No parts found matching your criteria."

    def line(part: dict[str, Any]) -> str:
        category = f" ({part['Category']})" if part.get("Category") else ""
        return (
            f"• {_part_name(part)}{category}\n"
            f"  Stock: {part.get('QuantityOnHand') or 0}"
            f" | Available: {part.get('QuantityAvailable') or 0}"
            f" | Cost: ${first_of(part, 'StandardCostEach')}\n"
            f"  {first_of(part, 'Description', default='No description')}"
        )

    shown = result.items[:_SUMMARY_LIMIT]
    return (
        f"Found {result.total_count} parts (showing {len(shown)}):\n\n"
        f"{bullet_list(shown, line)}{more_line(len(result.items), len(shown), 'parts')}"
    )


DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation("parts_get_all", "Parts inventory grouped by category", _get_all),
        operation(
            "parts_get_details",
            "Get full details of a part",
            _get_details,
            string("partId", "Part ID (GUID)", required=True),
        ),
        operation(
            "parts_get_suppliers",
            "List part suppliers",
            _get_suppliers,
            boolean("preferred", "Only preferred suppliers"),
        ),
        operation(
            "parts_search",
            "Search parts by text, category, device type and supplier",
            _search,
            string("searchText", "Text to search in part names and numbers"),
            string("category", "Filter by category"),
            string("deviceType", "Filter by device type"),
            string("supplierId", "Filter by supplier ID (GUID)"),
            boolean("includeDeleted", "Include deleted parts"),
            number("pageSize", "Results per page (default: 50)"),
            number("pageIndex", "Page number (0-based)"),
        ),
    ),
)
