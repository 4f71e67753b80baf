"""Operações de campos customizados."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, boolean, number, operation, string
from app.operations.handlers import bullet_list, first_of, int_arg, more_line
from app.protocols.models import Filter, SearchRequest

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "customfield"

_DEFAULT_PAGE_SIZE = 50
_SUMMARY_LIMIT = 10

ENTITY_TYPES = ("Ticket", "Asset", "User", "Location")


async def _search(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    request = SearchRequest(
        search_text=args.get("searchText") or None,
        only_show_deleted=bool(args.get("includeDeleted")),
        filters=Filter.collect(
            ("EntityType", args.get("entityType")),
            ("FieldType", args.get("fieldType")),
        ),
        page_index=int_arg(args, "pageIndex", 0),
        page_size=int_arg(args, "pageSize", _DEFAULT_PAGE_SIZE),
    )
    result = await client.custom_fields.search(request)
    if result.is_empty:
        return "No custom fields found matching your criteria."

    shown = result.items[:_SUMMARY_LIMIT]
    listing = bullet_list(
        shown,
        lambda field: (
            f"• {first_of(field, 'Name')}{' (Required)' if field.get('IsRequired') else ''}\n"
            f"  Type: {first_of(field, 'CustomFieldTypeId')}"
            f" | Entity: {first_of(field, 'EntityTypeId')}\n"
            f"  {first_of(field, 'Description', default='No description')}"
        ),
    )
    return (
        f"Found {result.total_count} custom fields (showing {len(shown)}):\n\n"
        f"{listing}{more_line(len(result.items), len(shown), 'fields')}"
    )


async def _get_types(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.custom_fields.types()
    if result.is_empty:
        return "No custom field types found."

    def line(kind: dict[str, Any]) -> str:
        supported = kind.get("SupportedEntities") or []
        return (
            f"• {first_of(kind, 'Name')} ({first_of(kind, 'EditorType')})\n"
            f"  Data Type: {first_of(kind, 'DataType')}\n"
            f"  Supports: {', '.join(supported) if supported else 'All entities'}"
        )

    return f"Available Field Types ({len(result.items)}):\n\n{bullet_list(result.items, line)}"


DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation(
            "customfield_search",
            "Search custom field definitions",
            _search,
            string("searchText", "Text to search in field names"),
            string("entityType", "Entity the field belongs to", enum=ENTITY_TYPES),
            string("fieldType", "Filter by field type ID"),
            boolean("includeDeleted", "Include deleted fields"),
            number("pageSize", "Results per page (default: 50)"),
            number("pageIndex", "Page number (0-based)"),
        ),
        operation("customfield_get_types", "List custom field types", _get_types),
    ),
)
