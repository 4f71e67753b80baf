"""Operações de views salvas (filtros reutilizáveis de tickets/ativos/usuários)."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, operation
from app.operations.handlers import first_of
from app.protocols.models import PagedResult

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "view"

_COMMON_TICKET_VIEWS = (
    "My Open Tickets",
    "Unassigned Tickets",
    "Urgent Tickets",
    "Overdue Tickets",
    "Building Tickets",
)
_COMMON_ASSET_VIEWS = (
    "Chromebook Inventory",
    "iPad Inventory",
    "Warranty Expiring",
    "Devices for Repair",
    "Available Loaners",
)
_COMMON_USER_VIEWS = (
    "Student Directory",
    "Staff Directory",
    "IT Agents",
    "New Users",
    "Inactive Users",
)


def format_view(view: Any) -> dict[str, Any]:
    """Projeção estável de uma view, tolerante aos nomes de campo variantes."""
    return {
        "id": first_of(view, "ViewId", "Id", default=None),
        "name": first_of(view, "Name", "ViewName", "Title", default=None),
        "description": first_of(view, "Description", default=None),
        "type": first_of(view, "ViewType", "Type", default=None),
        "entity": first_of(view, "EntityType", default=None),
        "is_public": first_of(view, "IsPublic", default=None),
        "is_default": first_of(view, "IsDefault", default=None),
        "created_date": first_of(view, "CreatedDate", default=None),
        "modified_date": first_of(view, "ModifiedDate", default=None),
    }


def _listing(
    fetch: Callable[[IncidentIQClientProtocol], Awaitable[PagedResult]],
    found: str,
    empty: str,
    common_views: tuple[str, ...] = (),
) -> Callable[[IncidentIQClientProtocol, dict[str, Any]], Awaitable[dict[str, Any]]]:
    async def handler(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
        result = await fetch(client)
        payload: dict[str, Any] = {
            "count": len(result.items),
            "views": [format_view(view) for view in result.items],
        }
        if common_views:
            payload["common_views"] = list(common_views)
        payload["message"] = found if result.items else empty
        return payload

    return handler


DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation(
            "view_list_all",
            "List all saved views",
            _listing(lambda client: client.views.all(), "Retrieved all views", "No views configured"),
        ),
        operation(
            "view_list_user",
            "List views available to the current user",
            _listing(
                lambda client: client.views.for_current_user(),
                "Retrieved user views",
                "No user views available",
            ),
        ),
        operation(
            "view_list_tickets",
            "List ticket views",
            _listing(
                lambda client: client.views.tickets(),
                "Retrieved ticket views",
                "No ticket views configured",
                _COMMON_TICKET_VIEWS,
            ),
        ),
        operation(
            "view_list_assets",
            "List asset views",
            _listing(
                lambda client: client.views.assets(),
                "Retrieved asset views",
                "No asset views configured",
                _COMMON_ASSET_VIEWS,
            ),
        ),
        operation(
            "view_list_users",
            "List user directory views",
            _listing(
                lambda client: client.views.users(),
                "Retrieved user directory views",
                "No user directory views configured",
                _COMMON_USER_VIEWS,
            ),
        ),
    ),
)
