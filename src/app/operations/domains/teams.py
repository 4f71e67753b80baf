"""Operações de equipes de atendimento.

Resultados estruturados: o envelope serializa como JSON indentado.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, number, operation, string
from app.operations.handlers import int_arg, paged_payload
from app.protocols.models import SearchRequest

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "team"

_LIST_PAGE_SIZE = 100
_SEARCH_PAGE_SIZE = 20


async def _get_all(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "page_index": int_arg(args, "pageIndex", 0),
        "page_size": int_arg(args, "pageSize", _LIST_PAGE_SIZE),
    }
    if args.get("sortDirection"):
        kwargs["sort_direction"] = args["sortDirection"]
    return paged_payload(await client.teams.all(**kwargs))


async def _search(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    request = SearchRequest(
        search_text=args.get("searchText") or None,
        page_index=int_arg(args, "pageIndex", 0),
        page_size=int_arg(args, "pageSize", _SEARCH_PAGE_SIZE),
    )
    return paged_payload(await client.teams.search(request))


async def _get(client: IncidentIQClientProtocol, args: dict[str, Any]) -> Any:
    team_id = args["teamId"]
    team = await client.teams.get(team_id)
    if team is None:
        return {"team_id": team_id, "found": False, "message": "Team not found"}
    return team


async def _get_members(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    team_id = args["teamId"]
    result = await client.teams.members(team_id)
    return {
        "team_id": team_id,
        "count": len(result.items),
        "members": result.items,
        "message": "Retrieved team members" if result.items else "No members in this team",
    }


_TEAM_ID = string("teamId", "Team ID (GUID)", required=True)

DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation(
            "team_get_all",
            "List all teams (paged)",
            _get_all,
            number("pageIndex", "Page number (0-based)"),
            number("pageSize", "Results per page (default: 100)"),
            string("sortDirection", "Sort direction", enum=("Ascending", "Descending")),
        ),
        operation(
            "team_search",
            "Search teams by name",
            _search,
            string("searchText", "Text to search in team names"),
            number("pageIndex", "Page number (0-based)"),
            number("pageSize", "Results per page (default: 20)"),
        ),
        operation("team_get", "Get details of a team", _get, _TEAM_ID),
        operation("team_get_members", "List members of a team", _get_members, _TEAM_ID),
    ),
)
