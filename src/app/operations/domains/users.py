"""Operações de usuários (alunos, equipe, agentes de TI)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, boolean, number, operation, string
from app.operations.handlers import (
    absorbs_not_found,
    active_label,
    bullet_list,
    display_name,
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

PREFIX = "user"

_DEFAULT_PAGE_SIZE = 100
_SUMMARY_LIMIT = 10
_DIRECTORY_LIMIT = 20
_GROUP_LIMIT = 5

_NOT_FOUND = "User or resource not found."
_NO_USER_CONTEXT = "Current user endpoint not available. The API key may not have user context."


def _count_of(stat: Any) -> int:
    value = first_of(stat, "Count", "Value", default=0)
    return int(value) if isinstance(value, (int, float)) else 0


async def _search_advanced(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    page_index = int_arg(args, "pageIndex", 0)
    page_size = int_arg(args, "pageSize", _DEFAULT_PAGE_SIZE)
    request = SearchRequest(
        search_text=args.get("searchText") or None,
        only_show_deleted=bool(args.get("includeDeleted")),
        filters=Filter.collect(
            ("View", args.get("viewId")),
            ("UserType", args.get("userType")),
            ("Grade", args.get("grade")),
            ("Location", args.get("locationId")),
        ),
        page_index=page_index,
        page_size=page_size,
    )
    result = await client.users.search(request)
    if result.is_empty:
        return "No users found matching your criteria."

    shown = result.items[:_SUMMARY_LIMIT]
    listing = bullet_list(
        shown,
        lambda user: (
            f"• {display_name(user)}\n"
            f"  Type: {first_of(user, 'UserTypeName', default='Unknown')}"
            f" | Email: {first_of(user, 'Email')}\n"
            f"  Location: {first_of(user, 'LocationName')}"
            + (f" | Grade: {user['Grade']}" if user.get("Grade") else "")
            + f"\n  Username: {first_of(user, 'Username')} | Status: {active_label(user)}"
        ),
    )
    return (
        f"Found {result.total_count} users (showing {len(shown)}):\n\n"
        f"{listing}{more_line(len(result.items), len(shown), 'users')}\n\n"
        f"{page_line(page_index, page_size, result.total_count)}"
    )


async def _get_students(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    request = SearchRequest(
        filters=Filter.collect(
            ("UserType", "Student"),
            ("Grade", args.get("grade")),
            ("Location", args.get("locationId")),
        ),
        page_index=0,
        page_size=int_arg(args, "pageSize", _DEFAULT_PAGE_SIZE),
    )
    result = await client.users.search(request)
    if result.is_empty:
        return "No students found."

    groups = group_by(result.items, lambda student: str(first_of(student, "Grade", default="Unassigned")))
    return grouped_listing(
        f"Student Directory ({result.total_count} students):",
        {f"Grade {grade}": members for grade, members in groups.items()},
        lambda student: display_name(student)
        + (f" - Room {student['Homeroom']}" if student.get("Homeroom") else ""),
        limit=_GROUP_LIMIT,
    )


async def _get_staff(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    request = SearchRequest(
        filters=Filter.collect(("UserType", "Staff"), ("Location", args.get("locationId"))),
        page_index=0,
        page_size=_DEFAULT_PAGE_SIZE,
    )
    result = await client.users.search(request)
    if result.is_empty:
        return "No staff members found."

    shown = result.items[:_DIRECTORY_LIMIT]
    listing = bullet_list(
        shown,
        lambda staff: (
            f"• {display_name(staff)}\n"
            f"  Role: {first_of(staff, 'Role')} | Email: {first_of(staff, 'Email')}\n"
            f"  Location: {first_of(staff, 'LocationName')}"
        ),
    )
    return (
        f"Staff Directory ({result.total_count} members):\n\n"
        f"{listing}{more_line(len(result.items), len(shown), 'staff members')}"
    )


async def _get_all_agents(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.users.agents()
    if result.is_empty:
        return "No IT support agents found."

    shown = result.items[:_DIRECTORY_LIMIT]
    listing = bullet_list(
        shown,
        lambda agent: (
            f"• {display_name(agent)}\n"
            f"  Email: {first_of(agent, 'Email')} | Phone: {first_of(agent, 'PhoneNumber')}\n"
            f"  Location: {first_of(agent, 'LocationName')}"
        ),
    )
    return (
        f"IT Support Agents ({len(result.items)}):\n\n{listing}"
        f"{more_line(len(result.items), len(shown), 'agents')}\n\n"
        "These agents can be assigned to tickets and have elevated permissions"
    )


@absorbs_not_found(_NOT_FOUND)
async def _get_details(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    user = await client.users.get(args["userId"])
    if not user:
        return "User not found."

    lines = [
        "User Details:",
        f"Name: {display_name(user)}",
        f"Username: {first_of(user, 'Username')}",
        f"Email: {first_of(user, 'Email')}",
        f"Type: {first_of(user, 'UserTypeName', default='Unknown')}",
        f"Role: {first_of(user, 'Role')}",
        f"Location: {first_of(user, 'LocationName')}",
    ]
    if user.get("Grade"):
        lines.append(f"Grade: {user['Grade']}")
    if user.get("Homeroom"):
        lines.append(f"Homeroom: {user['Homeroom']}")
    lines += [
        f"Phone: {first_of(user, 'PhoneNumber')}",
        f"Mobile: {first_of(user, 'MobileNumber')}",
        f"Status: {active_label(user)}",
        f"Created: {first_of(user, 'CreatedDate')}",
        f"Last Login: {first_of(user, 'LastLoginDate', default='Never')}",
    ]
    return "\n".join(lines)


@absorbs_not_found(_NO_USER_CONTEXT)
async def _get_current(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    user = await client.users.current()
    if not user:
        return "Unable to retrieve current user information."
    permissions = user.get("Permissions") or []
    return (
        "Current User:\n"
        f"Name: {display_name(user)}\n"
        f"Username: {first_of(user, 'Username')}\n"
        f"Email: {first_of(user, 'Email')}\n"
        f"Role: {first_of(user, 'Role')}\n"
        f"Permissions: {len(permissions)} permissions"
    )


async def _statistics_grades(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.users.grade_statistics(args.get("locationId"))
    if result.is_empty:
        return "No grade statistics available."

    total = sum(_count_of(stat) for stat in result.items)
    listing = "\n".join(
        f"  Grade {first_of(stat, 'Name', 'Grade')}: {_count_of(stat)} students"
        for stat in result.items
    )
    return f"Student Distribution by Grade:\n\n{listing}\n\nTotal Students: {total}"


async def _statistics_locations(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.users.location_statistics()
    if result.is_empty:
        return "No location statistics available."

    total = sum(_count_of(stat) for stat in result.items)
    listing = "\n".join(
        f"  {first_of(stat, 'Name', 'LocationName')}: {_count_of(stat)} users"
        for stat in result.items
    )
    return f"User Distribution by Location:\n\n{listing}\n\nTotal Users: {total}"


@absorbs_not_found(_NOT_FOUND)
async def _get_by_location(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.users.by_location(args["locationId"])
    if result.is_empty:
        return "No users found for this location."

    groups = group_by(result.items, lambda user: str(first_of(user, "UserTypeName", default="Unknown")))
    return grouped_listing(
        f"Users at Location ({result.total_count} total):",
        groups,
        display_name,
        limit=_GROUP_LIMIT,
    )


async def _quick_search(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    query = args["query"]
    result = await client.users.quick_search(query, int_arg(args, "limit", 10))
    if result.is_empty:
        return f'No users found matching "{query}".'

    listing = "\n".join(
        f"• {display_name(user)} ({first_of(user, 'UserTypeName', default='Unknown')})"
        for user in result.items
    )
    return f'Quick Search Results for "{query}":\n\n{listing}'


_LOCATION_ID = string("locationId", "Location ID (GUID)")

DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation(
            "user_search_advanced",
            "Search users with filters for type, grade, location and saved views",
            _search_advanced,
            string("searchText", "Text to search in names, emails and usernames"),
            string("userType", "Filter by user type", enum=("Student", "Staff", "Parent", "Agent")),
            string("grade", "Filter by grade level"),
            _LOCATION_ID,
            string("viewId", "Saved view ID to apply"),
            boolean("includeDeleted", "Include deleted users"),
            number("pageSize", "Results per page (default: 100)"),
            number("pageIndex", "Page number (0-based)"),
        ),
        operation(
            "user_get_students",
            "Student directory grouped by grade",
            _get_students,
            string("grade", "Filter by grade level"),
            _LOCATION_ID,
            number("pageSize", "Maximum students to fetch (default: 100)"),
        ),
        operation("user_get_staff", "Staff directory", _get_staff, _LOCATION_ID),
        operation("user_get_all_agents", "List IT support agents", _get_all_agents),
        operation(
            "user_get_details",
            "Get full details of a user",
            _get_details,
            string("userId", "User ID (GUID)", required=True),
        ),
        operation("user_get_current", "Get the user bound to the API key", _get_current),
        operation(
            "user_statistics_grades",
            "Student counts per grade",
            _statistics_grades,
            _LOCATION_ID,
        ),
        operation(
            "user_statistics_locations",
            "User counts per location",
            _statistics_locations,
        ),
        operation(
            "user_get_by_location",
            "Users at a location grouped by type",
            _get_by_location,
            string("locationId", "Location ID (GUID)", required=True),
        ),
        operation(
            "user_quick_search",
            "Fast name lookup for users",
            _quick_search,
            string("query", "Name fragment to search", required=True),
            number("limit", "Max results (default: 10)"),
        ),
    ),
)
