"""Operações de issues: tipos, categorias e prioridades de triagem.

Issues classificam tickets e definem o roteamento para as equipes.
"""

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
    yes_no,
)
from app.protocols.models import Filter, SearchRequest

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "issues"

_DEFAULT_PAGE_SIZE = 50
_K12_PAGE_SIZE = 100
_SUMMARY_LIMIT = 10
_GROUP_LIMIT = 5
_DESCRIPTION_PREVIEW = 50

_NOT_FOUND = "Issue or resource not found."
_K12_UNAVAILABLE = (
    "This K-12 specific endpoint may not be available. "
    "Try using issues_search_types with appropriate filters instead."
)

_SCOPES = ("Tickets", "Assets", "Users", "All")
_DEVICE_TYPES = ("Chromebook", "iPad", "Laptop", "Hotspot", "All")

_COMMON_K12_ISSUES = """Common K-12 Issues (Based on Patterns):

Password Reset:
  • Student password reset
  • Parent portal password
  • Staff account locked

Device Issues:
  • Chromebook won't turn on
  • Broken screen
  • Lost charger
  • Keyboard not working

Network Problems:
  • Can't connect to WiFi
  • Internet is slow
  • Blocked website

Classroom Technology:
  • Projector not working
  • No sound from speakers
  • Interactive board frozen

Account Access:
  • Can't login to Google
  • Missing from class roster
  • Parent can't see grades"""

_KEYWORD_ISSUES: dict[str, tuple[str, ...]] = {
    "password": ("Password Reset", "Account Locked", "Can't Login"),
    "chromebook": ("Chromebook Won't Turn On", "Broken Screen", "Keyboard Issue"),
    "wifi": ("Can't Connect to WiFi", "WiFi Slow", "Network Error"),
    "projector": ("Projector No Display", "No Signal", "Remote Not Working"),
    "printer": ("Can't Print", "Paper Jam", "Out of Toner"),
    "google": ("Google Login Failed", "Google Drive Full", "Classroom Sync"),
    "parent": ("Parent Portal Access", "Parent Can't Login", "Missing Student"),
    "screen": ("Broken Screen", "Screen Flickering", "Touch Not Working"),
    "sound": ("No Audio", "Microphone Not Working", "Speaker Issues"),
    "charger": ("Lost Charger", "Charger Not Working", "Wrong Charger"),
}

# Grupos da listagem de sala de aula, na ordem de exibição
_CLASSROOM_GROUPS = (
    ("Projector Issues", ("projector",)),
    ("Interactive Board Issues", ("board", "smart")),
    ("Audio System Issues", ("audio", "sound")),
)
_CLASSROOM_OTHER = "Other Classroom Issues"


def _issue_name(issue: Any) -> str:
    return str(first_of(issue, "Name", default="Unnamed issue"))


def _active_only(items: list[Any], include_inactive: bool) -> list[Any]:
    if include_inactive:
        return list(items)
    return [item for item in items if not isinstance(item, dict) or item.get("IsActive") is not False]


@absorbs_not_found(_NOT_FOUND)
async def _get_site_issues(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.issues.for_site()
    issues = _active_only(result.items, bool(args.get("includeInactive")))
    if not issues:
        return "No issues found for this site."

    def label(issue: Any) -> str:
        description = first_of(issue, "Description", default="")
        if not description:
            return _issue_name(issue)
        return f"{_issue_name(issue)}\n    {str(description)[:_DESCRIPTION_PREVIEW]}..."

    groups = group_by(
        issues, lambda issue: str(first_of(issue, "Category", "Scope", default="Uncategorized"))
    )
    return grouped_listing(f"Site Issues ({len(issues)} total):", groups, label, limit=_GROUP_LIMIT)


@absorbs_not_found(_NOT_FOUND)
async def _get_types(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.issues.types()
    if result.is_empty:
        return "No issue types found."

    types = _active_only(result.items, bool(args.get("includeInactive")))
    scope = args.get("scope")
    if scope and scope != "All":
        types = [item for item in types if isinstance(item, dict) and item.get("Scope") == scope]

    def label(issue_type: Any) -> str:
        text = _issue_name(issue_type)
        if first_of(issue_type, "Scope", default=""):
            text += f" ({issue_type['Scope']})"
        if first_of(issue_type, "IsDefault", default=False):
            text += " [default]"
        return text

    groups = group_by(types, lambda item: str(first_of(item, "Category", default="General")))
    return grouped_listing(f"Issue Types ({len(types)}):", groups, label)


@absorbs_not_found(_NOT_FOUND)
async def _search_types(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    request = SearchRequest(
        search_text=args.get("searchText") or None,
        only_show_deleted=bool(args.get("includeDeleted")),
        filters=Filter.collect(
            ("Scope", args.get("scope")),
            ("Category", args.get("category")),
            ("IsCommon", "true" if args.get("isCommon") else None),
        ),
        page_index=int_arg(args, "pageIndex", 0),
        page_size=int_arg(args, "pageSize", _DEFAULT_PAGE_SIZE),
    )
    result = await client.issues.search_types(request)
    if result.is_empty:
        return "No issue types found matching your criteria."

    def line(issue_type: dict[str, Any]) -> str:
        category = f" ({issue_type['Category']})" if issue_type.get("Category") else ""
        text = (
            f"• {_issue_name(issue_type)}{category}\n"
            f"  Scope: {first_of(issue_type, 'Scope')}"
            f" | Active: {yes_no(issue_type.get('IsActive'))}"
        )
        metadata = issue_type.get("Metadata")
        if isinstance(metadata, dict):
            text += f"\n  Usage: {metadata.get('UsageCount') or 0} times"
        return text

    shown = result.items[:_SUMMARY_LIMIT]
    return (
        f"Found {result.total_count} issue types (showing {len(shown)}):\n\n"
        f"{bullet_list(shown, line)}{more_line(len(result.items), len(shown), 'types')}"
    )


@absorbs_not_found(_NOT_FOUND)
async def _get_type_details(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    issue_type = await client.issues.get_type(args["typeId"])
    if not issue_type:
        return "Issue type not found."
    lines = [
        "Issue Type Details:",
        f"Name: {_issue_name(issue_type)}",
        f"Scope: {first_of(issue_type, 'Scope')}",
        f"Category: {first_of(issue_type, 'Category', default='General')}",
        f"Default: {yes_no(first_of(issue_type, 'IsDefault', default=False))}",
        f"Active: {yes_no(first_of(issue_type, 'IsActive', default=False))}",
    ]
    sla = issue_type.get("SLA") if isinstance(issue_type, dict) else None
    if isinstance(sla, dict):
        lines.append(
            f"SLA: response {sla.get('ResponseTime', 'N/A')}"
            f" | resolution {sla.get('ResolutionTime', 'N/A')}"
        )
    lines.append(f"ID: {first_of(issue_type, 'IssueTypeId')}")
    return "\n".join(lines)


@absorbs_not_found(_NOT_FOUND)
async def _get_categories(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.issues.categories(args.get("parentId") or None)
    categories = _active_only(result.items, bool(args.get("includeInactive")))
    if not categories:
        return "No issue categories found."

    def line(category: Any) -> str:
        text = f"• {_issue_name(category)}"
        if first_of(category, "Description", default=""):
            text += f" - {category['Description']}"
        if first_of(category, "Path", default=""):
            text += f"\n  Path: {category['Path']}"
        return text

    listing = bullet_list(categories, line, separator="\n")
    return f"Issue Categories ({len(categories)}):\n\n{listing}"


def _priority_level(priority: Any) -> int:
    level = first_of(priority, "Level", default=None)
    return level if isinstance(level, int) and not isinstance(level, bool) else 0


@absorbs_not_found(_NOT_FOUND)
async def _get_priorities(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.issues.priorities()
    if result.is_empty:
        return "No priority levels found."

    include_sla = bool(args.get("includeSLA"))

    def line(priority: Any) -> str:
        text = f"• Level {_priority_level(priority)}: {_issue_name(priority)}"
        sla = priority.get("SLA") if isinstance(priority, dict) else None
        if include_sla and isinstance(sla, dict):
            text += (
                f"\n  SLA: respond in {sla.get('ResponseMinutes', 'N/A')} min"
                f" | resolve in {sla.get('ResolutionMinutes', 'N/A')} min"
            )
        return text

    priorities = sorted(result.items, key=_priority_level)
    listing = bullet_list(priorities, line, separator="\n")
    return f"Priority Levels ({len(priorities)}):\n\n{listing}"


def _classroom_group(issue: Any) -> str:
    name = _issue_name(issue).lower()
    for title, keywords in _CLASSROOM_GROUPS:
        if any(keyword in name for keyword in keywords):
            return title
    return _CLASSROOM_OTHER


@absorbs_not_found(_K12_UNAVAILABLE)
async def _get_classroom_tech(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    terms = [
        term
        for flag, term in (
            ("includeProjector", "projector"),
            ("includeBoard", "board interactive smartboard"),
            ("includeAudio", "audio microphone speaker"),
        )
        if args.get(flag) is not False
    ]
    request = SearchRequest(
        search_text=" ".join(terms) or None,
        filters=Filter.collect(("Category", "Classroom"), ("Location", args.get("buildingId"))),
        page_index=0,
        page_size=_K12_PAGE_SIZE,
    )
    result = await client.issues.search_types(request)
    if result.is_empty:
        return "No classroom technology issues found."

    groups = group_by(result.items, _classroom_group)
    lines = ["Classroom Technology Issues:"]
    for title in (*(title for title, _ in _CLASSROOM_GROUPS), _CLASSROOM_OTHER):
        members = groups.get(title)
        if not members:
            continue
        if title == _CLASSROOM_OTHER:
            members = members[:_GROUP_LIMIT]
        lines.append(f"\n{title}:")
        lines.extend(f"  • {_issue_name(member)}" for member in members)
    return "\n".join(lines)


def _device_group(issue: Any) -> str:
    name = _issue_name(issue).lower()
    for device in _DEVICE_TYPES[:-1]:
        if device.lower() in name:
            return device
    return "Other"


@absorbs_not_found(_K12_UNAVAILABLE)
async def _get_student_devices(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    device_type = args.get("deviceType")
    if device_type and device_type != "All":
        devices = device_type.lower()
    else:
        devices = "chromebook ipad laptop hotspot device"
    request = SearchRequest(
        search_text=f"student {devices}",
        filters=Filter.collect(("Grade", args.get("gradeLevel"))),
        page_index=0,
        page_size=_K12_PAGE_SIZE,
    )
    result = await client.issues.search_types(request)
    if result.is_empty:
        return "No student device issues found."

    return grouped_listing(
        f"Student Device Issues ({len(result.items)} total):",
        group_by(result.items, _device_group),
        _issue_name,
        limit=_GROUP_LIMIT,
    )


@absorbs_not_found(_NOT_FOUND)
async def _get_common_issues(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.issues.common()
    if result.is_empty:
        return _COMMON_K12_ISSUES

    shown = result.items[: int_arg(args, "limit", _SUMMARY_LIMIT)]

    def entry(position: int, issue: Any) -> str:
        text = f"{position}. {_issue_name(issue)}\n   {first_of(issue, 'Description', default='No description')}"
        resolution = issue.get("Resolution") if isinstance(issue, dict) else None
        if isinstance(resolution, dict):
            steps = resolution.get("Steps") or []
            text += f"\n   Resolution: {steps[0] if steps else 'See details'}"
        return text

    listing = "\n\n".join(entry(position, issue) for position, issue in enumerate(shown, start=1))
    return f"Top {len(shown)} Common Issues:\n\n{listing}"


async def _find_by_keyword(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    keyword = str(args["keyword"])
    related = _KEYWORD_ISSUES.get(keyword.lower(), (f"{keyword} Issue",))
    listing = "\n".join(f"• {issue}" for issue in related)
    return (
        f'Issues related to "{keyword}":\n\n{listing}\n\n'
        "To create a ticket for any of these issues, use the appropriate template "
        "or provide more details."
    )


_INCLUDE_INACTIVE = boolean("includeInactive", "Include inactive entries")

DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation(
            "issues_get_site_issues",
            "Issues available for the site, grouped by category",
            _get_site_issues,
            _INCLUDE_INACTIVE,
        ),
        operation(
            "issues_get_types",
            "List issue types grouped by category",
            _get_types,
            string("scope", "Filter by scope", enum=_SCOPES),
            _INCLUDE_INACTIVE,
        ),
        operation(
            "issues_search_types",
            "Search issue types by text, scope and category",
            _search_types,
            string("searchText", "Search in type names and descriptions"),
            string("scope", "Filter by scope", enum=_SCOPES),
            string("category", "Filter by category"),
            boolean("isCommon", "Only common issue types"),
            boolean("includeDeleted", "Include deleted types"),
            number("pageSize", "Results per page (default: 50)"),
            number("pageIndex", "Page number (0-based)"),
        ),
        operation(
            "issues_get_type_details",
            "Get details of an issue type",
            _get_type_details,
            string("typeId", "Issue type ID (GUID)", required=True),
        ),
        operation(
            "issues_get_categories",
            "List issue categories",
            _get_categories,
            string("parentId", "Parent category ID for subcategories"),
            _INCLUDE_INACTIVE,
        ),
        operation(
            "issues_get_priorities",
            "List priority levels ordered by level",
            _get_priorities,
            boolean("includeSLA", "Include SLA response and resolution times"),
        ),
        operation(
            "issues_get_classroom_tech",
            "Classroom technology issues (projectors, boards, audio)",
            _get_classroom_tech,
            string("buildingId", "Filter by school building"),
            boolean("includeProjector", "Include projector issues"),
            boolean("includeBoard", "Include interactive board issues"),
            boolean("includeAudio", "Include audio system issues"),
        ),
        operation(
            "issues_get_student_devices",
            "Student device issues grouped by device type",
            _get_student_devices,
            string("deviceType", "Filter by device type", enum=_DEVICE_TYPES),
            string("gradeLevel", "Filter by grade"),
        ),
        operation(
            "issues_get_common_issues",
            "Most frequent issues, with a K-12 baseline when none are recorded",
            _get_common_issues,
            number("limit", "Number of issues to return (default: 10)"),
        ),
        operation(
            "issues_find_by_keyword",
            "Suggest issue names related to a keyword",
            _find_by_keyword,
            string("keyword", "Keyword such as password, wifi or projector", required=True),
        ),
    ),
)
