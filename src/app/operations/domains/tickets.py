"""Operações de tickets (IT Help Desk)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, boolean, number, operation, string
from app.operations.handlers import (
    bullet_list,
    first_of,
    int_arg,
    page_line,
    pick,
    yes_no,
)
from app.protocols.models import SearchRequest

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "ticket"

_DEFAULT_PAGE_SIZE = 20

_CREATE_FIELDS = {
    "subject": "Subject",
    "description": "Description",
    "categoryId": "CategoryId",
    "priorityId": "PriorityId",
    "locationId": "LocationId",
    "requestorId": "RequestorId",
    "assignedToId": "AssignedToId",
    "assetId": "AssetId",
    "dueDate": "DueDate",
    "customFields": "CustomFields",
}

_UPDATE_FIELDS = {
    "subject": "Subject",
    "description": "Description",
    "statusId": "StatusId",
    "priorityId": "PriorityId",
    "categoryId": "CategoryId",
    "assignedToId": "AssignedToId",
    "dueDate": "DueDate",
    "customFields": "CustomFields",
}


def _ticket_line(ticket: dict[str, Any]) -> str:
    return (
        f"- #{first_of(ticket, 'TicketNumber')}: {first_of(ticket, 'Subject')}\n"
        f"  Status: {first_of(ticket, 'Status', 'StatusName')}\n"
        f"  Created: {first_of(ticket, 'CreatedDate')}\n"
        f"  ID: {first_of(ticket, 'TicketId')}"
    )


def _ticket_details(ticket: dict[str, Any]) -> str:
    return (
        f"Ticket #{first_of(ticket, 'TicketNumber')}:\n"
        f"Subject: {first_of(ticket, 'Subject')}\n"
        f"Status: {first_of(ticket, 'Status', 'StatusName')}\n"
        f"Priority: {first_of(ticket, 'Priority', default='Normal')}\n"
        f"Created: {first_of(ticket, 'CreatedDate')}\n"
        f"Description: {first_of(ticket, 'Description', default='No description')}\n"
        f"Requestor: {first_of(ticket, 'RequestorName', default='Unknown')}\n"
        f"Assigned To: {first_of(ticket, 'AssignedToName', default='Unassigned')}\n"
        f"Location: {first_of(ticket, 'LocationName', default='Not specified')}\n"
        f"Urgent: {yes_no(ticket.get('IsUrgent'))}\n"
        f"Sensitive: {yes_no(ticket.get('IsSensitive'))}\n"
        f"ID: {first_of(ticket, 'TicketId')}"
    )


async def _search(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    page_index = int_arg(args, "pageIndex", 0)
    page_size = int_arg(args, "pageSize", _DEFAULT_PAGE_SIZE)
    request = SearchRequest(
        search_text=args.get("searchText") or None,
        only_show_deleted=bool(args.get("onlyShowDeleted")),
        page_index=page_index,
        page_size=page_size,
    )
    result = await client.tickets.search(request)
    if result.is_empty:
        return "No tickets found matching your search criteria."

    listing = bullet_list(result.items, _ticket_line)
    return (
        f"Found {result.total_count} tickets (showing {len(result.items)}):\n\n"
        f"{listing}\n\n{page_line(page_index, page_size, result.total_count)}"
    )


async def _get(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    ticket = await client.tickets.get(args["ticketId"])
    if not ticket:
        return "Ticket not found."
    return _ticket_details(ticket)


async def _create(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    data = {"Subject": args["subject"], **pick(args, _CREATE_FIELDS)}
    ticket = await client.tickets.create(data)
    if not ticket:
        return "Ticket creation returned no ticket."
    return f"Successfully created ticket.\n\n{_ticket_details(ticket)}"


async def _update(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    ticket_id = args["ticketId"]
    data = pick(args, _UPDATE_FIELDS)
    if not data:
        return "No fields to update were provided."
    ticket = await client.tickets.update(ticket_id, data)
    if not ticket:
        return f"Ticket {ticket_id} updated."
    return f"Successfully updated ticket.\n\n{_ticket_details(ticket)}"


async def _close(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    closed = await client.tickets.close(args["ticketId"], args.get("resolution"))
    if closed:
        return "Successfully closed the ticket."
    return "The ticket could not be closed."


async def _get_statuses(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.tickets.statuses()
    if result.is_empty:
        return "No ticket statuses found."
    listing = bullet_list(
        result.items,
        lambda status: (
            f"- {first_of(status, 'Name', 'StatusName')} ({first_of(status, 'StatusType')})\n"
            f"  ID: {first_of(status, 'TicketStatusId', 'StatusId')}"
        ),
    )
    return f"Available Ticket Statuses ({result.total_count}):\n\n{listing}"


async def _get_priorities(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.tickets.priorities()
    if result.is_empty:
        return "No ticket priorities found."
    listing = bullet_list(
        result.items,
        lambda priority: (
            f"- {first_of(priority, 'Name')} (Level: {first_of(priority, 'Level')})\n"
            f"  ID: {first_of(priority, 'TicketPriorityId', 'PriorityId')}"
        ),
    )
    return f"Available Ticket Priorities ({result.total_count}):\n\n{listing}"


async def _get_assets(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.tickets.assets(args["ticketId"])
    if result.is_empty:
        return "No assets linked to this ticket."
    listing = bullet_list(
        result.items,
        lambda asset: (
            f"- {first_of(asset, 'Name', 'AssetTag')}\n"
            f"  Type: {first_of(asset, 'AssetTypeName')}\n"
            f"  Serial: {first_of(asset, 'SerialNumber')}\n"
            f"  ID: {first_of(asset, 'AssetId')}"
        ),
    )
    return f"Assets Linked to Ticket ({result.total_count}):\n\n{listing}"


async def _get_sla(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    sla = await client.tickets.sla(args["ticketId"])
    if not sla:
        return "No SLA information found for this ticket."
    return (
        "SLA Information:\n"
        f"Name: {first_of(sla, 'Name', default='Not specified')}\n"
        f"Response Time: {first_of(sla, 'ResponseTime')}\n"
        f"Resolution Time: {first_of(sla, 'ResolutionTime')}\n"
        f"Status: {first_of(sla, 'Status', default='Active')}\n"
        f"Breached: {yes_no(first_of(sla, 'IsBreached', default=False))}"
    )


async def _update_status(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    status = args["status"]
    await client.tickets.set_status(args["ticketId"], status)
    return f'Successfully updated ticket status to "{status}".'


async def _set_urgency(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    urgent = bool(args["isUrgent"])
    await client.tickets.set_urgency(args["ticketId"], urgent)
    return f"Successfully marked ticket as {'urgent' if urgent else 'not urgent'}."


async def _set_sensitivity(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    sensitive = bool(args["isSensitive"])
    await client.tickets.set_sensitivity(args["ticketId"], sensitive)
    return f"Successfully marked ticket as {'sensitive' if sensitive else 'not sensitive'}."


async def _confirm_issue(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    confirmed = bool(args["isConfirmed"])
    await client.tickets.confirm_issue(args["ticketId"], confirmed)
    return f"Successfully {'confirmed' if confirmed else 'unconfirmed'} the issue."


async def _cancel(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    await client.tickets.cancel(args["ticketId"])
    return "Successfully cancelled the ticket."


async def _unassign(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    target = args["unassignFrom"]
    await client.tickets.unassign(args["ticketId"], target)
    return f"Successfully unassigned ticket from {target}."


async def _mark_duplicate(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    original = args["originalTicketId"]
    await client.tickets.mark_duplicate(args["ticketId"], original)
    return f"Successfully marked ticket as duplicate of {original}."


def _wizard_line(wizard: dict[str, Any], with_product: bool) -> str:
    icon = first_of(wizard, "Icon", default="")
    lines = [
        f"- {first_of(wizard, 'Name')}{f' ({icon})' if icon else ''}",
        f"  ID: {first_of(wizard, 'TicketWizardCategoryId')}",
    ]
    if with_product:
        lines.append(f"  Product: {first_of(wizard, 'ProductId')}")
    lines.append(f"  {first_of(wizard, 'Description', default='No description')}")
    return "\n".join(lines)


async def _get_wizards(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.tickets.wizards()
    if result.is_empty:
        return "No ticket wizards found."
    listing = bullet_list(result.items, lambda wizard: _wizard_line(wizard, with_product=True))
    return f"Available Ticket Wizards ({result.total_count}):\n\n{listing}"


async def _get_wizards_by_site(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    site_id = args["siteId"]
    result = await client.tickets.wizards_by_site(site_id)
    if result.is_empty:
        return "No ticket wizards found for this site."
    listing = bullet_list(result.items, lambda wizard: _wizard_line(wizard, with_product=False))
    return f"Ticket Wizards for Site {site_id} ({result.total_count}):\n\n{listing}"


_TICKET_ID = string("ticketId", "The ticket ID (GUID)", required=True)

DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation(
            "ticket_search",
            "Search for tickets with optional filters and pagination",
            _search,
            string("searchText", "Optional text to search for in tickets"),
            boolean("onlyShowDeleted", "Show only deleted tickets (default: false)"),
            number("pageSize", "Number of results per page (default: 20, max: 100)"),
            number("pageIndex", "Page number to retrieve (0-based, default: 0)"),
        ),
        operation("ticket_get", "Get full details of a ticket", _get, _TICKET_ID),
        operation(
            "ticket_create",
            "Create a new ticket",
            _create,
            string("subject", "Ticket subject", required=True),
            string("description", "Problem description"),
            string("categoryId", "Category ID (GUID)"),
            string("priorityId", "Priority ID (GUID)"),
            string("locationId", "Location ID (GUID)"),
            string("requestorId", "Requesting user ID (GUID)"),
            string("assignedToId", "Assignee user ID (GUID)"),
            string("assetId", "Related asset ID (GUID)"),
            string("dueDate", "Due date (ISO 8601)"),
        ),
        operation(
            "ticket_update",
            "Update fields of an existing ticket",
            _update,
            _TICKET_ID,
            string("subject", "New subject"),
            string("description", "New description"),
            string("statusId", "New status ID (GUID)"),
            string("priorityId", "New priority ID (GUID)"),
            string("categoryId", "New category ID (GUID)"),
            string("assignedToId", "New assignee user ID (GUID)"),
            string("dueDate", "New due date (ISO 8601)"),
        ),
        operation(
            "ticket_close",
            "Close a ticket with an optional resolution note",
            _close,
            _TICKET_ID,
            string("resolution", "Resolution note"),
        ),
        operation("ticket_get_statuses", "List available ticket statuses", _get_statuses),
        operation("ticket_get_priorities", "List available ticket priorities", _get_priorities),
        operation("ticket_get_assets", "List assets linked to a ticket", _get_assets, _TICKET_ID),
        operation("ticket_get_sla", "Get SLA information for a ticket", _get_sla, _TICKET_ID),
        operation(
            "ticket_update_status",
            "Change the status of a ticket",
            _update_status,
            _TICKET_ID,
            string("status", "The new status name or ID", required=True),
        ),
        operation(
            "ticket_set_urgency",
            "Mark a ticket as urgent or not urgent",
            _set_urgency,
            _TICKET_ID,
            boolean("isUrgent", "True to mark urgent, false to clear", required=True),
        ),
        operation(
            "ticket_set_sensitivity",
            "Mark a ticket as sensitive or not sensitive",
            _set_sensitivity,
            _TICKET_ID,
            boolean("isSensitive", "True to mark sensitive, false to clear", required=True),
        ),
        operation(
            "ticket_confirm_issue",
            "Confirm or unconfirm the issue reported on a ticket",
            _confirm_issue,
            _TICKET_ID,
            boolean("isConfirmed", "True to confirm, false to unconfirm", required=True),
        ),
        operation("ticket_cancel", "Cancel a ticket", _cancel, _TICKET_ID),
        operation(
            "ticket_unassign",
            "Remove the user, team or SLA assignment from a ticket",
            _unassign,
            _TICKET_ID,
            string("unassignFrom", "What to unassign", required=True, enum=("user", "team", "sla")),
        ),
        operation(
            "ticket_mark_duplicate",
            "Mark a ticket as duplicate of another ticket",
            _mark_duplicate,
            _TICKET_ID,
            string("originalTicketId", "The original ticket ID (GUID)", required=True),
        ),
        operation("ticket_get_wizards", "List ticket wizard categories", _get_wizards),
        operation(
            "ticket_get_wizards_by_site",
            "List ticket wizards available for a site",
            _get_wizards_by_site,
            string("siteId", "The site/location ID (GUID) to get wizards for", required=True),
        ),
    ),
)
