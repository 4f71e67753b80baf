"""Operações de notificações e e-mails de tickets."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, boolean, operation, string
from app.operations.handlers import first_of

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "notification"


def format_email(email: Any) -> dict[str, Any]:
    return {
        "id": first_of(email, "EmailId", default=None),
        "subject": first_of(email, "Subject", default=None),
        "body": first_of(email, "Body", default=None),
        "from": first_of(email, "From", "FromAddress", default=None),
        "to": first_of(email, "To", "ToAddress", default=None),
        "created_date": first_of(email, "CreatedDate", default=None),
        "sent_date": first_of(email, "SentDate", default=None),
        "is_sent": first_of(email, "IsSent", default=None),
    }


def format_notification(notification: Any) -> dict[str, Any]:
    return {
        "id": first_of(notification, "NotificationId", default=None),
        "type": first_of(notification, "NotificationType", default=None),
        "subject": first_of(notification, "Subject", "Title", default=None),
        "body": first_of(notification, "Body", "Message", default=None),
        "created_date": first_of(notification, "CreatedDate", default=None),
        "is_read": bool(first_of(notification, "IsRead", "Read", default=False)),
        "is_archived": bool(first_of(notification, "IsArchived", "Archived", default=False)),
        "entity_type": first_of(notification, "EntityType", default=None),
        "entity_id": first_of(notification, "EntityId", default=None),
        "severity": first_of(notification, "Severity", default=None),
        "category": first_of(notification, "Category", default=None),
    }


async def _get_ticket_emails(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    ticket_id = args["ticket_id"]
    result = await client.notifications.ticket_emails(ticket_id)
    return {
        "ticket_id": ticket_id,
        "count": len(result.items),
        "emails": [format_email(email) for email in result.items],
        "message": "Retrieved ticket emails" if result.items else "No emails found for this ticket",
    }


async def _query(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    # Read/Unarchived ligados salvo False explícito; Archived só com True explícito
    include_read = args.get("include_read") is not False
    include_archived = args.get("include_archived") is True
    include_unarchived = args.get("include_unarchived") is not False
    result = await client.notifications.query(include_read, include_archived, include_unarchived)
    return {
        "count": len(result.items),
        "notifications": [format_notification(item) for item in result.items],
        "filters": {
            "IncludeRead": include_read,
            "IncludeArchived": include_archived,
            "IncludeUnarchived": include_unarchived,
        },
        "message": f"Found {len(result.items)} notifications",
    }


async def _get_unread(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    result = await client.notifications.unread()
    count = len(result.items)
    return {
        "count": count,
        "notifications": [format_notification(item) for item in result.items],
        "message": f"You have {count} unread notifications" if count else "No unread notifications",
    }


async def _get_unarchived(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    result = await client.notifications.unarchived()
    return {
        "count": len(result.items),
        "notifications": [format_notification(item) for item in result.items],
        "message": f"Found {len(result.items)} unarchived notifications",
    }


async def _mark_all_read(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    success = await client.notifications.mark_all_read()
    return {
        "success": success,
        "message": (
            "All notifications marked as read" if success else "Failed to mark notifications as read"
        ),
    }


async def _mark_read(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    notification_id = args["notification_id"]
    success = await client.notifications.mark_read(notification_id)
    return {
        "notification_id": notification_id,
        "success": success,
        "message": "Notification marked as read" if success else "Failed to mark notification as read",
    }


DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation(
            "notification_get_ticket_emails",
            "List emails sent for a ticket",
            _get_ticket_emails,
            string("ticket_id", "Ticket ID (GUID)", required=True),
        ),
        operation(
            "notification_query",
            "Query notifications by read/archived state",
            _query,
            boolean("include_read", "Include read notifications (default: true)"),
            boolean("include_archived", "Include archived notifications (default: false)"),
            boolean("include_unarchived", "Include unarchived notifications (default: true)"),
        ),
        operation("notification_get_unread", "List unread notifications", _get_unread),
        operation("notification_get_unarchived", "List unarchived notifications", _get_unarchived),
        operation("notification_mark_all_read", "Mark all notifications as read", _mark_all_read),
        operation(
            "notification_mark_read",
            "Mark one notification as read",
            _mark_read,
            string("notification_id", "Notification ID (GUID)", required=True),
        ),
    ),
)
