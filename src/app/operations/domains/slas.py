"""Operações de SLA (acordos de nível de serviço)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, operation, string
from app.operations.handlers import first_of

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "sla"


async def _list(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    result = await client.slas.all()
    if result.is_empty:
        return {"count": 0, "slas": [], "message": "No SLAs configured in the system"}
    return {"count": len(result.items), "slas": result.items, "message": "Retrieved configured SLAs"}


async def _get_metrics(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    result = await client.slas.metrics()
    return {
        "count": len(result.items),
        "metrics": result.items,
        "message": "Retrieved SLA metrics" if result.items else "No SLA metrics found",
    }


async def _get_metric_types(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    result = await client.slas.metric_types()
    return {
        "count": len(result.items),
        "types": result.items,
        "available_types": [
            first_of(kind, "Name", "MetricTypeName", default=None) for kind in result.items
        ],
        "message": "Retrieved SLA metric types",
    }


async def _get_ticket_status(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    ticket_id = args["ticket_id"]
    status = await client.tickets.sla(ticket_id)
    if not status:
        return {"ticket_id": ticket_id, "has_sla": False, "message": "No SLA assigned to this ticket"}
    return {
        "ticket_id": ticket_id,
        "has_sla": True,
        "sla_status": status,
        "message": "Retrieved ticket SLA status",
    }


DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation("sla_list", "List configured SLAs", _list),
        operation("sla_get_metrics", "List SLA metrics", _get_metrics),
        operation("sla_get_metric_types", "List SLA metric types", _get_metric_types),
        operation(
            "sla_get_ticket_status",
            "SLA status of a ticket",
            _get_ticket_status,
            string("ticket_id", "Ticket ID (GUID)", required=True),
        ),
    ),
)
