"""Recurso de tickets (IT Help Desk)."""

from __future__ import annotations

from typing import Any

from api.connectors.incidentiq import endpoints as ep
from api.connectors.incidentiq.resources._base import Resource
from api.payload_builders.incidentiq import build_search_payload
from app.protocols.models import PagedResult, SearchRequest

# Alvos aceitos por /tickets/{id}/unassign/{target}; "sla" usa rota própria
UNASSIGN_TARGETS = ("user", "team", "sla")


class TicketsResource(Resource):
    async def search(self, request: SearchRequest) -> PagedResult:
        return await self._session.fetch_collection(
            ep.TICKET_SEARCH, body=build_search_payload(request)
        )

    async def get(self, ticket_id: str) -> Any | None:
        return await self._session.fetch_entity(ep.TICKET_GET, ticket_id=ticket_id)

    async def create(self, data: dict[str, Any]) -> Any | None:
        return await self._session.fetch_entity(
            ep.TICKET_CREATE, body=data, absorb_not_found=False
        )

    async def update(self, ticket_id: str, data: dict[str, Any]) -> Any | None:
        return await self._session.fetch_entity(
            ep.TICKET_UPDATE, body=data, absorb_not_found=False, ticket_id=ticket_id
        )

    async def close(self, ticket_id: str, resolution: str | None = None) -> bool:
        """Fecha o ticket; True somente quando o upstream confirma Success."""
        response = await self._session.fetch_raw(
            ep.TICKET_CLOSE, body={"Resolution": resolution}, ticket_id=ticket_id
        )
        return isinstance(response, dict) and response.get("Success") is True

    async def statuses(self) -> PagedResult:
        return await self._session.fetch_collection(ep.TICKET_STATUSES)

    async def priorities(self) -> PagedResult:
        return await self._session.fetch_collection(ep.TICKET_PRIORITIES)

    async def assets(self, ticket_id: str) -> PagedResult:
        return await self._session.fetch_collection(ep.TICKET_ASSETS, ticket_id=ticket_id)

    async def sla(self, ticket_id: str) -> Any | None:
        return await self._session.fetch_entity(ep.TICKET_SLA, ticket_id=ticket_id)

    async def set_status(self, ticket_id: str, status: str) -> Any | None:
        return await self._session.fetch_entity(
            ep.TICKET_SET_STATUS, absorb_not_found=False, ticket_id=ticket_id, status=status
        )

    async def set_urgency(self, ticket_id: str, urgent: bool) -> Any | None:
        return await self._action(ticket_id, "mark-urgent" if urgent else "mark-not-urgent")

    async def set_sensitivity(self, ticket_id: str, sensitive: bool) -> Any | None:
        return await self._action(
            ticket_id, "mark-sensitive" if sensitive else "mark-not-sensitive"
        )

    async def confirm_issue(self, ticket_id: str, confirmed: bool) -> Any | None:
        return await self._action(ticket_id, "confirm-issue" if confirmed else "unconfirm-issue")

    async def cancel(self, ticket_id: str) -> Any | None:
        return await self._action(ticket_id, "cancel")

    async def unassign(self, ticket_id: str, target: str) -> Any | None:
        if target not in UNASSIGN_TARGETS:
            raise ValueError(f"unassign target must be one of: {', '.join(UNASSIGN_TARGETS)}")
        if target == "sla":
            return await self._session.fetch_entity(
                ep.TICKET_UNASSIGN_SLA, absorb_not_found=False, ticket_id=ticket_id
            )
        return await self._session.fetch_entity(
            ep.TICKET_UNASSIGN, absorb_not_found=False, ticket_id=ticket_id, target=target
        )

    async def mark_duplicate(self, ticket_id: str, original_ticket_id: str) -> Any | None:
        return await self._session.fetch_entity(
            ep.TICKET_MARK_DUPLICATE,
            absorb_not_found=False,
            ticket_id=ticket_id,
            original_ticket_id=original_ticket_id,
        )

    async def wizards(self) -> PagedResult:
        return await self._session.fetch_collection(ep.TICKET_WIZARDS)

    async def wizards_by_site(self, site_id: str) -> PagedResult:
        return await self._session.fetch_collection(ep.TICKET_WIZARDS_BY_SITE, site_id=site_id)

    async def _action(self, ticket_id: str, action: str) -> Any | None:
        return await self._session.fetch_entity(
            ep.TICKET_ACTION, absorb_not_found=False, ticket_id=ticket_id, action=action
        )
