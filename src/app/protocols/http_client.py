"""Protocolos HTTP usados pelo app.

Evita dependência direta da camada api: handlers de operação recebem
qualquer objeto que satisfaça IncidentIQClientProtocol.
"""

from __future__ import annotations

from typing import Any, Protocol

from app.protocols.models import ConnectionStatus, PagedResult, SearchRequest


class TicketsApi(Protocol):
    async def search(self, request: SearchRequest) -> PagedResult: ...
    async def get(self, ticket_id: str) -> Any | None: ...
    async def create(self, data: dict[str, Any]) -> Any | None: ...
    async def update(self, ticket_id: str, data: dict[str, Any]) -> Any | None: ...
    async def close(self, ticket_id: str, resolution: str | None = None) -> bool: ...
    async def statuses(self) -> PagedResult: ...
    async def priorities(self) -> PagedResult: ...
    async def assets(self, ticket_id: str) -> PagedResult: ...
    async def sla(self, ticket_id: str) -> Any | None: ...
    async def set_status(self, ticket_id: str, status: str) -> Any | None: ...
    async def set_urgency(self, ticket_id: str, urgent: bool) -> Any | None: ...
    async def set_sensitivity(self, ticket_id: str, sensitive: bool) -> Any | None: ...
    async def confirm_issue(self, ticket_id: str, confirmed: bool) -> Any | None: ...
    async def cancel(self, ticket_id: str) -> Any | None: ...
    async def unassign(self, ticket_id: str, target: str) -> Any | None: ...
    async def mark_duplicate(self, ticket_id: str, original_ticket_id: str) -> Any | None: ...
    async def wizards(self) -> PagedResult: ...
    async def wizards_by_site(self, site_id: str) -> PagedResult: ...


class UsersApi(Protocol):
    async def search(self, request: SearchRequest) -> PagedResult: ...
    async def get(self, user_id: str) -> Any | None: ...
    async def current(self) -> Any | None: ...
    async def agents(self) -> PagedResult: ...
    async def grade_statistics(self, location_id: str | None = None) -> PagedResult: ...
    async def location_statistics(self) -> PagedResult: ...
    async def by_location(self, location_id: str) -> PagedResult: ...
    async def quick_search(self, query: str, limit: int = 10) -> PagedResult: ...


class AssetsApi(Protocol):
    async def search(self, request: SearchRequest) -> PagedResult: ...
    async def get(self, asset_id: str) -> Any | None: ...
    async def find_by_tag(self, asset_tag: str) -> Any | None: ...
    async def search_by_tag(self, pattern: str) -> PagedResult: ...
    async def find_by_serial(self, serial_number: str) -> Any | None: ...
    async def for_user(self, user_id: str, include_inactive: bool = False) -> PagedResult: ...
    async def by_room(self, room_id: str) -> PagedResult: ...
    async def status_types(self) -> PagedResult: ...
    async def funding_types(self) -> PagedResult: ...
    async def history(self, asset_id: str) -> PagedResult: ...
    async def inventory_counts(self, include_deleted: bool = False) -> list[dict[str, Any]]: ...
    async def spares(self, asset_tag: str) -> PagedResult: ...
    async def manufacturers(self) -> PagedResult: ...


class LocationsApi(Protocol):
    async def all(self) -> PagedResult: ...
    async def search(self, request: SearchRequest) -> PagedResult: ...
    async def get(self, location_id: str) -> Any | None: ...
    async def rooms(self) -> PagedResult: ...
    async def building_rooms(self, building_id: str) -> PagedResult: ...
    async def buildings(self) -> PagedResult: ...
    async def types(self) -> PagedResult: ...
    async def assets(self, location_id: str) -> PagedResult: ...
    async def find_special_rooms(
        self, room_type: str, building_id: str | None = None
    ) -> PagedResult: ...
    async def find_by_code(self, code: str) -> Any | None: ...


class PartsApi(Protocol):
    async def all(self) -> PagedResult: ...
    async def get(self, part_id: str) -> Any | None: ...
    async def suppliers(self) -> PagedResult: ...
    async def search(self, request: SearchRequest) -> PagedResult: ...


class TeamsApi(Protocol):
    async def all(
        self, page_index: int = 0, page_size: int = 100, sort_direction: str = ...
    ) -> PagedResult: ...
    async def search(self, request: SearchRequest) -> PagedResult: ...
    async def get(self, team_id: str) -> Any | None: ...
    async def members(self, team_id: str) -> PagedResult: ...


class SlasApi(Protocol):
    async def all(self) -> PagedResult: ...
    async def metrics(self) -> PagedResult: ...
    async def metric_types(self) -> PagedResult: ...


class ViewsApi(Protocol):
    async def all(self) -> PagedResult: ...
    async def for_current_user(self) -> PagedResult: ...
    async def tickets(self) -> PagedResult: ...
    async def assets(self) -> PagedResult: ...
    async def users(self) -> PagedResult: ...


class NotificationsApi(Protocol):
    async def ticket_emails(self, ticket_id: str) -> PagedResult: ...
    async def query(
        self,
        include_read: bool = True,
        include_archived: bool = False,
        include_unarchived: bool = True,
    ) -> PagedResult: ...
    async def unread(self) -> PagedResult: ...
    async def unarchived(self) -> PagedResult: ...
    async def mark_all_read(self) -> bool: ...
    async def mark_read(self, notification_id: str) -> bool: ...


class PurchaseOrdersApi(Protocol):
    async def all(
        self,
        status: str | None = None,
        page_index: int = 0,
        page_size: int = 100,
        sort_direction: str = ...,
    ) -> PagedResult: ...
    async def get(self, purchase_order_id: str) -> Any | None: ...


class CustomFieldsApi(Protocol):
    async def search(self, request: SearchRequest) -> PagedResult: ...
    async def types(self) -> PagedResult: ...


class AnalyticsApi(Protocol):
    async def reports(self) -> PagedResult: ...
    async def report(self, report_id: str) -> Any | None: ...


class IssuesApi(Protocol):
    async def for_site(self) -> PagedResult: ...
    async def types(self) -> PagedResult: ...
    async def search_types(self, request: SearchRequest) -> PagedResult: ...
    async def get_type(self, type_id: str) -> Any | None: ...
    async def categories(self, parent_id: str | None = None) -> PagedResult: ...
    async def priorities(self) -> PagedResult: ...
    async def common(self) -> PagedResult: ...


class IncidentIQClientProtocol(Protocol):
    """Contrato da sessão IncidentIQ consumida pelos handlers."""

    tickets: TicketsApi
    users: UsersApi
    assets: AssetsApi
    locations: LocationsApi
    parts: PartsApi
    teams: TeamsApi
    slas: SlasApi
    views: ViewsApi
    notifications: NotificationsApi
    purchase_orders: PurchaseOrdersApi
    custom_fields: CustomFieldsApi
    analytics: AnalyticsApi
    issues: IssuesApi

    @property
    def base_url(self) -> str: ...

    async def test_connection(self) -> ConnectionStatus: ...
