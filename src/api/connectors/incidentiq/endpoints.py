"""Catálogo de endpoints da API IncidentIQ.

Cada entrada fixa método, path e o formato de resposta declarado. A API
não publica schema: os formatos abaixo foram levantados por sondagem
em produção e o normalizer tolera variações em qualquer um deles.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from app.protocols.models import ResponseShape

_ARRAY = ResponseShape.BARE_ARRAY
_ITEMS = ResponseShape.ITEMS_ENVELOPE
_DATA = ResponseShape.DATA_ENVELOPE
_OBJECT = ResponseShape.BARE_OBJECT
_ITEMS_OR_ARRAY = ResponseShape.ITEMS_OR_ARRAY


@dataclass(frozen=True)
class Endpoint:
    """Endpoint upstream com formato de resposta declarado."""

    method: str
    path: str
    shape: ResponseShape

    def format(self, **params: object) -> str:
        """Resolve o template do path, escapando cada segmento."""
        if not params:
            return self.path
        encoded = {key: quote(str(value), safe="") for key, value in params.items()}
        return self.path.format(**encoded)

    def matches(self, observed: ResponseShape | None) -> bool:
        if observed is None:
            return False
        if self.shape is _ITEMS_OR_ARRAY:
            return observed in (_ARRAY, _ITEMS)
        return observed is self.shape


# Tickets
TICKET_SEARCH = Endpoint("POST", "/tickets", _ITEMS)
TICKET_GET = Endpoint("GET", "/tickets/{ticket_id}", _DATA)
TICKET_CREATE = Endpoint("POST", "/tickets/new", _DATA)
TICKET_UPDATE = Endpoint("PUT", "/tickets/{ticket_id}", _DATA)
TICKET_CLOSE = Endpoint("PUT", "/tickets/{ticket_id}/close", _OBJECT)
TICKET_STATUSES = Endpoint("GET", "/tickets/statuses", _ITEMS)
TICKET_PRIORITIES = Endpoint("GET", "/tickets/priorities", _ITEMS)
TICKET_ASSETS = Endpoint("GET", "/tickets/{ticket_id}/assets", _ITEMS)
TICKET_SLA = Endpoint("GET", "/tickets/{ticket_id}/sla", _OBJECT)
TICKET_SET_STATUS = Endpoint("POST", "/tickets/{ticket_id}/status/{status}", _OBJECT)
TICKET_ACTION = Endpoint("POST", "/tickets/{ticket_id}/{action}", _OBJECT)
TICKET_UNASSIGN = Endpoint("POST", "/tickets/{ticket_id}/unassign/{target}", _OBJECT)
TICKET_UNASSIGN_SLA = Endpoint("POST", "/tickets/{ticket_id}/unassign-sla", _OBJECT)
TICKET_MARK_DUPLICATE = Endpoint(
    "POST", "/tickets/{ticket_id}/mark-as-duplicate/{original_ticket_id}", _OBJECT
)
TICKET_WIZARDS = Endpoint("GET", "/tickets/wizards", _ITEMS)
TICKET_WIZARDS_BY_SITE = Endpoint("GET", "/tickets/wizards/site/{site_id}", _ITEMS)

# Users
USER_SEARCH = Endpoint("POST", "/users", _ITEMS)
USER_GET = Endpoint("GET", "/users/{user_id}", _DATA)
USER_CURRENT = Endpoint("GET", "/users/me", _DATA)
USER_AGENTS = Endpoint("GET", "/users/agents", _ITEMS_OR_ARRAY)
USER_GRADE_STATISTICS = Endpoint("GET", "/users/statistics/grades", _ITEMS_OR_ARRAY)
USER_LOCATION_STATISTICS = Endpoint("GET", "/users/statistics/locations", _ITEMS_OR_ARRAY)
USER_BY_LOCATION = Endpoint("GET", "/users/location/{location_id}", _ITEMS)
USER_QUICK_SEARCH = Endpoint("GET", "/users/quick", _ITEMS_OR_ARRAY)
USER_VIEWS = Endpoint("GET", "/users/views", _ITEMS)

# Assets
ASSET_SEARCH = Endpoint("POST", "/assets", _ITEMS)
ASSET_GET = Endpoint("GET", "/assets/{asset_id}", _DATA)
ASSET_BY_TAG = Endpoint("GET", "/assets/assettag/{asset_tag}", _OBJECT)
ASSET_TAG_SEARCH = Endpoint("GET", "/assets/assettag/search/{pattern}", _ITEMS)
ASSET_BY_SERIAL = Endpoint("GET", "/assets/serial/{serial_number}", _OBJECT)
ASSET_FOR_USER = Endpoint("GET", "/assets/for/{user_id}", _ITEMS)
ASSET_FOR_USER_ALL = Endpoint("GET", "/assets/for/{user_id}/true", _ITEMS)
ASSET_BY_ROOM = Endpoint("GET", "/assets/rooms/{room_id}", _ITEMS)
ASSET_STATUS_TYPES = Endpoint("GET", "/assets/status/types", _ITEMS)
ASSET_FUNDING_TYPES = Endpoint("GET", "/assets/funding/types", _ITEMS)
ASSET_ACTIVITIES = Endpoint("GET", "/assets/{asset_id}/activities", _ITEMS)
ASSET_COUNT = Endpoint("POST", "/assets/count", _ITEMS_OR_ARRAY)
ASSET_SPARES = Endpoint("GET", "/assets/spares/assettag/{asset_tag}", _ITEMS)
ASSET_MANUFACTURERS = Endpoint("GET", "/assets/manufacturers/global", _ITEMS)

# Locations
LOCATION_ALL = Endpoint("GET", "/locations/all", _ITEMS_OR_ARRAY)
LOCATION_SEARCH = Endpoint("POST", "/locations", _ITEMS)
LOCATION_GET = Endpoint("GET", "/locations/{location_id}", _DATA)
LOCATION_ROOMS = Endpoint("GET", "/locations/rooms", _ITEMS_OR_ARRAY)
LOCATION_BUILDING_ROOMS = Endpoint("GET", "/locations/{building_id}/rooms", _ITEMS_OR_ARRAY)
LOCATION_BUILDINGS = Endpoint("GET", "/locations/buildings", _ITEMS_OR_ARRAY)
LOCATION_TYPES = Endpoint("GET", "/locations/types", _ITEMS_OR_ARRAY)
LOCATION_ASSETS = Endpoint("GET", "/locations/{location_id}/assets", _ITEMS_OR_ARRAY)
LOCATION_BY_CODE = Endpoint("GET", "/locations/code/{code}", _OBJECT)

# Parts
PARTS_ALL = Endpoint("GET", "/parts", _ITEMS_OR_ARRAY)
PARTS_SEARCH = Endpoint("POST", "/parts", _ITEMS)
PARTS_GET = Endpoint("GET", "/parts/{part_id}", _DATA)
PARTS_SUPPLIERS = Endpoint("GET", "/parts/suppliers", _ITEMS_OR_ARRAY)

# Teams
TEAM_ALL = Endpoint("GET", "/teams/all", _ITEMS_OR_ARRAY)
TEAM_SEARCH = Endpoint("POST", "/teams", _ITEMS)
TEAM_GET = Endpoint("GET", "/teams/{team_id}", _DATA)
TEAM_MEMBERS = Endpoint("GET", "/teams/{team_id}/members", _ITEMS_OR_ARRAY)

# SLAs
SLA_LIST = Endpoint("GET", "/slas", _ITEMS)
SLA_METRICS = Endpoint("GET", "/metrics", _ITEMS)
SLA_METRIC_TYPES = Endpoint("GET", "/metrics/types", _ITEMS)

# Views
VIEW_ALL = Endpoint("GET", "/views", _ITEMS)
VIEW_TICKETS = Endpoint("GET", "/views/tickets", _ITEMS)
VIEW_ASSETS = Endpoint("GET", "/views/assets", _ITEMS)
VIEW_USERS = Endpoint("GET", "/views/users", _ITEMS)

# Notifications
NOTIFICATION_TICKET_EMAILS = Endpoint(
    "GET", "/notifications/emails/for/ticket/{ticket_id}", _ITEMS
)
NOTIFICATION_QUERY = Endpoint("POST", "/notifications", _ITEMS)
NOTIFICATION_UNREAD = Endpoint("GET", "/notifications/unread", _ITEMS)
NOTIFICATION_UNARCHIVED = Endpoint("GET", "/notifications/unarchived", _ITEMS)
NOTIFICATION_MARK_ALL_READ = Endpoint("POST", "/notifications/all-read", _OBJECT)
NOTIFICATION_MARK_READ = Endpoint("POST", "/notifications/{notification_id}/read", _OBJECT)

# Purchase orders
PURCHASE_ORDER_ALL = Endpoint("GET", "/purchaseorders", _ITEMS_OR_ARRAY)
PURCHASE_ORDER_BY_STATUS = Endpoint("GET", "/purchaseorders/{status}", _ITEMS_OR_ARRAY)
PURCHASE_ORDER_GET = Endpoint("GET", "/purchaseorders/{purchase_order_id}", _DATA)

# Custom fields
CUSTOM_FIELD_SEARCH = Endpoint("POST", "/custom-fields", _ITEMS_OR_ARRAY)
CUSTOM_FIELD_TYPES = Endpoint("GET", "/custom-fields/types", _ITEMS)

# Analytics
ANALYTICS_REPORTS = Endpoint("GET", "/analytics/reports", _ITEMS)
ANALYTICS_REPORT = Endpoint("GET", "/analytics/reports/{report_id}", _DATA)

# Issues
ISSUE_SITE = Endpoint("GET", "/issues/site", _ITEMS_OR_ARRAY)
ISSUE_TYPES = Endpoint("GET", "/issues/types", _ITEMS_OR_ARRAY)
ISSUE_TYPE_SEARCH = Endpoint("POST", "/issues/types", _ITEMS)
ISSUE_TYPE_GET = Endpoint("GET", "/issues/types/{type_id}", _DATA)
ISSUE_CATEGORIES = Endpoint("GET", "/issues/categories", _ITEMS_OR_ARRAY)
ISSUE_PRIORITIES = Endpoint("GET", "/issues/priorities", _ITEMS_OR_ARRAY)
ISSUE_COMMON = Endpoint("GET", "/issues/common", _ITEMS_OR_ARRAY)
