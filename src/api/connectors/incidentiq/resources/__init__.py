"""Recursos por domínio sobre a sessão IncidentIQ."""

from .assets import AssetsResource
from .catalog import AnalyticsResource, CustomFieldsResource, ViewsResource
from .issues import IssuesResource
from .locations import LocationsResource
from .procurement import PartsResource, PurchaseOrdersResource
from .service_desk import NotificationsResource, SlasResource, TeamsResource
from .tickets import TicketsResource
from .users import UsersResource

__all__ = [
    "AnalyticsResource",
    "AssetsResource",
    "CustomFieldsResource",
    "IssuesResource",
    "LocationsResource",
    "NotificationsResource",
    "PartsResource",
    "PurchaseOrdersResource",
    "SlasResource",
    "TeamsResource",
    "TicketsResource",
    "UsersResource",
    "ViewsResource",
]
