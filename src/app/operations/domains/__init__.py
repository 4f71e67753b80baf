"""Módulos de domínio: cada um declara PREFIX e DOMAIN (DomainModule).

ALL_DOMAINS é a lista fixa carregada pelo registry no startup.
"""

from app.operations.domains import (
    analytics,
    assets,
    connection,
    custom_fields,
    issues,
    locations,
    notifications,
    parts,
    purchase_orders,
    slas,
    teams,
    tickets,
    users,
    views,
)

ALL_DOMAINS = (
    tickets.DOMAIN,
    users.DOMAIN,
    assets.DOMAIN,
    locations.DOMAIN,
    parts.DOMAIN,
    teams.DOMAIN,
    slas.DOMAIN,
    views.DOMAIN,
    notifications.DOMAIN,
    purchase_orders.DOMAIN,
    custom_fields.DOMAIN,
    analytics.DOMAIN,
    issues.DOMAIN,
    connection.DOMAIN,
)

__all__ = ["ALL_DOMAINS"]
