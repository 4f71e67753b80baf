"""Operações de relatórios analíticos."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, operation, string
from app.operations.handlers import bullet_list, first_of, yes_no

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "analytics"


def _display_order(report: Any) -> float:
    order = first_of(report, "DisplayOrder", default=0)
    return order if isinstance(order, (int, float)) else 0


async def _list_reports(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    result = await client.analytics.reports()
    if result.is_empty:
        return "No analytics reports available."
    reports = sorted(result.items, key=_display_order)
    listing = bullet_list(
        reports,
        lambda report: (
            f"• {first_of(report, 'Name')}"
            + (f" - {report['Subtitle']}" if report.get("Subtitle") else "")
            + f"\n  ID: {first_of(report, 'ReportId')}"
            f"\n  Key: {first_of(report, 'ReportKey')}"
        ),
    )
    return f"Available Analytics Reports ({result.total_count}):\n\n{listing}"


async def _get_report(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    report_id = args["reportId"]
    report = await client.analytics.report(report_id)
    if not report:
        return f"Report {report_id} not found."
    return (
        "Report Details:\n"
        f"Name: {first_of(report, 'Name')}\n"
        f"Subtitle: {first_of(report, 'Subtitle')}\n"
        f"Report Key: {first_of(report, 'ReportKey')}\n"
        f"Product ID: {first_of(report, 'ProductId')}\n"
        f"Site ID: {first_of(report, 'SiteId')}\n"
        f"Display Order: {first_of(report, 'DisplayOrder')}\n"
        f"Sidebar Visible: {yes_no(report.get('IsSidebarVisible'))}\n"
        f"ID: {first_of(report, 'ReportId', default=report_id)}"
    )


DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation("analytics_list_reports", "List available analytics reports", _list_reports),
        operation(
            "analytics_get_report",
            "Get details of an analytics report",
            _get_report,
            string("reportId", "Report ID (GUID)", required=True),
        ),
    ),
)
