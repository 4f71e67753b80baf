"""Operações de ordens de compra."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, number, operation, string
from app.operations.handlers import int_arg, paged_payload

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "purchaseorder"

_DEFAULT_PAGE_SIZE = 100


async def _get_all(client: IncidentIQClientProtocol, args: dict[str, Any]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "status": args.get("status") or None,
        "page_index": int_arg(args, "pageIndex", 0),
        "page_size": int_arg(args, "pageSize", _DEFAULT_PAGE_SIZE),
    }
    if args.get("sortDirection"):
        kwargs["sort_direction"] = args["sortDirection"]
    return paged_payload(await client.purchase_orders.all(**kwargs))


async def _get(client: IncidentIQClientProtocol, args: dict[str, Any]) -> Any:
    purchase_order_id = args["purchaseOrderId"]
    order = await client.purchase_orders.get(purchase_order_id)
    if order is None:
        return {
            "purchase_order_id": purchase_order_id,
            "found": False,
            "message": "Purchase order not found",
        }
    return order


DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation(
            "purchaseorder_get_all",
            "List purchase orders, optionally restricted to a status",
            _get_all,
            string("status", "Status segment (e.g. pending, approved, completed)"),
            number("pageIndex", "Page number (0-based)"),
            number("pageSize", "Results per page (default: 100)"),
            string("sortDirection", "Sort direction", enum=("Ascending", "Descending")),
        ),
        operation(
            "purchaseorder_get",
            "Get details of a purchase order",
            _get,
            string("purchaseOrderId", "Purchase order ID (GUID)", required=True),
        ),
    ),
)
