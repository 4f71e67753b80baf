"""Operação de diagnóstico de conectividade com o distrito."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.operations.descriptor import DomainModule, operation

if TYPE_CHECKING:
    from app.protocols import IncidentIQClientProtocol

PREFIX = "connection"


async def _test(client: IncidentIQClientProtocol, args: dict[str, Any]) -> str:
    status = await client.test_connection()
    if status.connected:
        return (
            "Connected to IncidentIQ\n"
            f"District: {status.district_name or 'Unknown'}\n"
            f"API Base URL: {client.base_url}"
        )
    return (
        f"Connection failed: {status.error}\n"
        "Please check your API key and base URL configuration."
    )


DOMAIN = DomainModule(
    prefix=PREFIX,
    operations=(
        operation(
            "connection_test",
            "Test connectivity and credentials against the configured district",
            _test,
        ),
    ),
)
