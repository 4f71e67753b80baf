"""Textos de "não encontrado" por domínio sobre a sessão HTTP real."""

from __future__ import annotations

import pytest

from api.connectors.incidentiq import HttpClientConfig, IncidentIQHttpClient
from app.operations import Dispatcher, build_registry
from tests.fakes.fake_incidentiq_api import API_KEY, BASE_URL, FakeIncidentIQApi


def _dispatcher(api: FakeIncidentIQApi) -> Dispatcher:
    client = IncidentIQHttpClient(HttpClientConfig(base_url=BASE_URL, transport=api.transport), API_KEY)
    return Dispatcher(build_registry(), client)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("name", "args", "expected"),
    [
        ("user_get_details", {"userId": "u-404"}, "User or resource not found."),
        ("location_get_details", {"locationId": "l-404"}, "Location or resource not found."),
        (
            "asset_find_by_tag",
            {"assetTag": "T-404"},
            "No asset found with the specified identifier.",
        ),
        (
            "asset_find_by_serial",
            {"serialNumber": "SN-404"},
            "No asset found with the specified identifier.",
        ),
        ("parts_get_details", {"partId": "p-404"}, "Part or resource not found."),
    ],
)
async def test_entity_404_uses_domain_text(name: str, args: dict, expected: str) -> None:
    # Sem rotas cadastradas: todo path responde 404
    api = FakeIncidentIQApi()

    envelope = await _dispatcher(api).dispatch(name, args)

    assert not envelope.is_error
    assert envelope.text == expected
    assert len(api.requests) == 1


@pytest.mark.asyncio
async def test_ticket_lookup_still_absorbs_404() -> None:
    api = FakeIncidentIQApi()

    envelope = await _dispatcher(api).dispatch("ticket_get", {"ticketId": "t-404"})

    assert not envelope.is_error
    assert envelope.text == "Ticket not found."


@pytest.mark.asyncio
async def test_entity_lookup_other_errors_surface() -> None:
    api = FakeIncidentIQApi().add("GET", "/users/u-1", {"Message": "boom"}, status_code=500)

    envelope = await _dispatcher(api).dispatch("user_get_details", {"userId": "u-1"})

    assert envelope.is_error
    assert envelope.text == "Error: IncidentIQ API error 500: boom"
