"""Testes dos recursos por domínio contra o upstream falso."""

from __future__ import annotations

import logging

import pytest

from api.connectors.incidentiq import HttpClientConfig, HttpError, IncidentIQHttpClient
from app.protocols.models import Filter, SearchRequest
from tests.fakes.fake_incidentiq_api import (
    API_KEY,
    BASE_URL,
    MANUFACTURER_FIXTURES,
    FakeIncidentIQApi,
    search_tickets,
)


def _client(api: FakeIncidentIQApi) -> IncidentIQHttpClient:
    return IncidentIQHttpClient(HttpClientConfig(base_url=BASE_URL, transport=api.transport), API_KEY)


class TestTickets:
    @pytest.mark.asyncio
    async def test_search_keeps_upstream_total_count(self) -> None:
        api = FakeIncidentIQApi().add("POST", "/tickets", responder=search_tickets)

        result = await _client(api).tickets.search(
            SearchRequest(search_text="chromebook", page_index=0, page_size=20)
        )

        assert [ticket["TicketId"] for ticket in result.items] == ["t-001"]
        assert result.total_count == 2
        assert api.last_json() == {
            "OnlyShowDeleted": False,
            "FilterByViewPermission": False,
            "SearchText": "chromebook",
            "Paging": {"PageIndex": 0, "PageSize": 20},
        }

    @pytest.mark.asyncio
    async def test_close_requires_explicit_success(self) -> None:
        api = FakeIncidentIQApi().add("PUT", "/tickets/t-1/close", {"Success": True})
        client = _client(api)

        assert await client.tickets.close("t-1", "Replaced battery") is True
        assert api.last_json() == {"Resolution": "Replaced battery"}

        api.add("PUT", "/tickets/t-1/close", {"Success": "true"})
        assert await client.tickets.close("t-1") is False

    @pytest.mark.asyncio
    async def test_get_missing_ticket_is_none(self) -> None:
        assert await _client(FakeIncidentIQApi()).tickets.get("nope") is None

    @pytest.mark.asyncio
    async def test_unassign_rejects_unknown_target(self) -> None:
        api = FakeIncidentIQApi()

        with pytest.raises(ValueError, match="unassign target"):
            await _client(api).tickets.unassign("t-1", "location")
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_unassign_sla_uses_dedicated_route(self) -> None:
        api = FakeIncidentIQApi().add("POST", "/tickets/t-1/unassign-sla", {})

        await _client(api).tickets.unassign("t-1", "sla")

        assert api.last_request.url.path.endswith("/tickets/t-1/unassign-sla")

    @pytest.mark.asyncio
    async def test_urgency_action_path(self) -> None:
        api = FakeIncidentIQApi().add("POST", "/tickets/t-1/mark-not-urgent", {})

        await _client(api).tickets.set_urgency("t-1", urgent=False)

        assert api.last_request.method == "POST"


class TestAssets:
    @pytest.mark.asyncio
    async def test_manufacturers_items_envelope(self) -> None:
        api = FakeIncidentIQApi().add(
            "GET",
            "/assets/manufacturers/global",
            {"Items": MANUFACTURER_FIXTURES, "ItemCount": 2},
        )

        result = await _client(api).assets.manufacturers()

        assert result.items == MANUFACTURER_FIXTURES
        assert result.total_count == 2

    @pytest.mark.asyncio
    async def test_inventory_counts_from_key_value_object(self) -> None:
        api = FakeIncidentIQApi().add("POST", "/assets/count", {"Chromebook": 120, "iPad": 40})

        counts = await _client(api).assets.inventory_counts()

        assert counts == [{"Name": "Chromebook", "Count": 120}, {"Name": "iPad", "Count": 40}]

    @pytest.mark.asyncio
    async def test_inventory_counts_from_items_envelope(self) -> None:
        api = FakeIncidentIQApi().add(
            "POST",
            "/assets/count",
            {"Items": [{"Category": "Laptop", "Value": 7}, "ignored", {"Name": "Tablet", "Count": 0}]},
        )

        counts = await _client(api).assets.inventory_counts(include_deleted=True)

        assert counts == [{"Name": "Laptop", "Count": 7}, {"Name": "Tablet", "Count": 0}]
        assert api.last_json()["OnlyShowDeleted"] is True

    @pytest.mark.asyncio
    async def test_user_devices_including_inactive(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/assets/for/u-1/true", [{"AssetTag": "A1"}])

        result = await _client(api).assets.for_user("u-1", include_inactive=True)

        assert result.total_count == 1


class TestLocations:
    @pytest.mark.asyncio
    async def test_buildings_direct(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/locations/buildings", [{"Name": "High School"}])

        result = await _client(api).locations.buildings()

        assert result.items == [{"Name": "High School"}]
        assert len(api.requests) == 1

    @pytest.mark.asyncio
    async def test_buildings_fall_back_to_all_locations(self, caplog: pytest.LogCaptureFixture) -> None:
        everything = [
            {"Name": "Springfield District", "LocationTypeName": "District"},
            {"Name": "Elementary", "LocationTypeName": "School Building", "ParentLocationId": "d"},
            {"Name": "Annex", "LocationTypeName": "Site"},
            {"Name": "Room 101", "LocationTypeName": "Room", "ParentLocationId": "b"},
        ]
        api = (
            FakeIncidentIQApi()
            .add("GET", "/locations/buildings", {"Items": []})
            .add("GET", "/locations/all", everything)
        )

        with caplog.at_level(logging.INFO):
            result = await _client(api).locations.buildings()

        assert [location["Name"] for location in result.items] == ["Elementary", "Annex"]
        assert result.total_count == 2
        fallback = [record for record in caplog.records if getattr(record, "fallback_used", False)]
        assert [record.component for record in fallback] == ["location_buildings"]
        assert fallback[0].path == "/locations/all"
        assert fallback[0].getMessage() == "iiq_fallback_used"

    @pytest.mark.asyncio
    async def test_find_by_code_falls_back_to_exact_abbreviation(self) -> None:
        api = FakeIncidentIQApi().add(
            "POST",
            "/locations",
            {"Items": [{"Name": "Springfield High", "Abbreviation": "SHS2"}, {"Name": "Springfield HS", "Abbreviation": "SHS"}]},
        )

        location = await _client(api).locations.find_by_code("SHS")

        assert location == {"Name": "Springfield HS", "Abbreviation": "SHS"}
        assert api.last_json()["SearchText"] == "SHS"

    @pytest.mark.asyncio
    async def test_find_by_code_without_match(self) -> None:
        api = FakeIncidentIQApi().add("POST", "/locations", {"Items": []})

        assert await _client(api).locations.find_by_code("XYZ") is None


class TestNotifications:
    @pytest.mark.asyncio
    async def test_mark_read_checks_body_status(self) -> None:
        api = (
            FakeIncidentIQApi()
            .add("POST", "/notifications/n-1/read", {"StatusCode": 200})
            .add("POST", "/notifications/n-2/read", {"StatusCode": 400})
        )
        client = _client(api)

        assert await client.notifications.mark_read("n-1") is True
        assert await client.notifications.mark_read("n-2") is False

    @pytest.mark.asyncio
    async def test_query_sends_flags(self) -> None:
        api = FakeIncidentIQApi().add("POST", "/notifications", {"Items": []})

        await _client(api).notifications.query(include_archived=True)

        assert api.last_json() == {
            "IncludeRead": True,
            "IncludeArchived": True,
            "IncludeUnarchived": True,
        }


class TestPurchaseOrders:
    @pytest.mark.asyncio
    async def test_status_filter_and_paging_query(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/purchaseorders/Open", {"Items": [{"PurchaseOrderId": "po-1"}]})

        result = await _client(api).purchase_orders.all(status="Open", page_size=25)

        assert result.total_count == 1
        assert dict(api.last_request.url.params) == {"$p": "0", "$s": "25", "$d": "Descending"}


class TestEntityLookups:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("lookup", "path"),
        [
            (lambda client: client.users.get("u-404"), "/users/u-404"),
            (lambda client: client.locations.get("l-404"), "/locations/l-404"),
            (lambda client: client.parts.get("p-404"), "/parts/p-404"),
            (lambda client: client.assets.find_by_tag("T-404"), "/assets/assettag/T-404"),
            (lambda client: client.assets.find_by_serial("SN-404"), "/assets/serial/SN-404"),
        ],
    )
    async def test_404_reaches_domain_handler(self, lookup, path: str) -> None:
        with pytest.raises(HttpError) as excinfo:
            await lookup(_client(FakeIncidentIQApi()))

        assert excinfo.value.is_not_found
        assert excinfo.value.path == path


class TestIssues:
    @pytest.mark.asyncio
    async def test_types_accepts_bare_array(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/issues/types", [{"Name": "Broken Screen"}])

        result = await _client(api).issues.types()

        assert result.items == [{"Name": "Broken Screen"}]
        assert result.total_count == 1

    @pytest.mark.asyncio
    async def test_search_types_posts_search_body(self) -> None:
        api = FakeIncidentIQApi().add("POST", "/issues/types", {"Items": [], "ItemCount": 0})

        await _client(api).issues.search_types(
            SearchRequest(
                search_text="wifi",
                filters=Filter.collect(("Scope", "Tickets")),
                page_index=0,
                page_size=50,
            )
        )

        assert api.last_json() == {
            "OnlyShowDeleted": False,
            "FilterByViewPermission": False,
            "SearchText": "wifi",
            "Filters": [{"Facet": "Scope", "Id": "Tickets"}],
            "Paging": {"PageIndex": 0, "PageSize": 50},
        }

    @pytest.mark.asyncio
    async def test_categories_parent_query(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/issues/categories", {"Items": [{"Name": "Hardware"}]})
        client = _client(api)

        await client.issues.categories()
        assert dict(api.last_request.url.params) == {}

        await client.issues.categories("cat-1")
        assert dict(api.last_request.url.params) == {"parentId": "cat-1"}
