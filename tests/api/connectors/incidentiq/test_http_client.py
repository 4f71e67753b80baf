"""Testes da sessão HTTP IncidentIQ sobre httpx.MockTransport."""

from __future__ import annotations

import logging

import httpx
import pytest

from api.connectors.incidentiq import (
    HttpClientConfig,
    HttpError,
    IncidentIQHttpClient,
    create_incidentiq_client,
)
from api.connectors.incidentiq import endpoints as ep
from config.settings import IncidentIQSettings
from tests.fakes.fake_incidentiq_api import API_KEY, BASE_URL, FakeIncidentIQApi
from utils.errors import ConfigurationError


def _client(api: FakeIncidentIQApi, **headers: str) -> IncidentIQHttpClient:
    config = HttpClientConfig(base_url=BASE_URL, default_headers=headers, transport=api.transport)
    return IncidentIQHttpClient(config, API_KEY)


class TestConstruction:
    @pytest.mark.parametrize("api_key", ["", "   "])
    def test_missing_api_key_fails_fast(self, api_key: str) -> None:
        with pytest.raises(ConfigurationError, match="API key is required"):
            IncidentIQHttpClient(HttpClientConfig(base_url=BASE_URL), api_key)

    def test_missing_base_url_fails_fast(self) -> None:
        with pytest.raises(ConfigurationError):
            IncidentIQHttpClient(HttpClientConfig(base_url=""), API_KEY)

    def test_factory_reads_settings(self) -> None:
        api = FakeIncidentIQApi()
        settings = IncidentIQSettings(
            api_base_url=BASE_URL,
            api_key=API_KEY,
            site_id="site-1",
            request_timeout_ms=5000,
        )

        client = create_incidentiq_client(settings, transport=api.transport)

        assert client.base_url == BASE_URL
        assert client.district_name == "springfield"

    def test_factory_without_key_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            create_incidentiq_client(IncidentIQSettings(api_key=""))


class TestRequest:
    @pytest.mark.asyncio
    async def test_sends_auth_and_scoping_headers(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/tickets/statuses", {"Items": []})
        client = _client(api, SiteId="site-1", ProductId="prod-1")

        await client.request("GET", "/tickets/statuses")

        sent = api.last_request
        assert sent.headers["Authorization"] == f"Bearer {API_KEY}"
        assert sent.headers["Accept"] == "application/json"
        assert sent.headers["SiteId"] == "site-1"
        assert sent.headers["ProductId"] == "prod-1"
        assert str(sent.url) == f"{BASE_URL}/tickets/statuses"

    @pytest.mark.asyncio
    async def test_drops_none_query_values(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/users/statistics/grades", [])
        client = _client(api)

        await client.request("GET", "/users/statistics/grades", query={"locationId": None, "x": 1})

        assert dict(api.last_request.url.params) == {"x": "1"}

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self) -> None:
        api = FakeIncidentIQApi().add("POST", "/notifications/all-read")
        client = _client(api)

        assert await client.request("POST", "/notifications/all-read") is None

    @pytest.mark.asyncio
    async def test_non_2xx_raises_typed_error_with_upstream_message(self) -> None:
        api = FakeIncidentIQApi().add(
            "GET",
            "/tickets/t-9",
            {"Message": "Access denied", "ErrorCode": 42},
            status_code=403,
        )
        client = _client(api)

        with pytest.raises(HttpError) as excinfo:
            await client.request("GET", "/tickets/t-9")

        error = excinfo.value
        assert error.status_code == 403
        assert error.upstream_message == "Access denied"
        assert error.method == "GET"
        assert error.path == "/tickets/t-9"
        assert error.is_unauthorized
        assert str(error) == "IncidentIQ API error 403: Access denied"

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self) -> None:
        api = FakeIncidentIQApi().add(
            "GET", "/views", responder=lambda _r: httpx.Response(200, content=b"<html>")
        )
        client = _client(api)

        with pytest.raises(HttpError, match="invalid JSON"):
            await client.request("GET", "/views")

    @pytest.mark.asyncio
    async def test_transport_failure_raises_without_status(self) -> None:
        def _boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        api = FakeIncidentIQApi().add("GET", "/views", responder=_boom)
        client = _client(api)

        with pytest.raises(HttpError, match="Connection failed: GET /views") as excinfo:
            await client.request("GET", "/views")
        assert excinfo.value.status_code is None

    @pytest.mark.asyncio
    async def test_each_call_runs_exactly_once(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/views", {"Message": "boom"}, status_code=500)
        client = _client(api)

        with pytest.raises(HttpError):
            await client.request("GET", "/views")

        assert len(api.requests) == 1

    @pytest.mark.asyncio
    async def test_debug_flag_logs_method_and_path(self, caplog: pytest.LogCaptureFixture) -> None:
        api = FakeIncidentIQApi().add("GET", "/views", [])
        config = HttpClientConfig(base_url=BASE_URL, transport=api.transport)
        client = IncidentIQHttpClient(config, API_KEY, debug_requests=True)

        with caplog.at_level(logging.INFO):
            await client.request("GET", "/views")

        records = [record for record in caplog.records if record.getMessage() == "iiq_request"]
        assert len(records) == 1
        assert records[0].path == "/views"
        assert API_KEY not in caplog.text


class TestFetch:
    @pytest.mark.asyncio
    async def test_fetch_collection_normalizes_bare_array(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/users/agents", [{"UserId": "u-1"}])
        client = _client(api)

        result = await client.fetch_collection(ep.USER_AGENTS)

        assert result.items == [{"UserId": "u-1"}]
        assert result.total_count == 1

    @pytest.mark.asyncio
    async def test_fetch_entity_absorbs_404(self) -> None:
        api = FakeIncidentIQApi()
        client = _client(api)

        assert await client.fetch_entity(ep.TICKET_GET, ticket_id="missing") is None

    @pytest.mark.asyncio
    async def test_fetch_entity_propagates_404_for_actions(self) -> None:
        api = FakeIncidentIQApi()
        client = _client(api)

        with pytest.raises(HttpError) as excinfo:
            await client.fetch_entity(ep.TICKET_ACTION, absorb_not_found=False, ticket_id="t", action="cancel")
        assert excinfo.value.is_not_found

    @pytest.mark.asyncio
    async def test_fetch_entity_unwraps_data(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/tickets/t-1", {"Data": {"TicketId": "t-1"}})
        client = _client(api)

        assert await client.fetch_entity(ep.TICKET_GET, ticket_id="t-1") == {"TicketId": "t-1"}

    @pytest.mark.asyncio
    async def test_path_params_are_escaped(self) -> None:
        # O fake roteia pelo path decodificado; o escape fica no raw_path
        api = FakeIncidentIQApi().add("GET", "/assets/assettag/A/1", {"AssetTag": "A/1"})
        client = _client(api)

        asset = await client.fetch_entity(ep.ASSET_BY_TAG, asset_tag="A/1")

        assert asset == {"AssetTag": "A/1"}
        assert api.last_request.url.raw_path.endswith(b"/assets/assettag/A%2F1")

    @pytest.mark.asyncio
    async def test_shape_mismatch_only_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        api = FakeIncidentIQApi().add("GET", "/tickets/statuses", [{"Name": "Open"}])
        client = _client(api)

        with caplog.at_level(logging.DEBUG):
            result = await client.fetch_collection(ep.TICKET_STATUSES)

        assert result.items == [{"Name": "Open"}]
        assert "iiq_shape_mismatch" in caplog.messages


class TestConnection:
    @pytest.mark.asyncio
    async def test_connected_reports_district(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/tickets/statuses", {"Items": []})

        status = await _client(api).test_connection()

        assert status.connected
        assert status.district_name == "springfield"
        assert status.error is None

    @pytest.mark.asyncio
    async def test_unauthorized_reports_invalid_key(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/tickets/statuses", {"Message": "nope"}, status_code=401)

        status = await _client(api).test_connection()

        assert not status.connected
        assert status.error == "Invalid API key"

    @pytest.mark.asyncio
    async def test_other_failure_reports_message(self) -> None:
        api = FakeIncidentIQApi().add("GET", "/tickets/statuses", {"Message": "down"}, status_code=503)

        status = await _client(api).test_connection()

        assert not status.connected
        assert status.error == "Connection failed: IncidentIQ API error 503: down"
