"""Testes do Dispatcher: roteamento, envelope de erro e correlation_id."""

from __future__ import annotations

import asyncio
import logging

import pytest

from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from app.operations import Dispatcher, DomainModule, build_registry
from app.operations.descriptor import operation, string
from tests.fakes.fake_incidentiq_api import (
    TICKET_FIXTURES,
    FakeIncidentIQClient,
    not_found,
    paged,
)
from utils.errors import UpstreamError


def _dispatcher(client: FakeIncidentIQClient, *, strict: bool = False) -> Dispatcher:
    return Dispatcher(build_registry(), client, strict_arguments=strict)


def _single(handler, *params) -> Dispatcher:
    registry = build_registry((DomainModule("sample", (operation("sample_run", "", handler, *params),)),))
    return Dispatcher(registry, FakeIncidentIQClient())


class TestRouting:
    @pytest.mark.asyncio
    async def test_ticket_search_renders_listing(self, fake_client: FakeIncidentIQClient) -> None:
        fake_client.tickets.respond("search", paged(TICKET_FIXTURES[:1], total_count=2))

        envelope = await _dispatcher(fake_client).dispatch("ticket_search", {"searchText": "chromebook"})

        assert not envelope.is_error
        assert envelope.text.startswith("Found 2 tickets (showing 1):")
        assert "#1001: Chromebook won't turn on" in envelope.text
        assert envelope.text.endswith("Page 1 of 1")

        method, (request,), _ = fake_client.tickets.calls[0]
        assert method == "search"
        assert request.search_text == "chromebook"
        assert request.page_size == 20

    @pytest.mark.asyncio
    async def test_none_arguments_behave_as_empty(self, fake_client: FakeIncidentIQClient) -> None:
        envelope = await _dispatcher(fake_client).dispatch("ticket_get_statuses", None)

        assert envelope.text == "No ticket statuses found."

    @pytest.mark.asyncio
    async def test_unknown_operation(self, fake_client: FakeIncidentIQClient) -> None:
        envelope = await _dispatcher(fake_client).dispatch("ticket_teleport", {})

        assert envelope.is_error
        assert envelope.text == 'Error: Unknown operation "ticket_teleport".'
        assert fake_client.tickets.calls == []

    def test_list_operations_matches_registry(self, fake_client: FakeIncidentIQClient) -> None:
        dispatcher = _dispatcher(fake_client)

        assert len(dispatcher.list_operations()) == len(dispatcher.registry)
        assert dispatcher.client is fake_client


class TestErrors:
    @pytest.mark.asyncio
    async def test_missing_required_argument(self, fake_client: FakeIncidentIQClient) -> None:
        envelope = await _dispatcher(fake_client).dispatch("ticket_get", {})

        assert envelope.is_error
        assert envelope.text == "Error: Missing required argument: ticketId"
        assert fake_client.tickets.calls == []

    @pytest.mark.asyncio
    async def test_upstream_error_becomes_envelope(self, fake_client: FakeIncidentIQClient) -> None:
        fake_client.tickets.respond("statuses", UpstreamError("IncidentIQ API error 500: boom"))

        envelope = await _dispatcher(fake_client).dispatch("ticket_get_statuses", {})

        assert envelope.is_error
        assert envelope.text == "Error: IncidentIQ API error 500: boom"

    @pytest.mark.asyncio
    async def test_not_found_absorbed_by_handler(self, fake_client: FakeIncidentIQClient) -> None:
        fake_client.parts.respond("get", not_found())

        envelope = await _dispatcher(fake_client).dispatch("parts_get_details", {"partId": "p-1"})

        assert not envelope.is_error
        assert envelope.text == "Part or resource not found."

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_logged_and_wrapped(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        async def explode(client, args):
            raise RuntimeError("kaboom")

        with caplog.at_level(logging.ERROR):
            envelope = await _single(explode).dispatch("sample_run", {})

        assert envelope.text == "Error: kaboom"
        assert "operation_failed" in caplog.messages

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self) -> None:
        async def cancelled(client, args):
            raise asyncio.CancelledError

        with pytest.raises(asyncio.CancelledError):
            await _single(cancelled).dispatch("sample_run", {})

    @pytest.mark.asyncio
    async def test_missing_declared_argument_message(self) -> None:
        async def needs_value(client, args):
            return args["value"]

        envelope = await _single(needs_value, string("value", required=True)).dispatch(
            "sample_run", {}
        )

        assert envelope.text == "Error: Missing required argument: value"

    @pytest.mark.asyncio
    async def test_key_error_from_upstream_record_is_not_an_argument_error(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        async def reads_record(client, args):
            record = {"Name": "Lab"}
            return record["LocationId"]

        with caplog.at_level(logging.ERROR):
            envelope = await _single(reads_record, string("value")).dispatch(
                "sample_run", {"value": "x"}
            )

        assert envelope.is_error
        assert "Missing required argument" not in envelope.text
        assert envelope.text == "Error: 'LocationId'"
        assert "operation_failed" in caplog.messages


class TestStrictMode:
    @pytest.mark.asyncio
    async def test_rejects_before_handler(self, fake_client: FakeIncidentIQClient) -> None:
        envelope = await _dispatcher(fake_client, strict=True).dispatch(
            "ticket_unassign", {"ticketId": "t-1", "unassignFrom": "location"}
        )

        assert envelope.is_error
        assert envelope.text == (
            "Error: Invalid arguments for ticket_unassign: unassignFrom must be one of: user, team, sla"
        )
        assert fake_client.tickets.calls == []

    @pytest.mark.asyncio
    async def test_lenient_mode_reaches_handler(self, fake_client: FakeIncidentIQClient) -> None:
        envelope = await _dispatcher(fake_client).dispatch(
            "ticket_unassign", {"ticketId": "t-1", "unassignFrom": "team"}
        )

        assert envelope.text == "Successfully unassigned ticket from team."


class TestCorrelation:
    @pytest.mark.asyncio
    async def test_generates_id_per_call_and_restores_context(self) -> None:
        seen: list[str] = []

        async def capture(client, args):
            seen.append(get_correlation_id())
            return "ok"

        dispatcher = _single(capture)
        await dispatcher.dispatch("sample_run", {})
        await dispatcher.dispatch("sample_run", {})

        assert all(seen)
        assert seen[0] != seen[1]
        assert get_correlation_id() == ""

    @pytest.mark.asyncio
    async def test_preserves_external_id(self) -> None:
        seen: list[str] = []

        async def capture(client, args):
            seen.append(get_correlation_id())
            return "ok"

        token = set_correlation_id("req-123")
        try:
            await _single(capture).dispatch("sample_run", {})
            assert get_correlation_id() == "req-123"
        finally:
            reset_correlation_id(token)

        assert seen == ["req-123"]

    @pytest.mark.asyncio
    async def test_records_outcome_metric(self, caplog: pytest.LogCaptureFixture) -> None:
        async def echo(client, args):
            return args["value"]

        with caplog.at_level(logging.INFO):
            await _single(echo, string("value", required=True)).dispatch("sample_run", {"value": "x"})

        outcomes = [record.outcome for record in caplog.records if record.getMessage() == "metric_operation_outcome"]
        assert outcomes == ["success"]
