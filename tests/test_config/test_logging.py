"""Testes de config.logging (JSON, contexto da invocação, mascaramento)."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest

from api.connectors.incidentiq import HttpClientConfig, IncidentIQHttpClient
from app.observability import get_correlation_id, get_current_operation
from app.operations import Dispatcher, build_registry
from config.logging import (
    REQUIRED_LOG_FIELDS,
    CredentialRedactionFilter,
    InvocationContextFilter,
    configure_logging,
    create_json_formatter,
    log_fallback,
)
from config.logging.config import DEFAULT_SERVICE_NAME
from tests.fakes.fake_incidentiq_api import API_KEY, BASE_URL, FakeIncidentIQApi


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str = "iiq_request", args: tuple = ()) -> logging.LogRecord:
    return logging.LogRecord(
        name="api.connectors.incidentiq.iiq_logging",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )


def _capture_root() -> io.StringIO:
    """Redireciona o handler configurado no root para um buffer."""
    stream = io.StringIO()
    logging.getLogger().handlers[0].setStream(stream)
    return stream


def _lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


class TestConfigureLogging:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [("INFO", logging.INFO), ("debug", logging.DEBUG), ("ERROR", logging.ERROR)],
    )
    def test_sets_root_level(self, level: str, expected: int) -> None:
        configure_logging(level=level)

        assert logging.getLogger().level == expected

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_single_handler_with_context_and_redaction(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging()

        assert len(root.handlers) == 1
        filter_types = [type(item) for item in root.handlers[0].filters]
        assert filter_types == [CredentialRedactionFilter, InvocationContextFilter]

    def test_default_service_name_matches_settings(self) -> None:
        assert DEFAULT_SERVICE_NAME == "iiq-gateway"

    def test_field_order(self) -> None:
        assert REQUIRED_LOG_FIELDS[-3:] == ("service", "correlation_id", "operation")


class TestInvocationContextFilter:
    def test_injects_from_getters(self) -> None:
        record = _record()

        accepted = InvocationContextFilter("svc", lambda: "corr-123", lambda: "ticket_get").filter(record)

        assert accepted is True
        assert record.correlation_id == "corr-123"
        assert record.operation == "ticket_get"
        assert record.service == "svc"

    def test_explicit_extra_wins(self) -> None:
        record = _record()
        record.correlation_id = "explicit"
        record.operation = "user_get_details"

        InvocationContextFilter("svc", lambda: "from-getter", lambda: "ticket_get").filter(record)

        assert record.correlation_id == "explicit"
        assert record.operation == "user_get_details"

    def test_outside_invocation(self) -> None:
        record = _record()

        InvocationContextFilter("svc").filter(record)

        assert record.correlation_id == ""
        assert record.operation is None


class TestCredentialRedactionFilter:
    def test_masks_bearer_token_in_formatted_message(self) -> None:
        record = _record("upstream rejected %s", ("Authorization: Bearer abc.def-123",))

        CredentialRedactionFilter().filter(record)

        assert record.getMessage() == "upstream rejected Authorization: Bearer ***"

    def test_masks_configured_secret(self) -> None:
        record = _record(f"key={API_KEY}")

        CredentialRedactionFilter((API_KEY, "")).filter(record)

        assert record.getMessage() == "key=***"

    def test_leaves_clean_record_untouched(self) -> None:
        record = _record("iiq_request_ok", ())

        CredentialRedactionFilter((API_KEY,)).filter(record)

        assert record.msg == "iiq_request_ok"
        assert record.args == ()


class TestJsonOutput:
    def test_line_carries_context_fields(self) -> None:
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(create_json_formatter())
        handler.addFilter(InvocationContextFilter("iiq-gateway", lambda: "corr-9", lambda: "asset_get_history"))
        logger = logging.getLogger("tests.json_output")
        logger.addHandler(handler)
        logger.propagate = False
        try:
            logger.warning("iiq_http_error", extra={"status_code": 500, "path": "/assets/a-1/history"})
        finally:
            logger.removeHandler(handler)
            logger.propagate = True

        line = json.loads(stream.getvalue())
        assert line["message"] == "iiq_http_error"
        assert line["level"] == "WARNING"
        assert line["logger"] == "tests.json_output"
        assert line["correlation_id"] == "corr-9"
        assert line["operation"] == "asset_get_history"
        assert line["service"] == "iiq-gateway"
        assert line["status_code"] == 500

    @pytest.mark.asyncio
    async def test_connector_error_names_triggering_operation(self) -> None:
        configure_logging(
            level="DEBUG",
            correlation_id_getter=get_correlation_id,
            operation_getter=get_current_operation,
            secrets=(API_KEY,),
        )
        stream = _capture_root()
        api = FakeIncidentIQApi().add("GET", "/users/u-1", {"Message": "boom"}, status_code=500)
        client = IncidentIQHttpClient(HttpClientConfig(base_url=BASE_URL, transport=api.transport), API_KEY)

        await Dispatcher(build_registry(), client).dispatch("user_get_details", {"userId": "u-1"})

        lines = _lines(stream)
        error_line = next(line for line in lines if line["message"] == "iiq_http_error")
        metric_line = next(line for line in lines if line["message"] == "metric_latency")
        assert error_line["operation"] == "user_get_details"
        assert error_line["path"] == "/users/u-1"
        assert error_line["correlation_id"]
        assert error_line["correlation_id"] == metric_line["correlation_id"]
        assert API_KEY not in stream.getvalue()
        assert get_current_operation() is None


class TestLogFallback:
    def test_event_and_extra(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "location_buildings", reason="empty_result", path="/locations/all")

        args, kwargs = logger.info.call_args
        assert args == ("iiq_fallback_used",)
        assert kwargs["extra"] == {
            "fallback_used": True,
            "component": "location_buildings",
            "reason": "empty_result",
            "path": "/locations/all",
        }

    def test_optional_fields_omitted(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "location_find_by_code")

        assert logger.info.call_args[1]["extra"] == {
            "fallback_used": True,
            "component": "location_find_by_code",
        }
