"""Testes do composition root."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from app.bootstrap import create_dispatcher, validate_runtime_settings
from config.settings import IncidentIQSettings, get_base_settings, get_incidentiq_settings
from tests.fakes.fake_incidentiq_api import FakeIncidentIQClient
from utils.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("ENVIRONMENT", "IIQ_API_KEY", "IIQ_API_BASE_URL", "IIQ_API_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    get_base_settings.cache_clear()
    get_incidentiq_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_incidentiq_settings.cache_clear()


def test_validation_only_warns_in_development(caplog: pytest.LogCaptureFixture) -> None:
    validate_runtime_settings()

    assert "settings_validation_failed" in caplog.messages


def test_validation_blocks_boot_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")

    with pytest.raises(RuntimeError, match="IIQ_API_KEY"):
        validate_runtime_settings()


def test_validation_passes_with_key(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("IIQ_API_KEY", "secret")

    with caplog.at_level("INFO"):
        validate_runtime_settings()

    assert "settings_validated" in caplog.messages


def test_dispatcher_without_key_fails_fast() -> None:
    with pytest.raises(ConfigurationError):
        create_dispatcher(settings=IncidentIQSettings(api_key=""))


def test_dispatcher_uses_injected_client_and_strict_flag() -> None:
    client = FakeIncidentIQClient()

    dispatcher = create_dispatcher(client, IncidentIQSettings(api_key="k", strict_arguments=True))

    assert dispatcher.client is client
    assert "connection_test" in dispatcher.registry
