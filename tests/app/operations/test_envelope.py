"""Testes do envelope de resultado."""

from __future__ import annotations

from app.operations import ContentEnvelope, render_result
from app.protocols.models import PagedResult


def test_text_passes_through() -> None:
    envelope = ContentEnvelope.from_result("Found 1 tickets")

    assert envelope.to_payload() == {
        "content": [{"type": "text", "text": "Found 1 tickets"}],
        "isError": False,
    }


def test_error_is_prefixed_and_flagged() -> None:
    envelope = ContentEnvelope.error("Missing required argument: ticketId")

    assert envelope.is_error
    assert envelope.text == "Error: Missing required argument: ticketId"


def test_structured_result_is_indented_json() -> None:
    assert render_result({"team_id": "t-1", "count": 0}) == '{\n  "team_id": "t-1",\n  "count": 0\n}'


def test_pydantic_model_uses_aliases() -> None:
    text = render_result(PagedResult(items=[], total_count=3))

    assert '"totalCount": 3' in text


def test_none_renders_placeholder() -> None:
    assert render_result(None) == "No result."
