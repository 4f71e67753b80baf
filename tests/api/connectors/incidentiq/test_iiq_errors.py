"""Testes de parsing de corpos de erro da IncidentIQ."""

from __future__ import annotations

import pytest

from api.connectors.incidentiq import parse_iiq_error


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ({"Message": "Ticket not found"}, "Ticket not found"),
        ({"ErrorMessage": "Invalid filter"}, "Invalid filter"),
        ({"message": "lower-case message"}, "lower-case message"),
        ({"error": "unauthorized"}, "unauthorized"),
        ({"title": "Bad Request"}, "Bad Request"),
    ],
)
def test_reads_known_message_keys(body: dict[str, str], expected: str) -> None:
    assert parse_iiq_error(400, body).message == expected


def test_prefers_message_over_other_keys() -> None:
    error = parse_iiq_error(400, {"title": "Bad Request", "Message": "Subject is required"})

    assert error.message == "Subject is required"


def test_blank_message_falls_through_to_next_key() -> None:
    error = parse_iiq_error(400, {"Message": "  ", "ErrorMessage": "Invalid filter"})

    assert error.message == "Invalid filter"


def test_captures_error_code() -> None:
    error = parse_iiq_error(409, {"Message": "Conflict", "ErrorCode": 17})

    assert error.status_code == 409
    assert error.error_code == "17"


def test_plain_text_body_is_truncated() -> None:
    error = parse_iiq_error(502, "x" * 500)

    assert len(error.message) == 200


@pytest.mark.parametrize("body", [None, {}, "", ["unexpected"]])
def test_falls_back_to_status_message(body: object) -> None:
    error = parse_iiq_error(500, body)

    assert error.message == "Request failed with status code 500"
    assert error.error_code is None
