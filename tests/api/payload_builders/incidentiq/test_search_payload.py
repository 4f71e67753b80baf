"""Testes dos builders de requisição IncidentIQ."""

from __future__ import annotations

from api.payload_builders.incidentiq import (
    SearchPayloadBuilder,
    build_paged_query,
    build_search_payload,
)
from app.protocols.models import Filter, SearchRequest


def test_default_payload_carries_only_flags() -> None:
    assert build_search_payload() == {
        "OnlyShowDeleted": False,
        "FilterByViewPermission": False,
    }


def test_full_request_is_serialized_in_pascal_case() -> None:
    request = SearchRequest(
        search_text="chromebook",
        filters=Filter.collect(("View", "v-1"), ("Location", "loc-9")),
        page_index=2,
        page_size=25,
        only_show_deleted=True,
    )

    payload = SearchPayloadBuilder().build(request)

    assert payload == {
        "OnlyShowDeleted": True,
        "FilterByViewPermission": False,
        "SearchText": "chromebook",
        "Filters": [{"Facet": "View", "Id": "v-1"}, {"Facet": "Location", "Id": "loc-9"}],
        "Paging": {"PageIndex": 2, "PageSize": 25},
    }


def test_page_size_alone_defaults_page_index_to_zero() -> None:
    payload = build_search_payload(SearchRequest(page_size=10))

    assert payload["Paging"] == {"PageIndex": 0, "PageSize": 10}


def test_empty_search_text_is_omitted() -> None:
    assert "SearchText" not in build_search_payload(SearchRequest(search_text=""))


def test_negative_filter_flag_is_kept() -> None:
    request = SearchRequest(filters=(Filter(facet="Status", id="closed", negative=True),))

    payload = build_search_payload(request)

    assert payload["Filters"] == [{"Facet": "Status", "Id": "closed", "Negative": True}]


def test_extra_fields_override_defaults() -> None:
    request = SearchRequest(extra={"EntityType": "Ticket", "OnlyShowDeleted": True})

    payload = build_search_payload(request)

    assert payload["EntityType"] == "Ticket"
    assert payload["OnlyShowDeleted"] is True


def test_filter_collect_skips_empty_values_and_keeps_order() -> None:
    filters = Filter.collect(("UserType", "Student"), ("Grade", None), ("Location", ""), ("View", 7))

    assert [(item.facet, item.id) for item in filters] == [("UserType", "Student"), ("View", "7")]


def test_paged_query_defaults() -> None:
    assert build_paged_query() == {"$p": 0, "$s": 100, "$d": "Descending"}
    assert build_paged_query(3, 20, "Ascending") == {"$p": 3, "$s": 20, "$d": "Ascending"}
