"""Testes do normalizer de respostas IncidentIQ."""

from __future__ import annotations

import pytest

from api.normalizers.incidentiq import (
    detect_shape,
    normalize,
    normalize_collection,
    normalize_entity,
)
from app.protocols.models import PagedResult, ResponseShape


class TestNormalizeCollection:
    def test_bare_array_keeps_items_and_counts_length(self) -> None:
        payload = [{"Name": "a"}, {"Name": "b"}, {"Name": "c"}]

        result = normalize_collection(payload)

        assert result.items == payload
        assert result.total_count == 3
        assert result.page_index == 0
        assert result.page_size == 3

    def test_empty_bare_array_has_zero_page_size(self) -> None:
        result = normalize_collection([])

        assert result.items == []
        assert result.total_count == 0
        assert result.page_size == 0

    def test_items_envelope_prefers_total_count(self) -> None:
        result = normalize_collection({"Items": [1, 2], "TotalCount": 57})

        assert result.items == [1, 2]
        assert result.total_count == 57

    def test_items_envelope_falls_back_to_item_count(self) -> None:
        result = normalize_collection({"Items": [1, 2], "ItemCount": 9})

        assert result.total_count == 9

    def test_items_envelope_without_counts_uses_length(self) -> None:
        result = normalize_collection({"Items": ["x", "y"]})

        assert result.total_count == 2

    def test_items_envelope_reads_nested_paging(self) -> None:
        payload = {"Items": [1], "TotalCount": 40, "Paging": {"PageIndex": 3, "PageSize": 10}}

        result = normalize_collection(payload)

        assert result.page_index == 3
        assert result.page_size == 10

    def test_null_items_degrade_to_empty(self) -> None:
        result = normalize_collection({"Items": None, "TotalCount": 0})

        assert result.items == []
        assert result.total_count == 0

    def test_boolean_count_is_ignored(self) -> None:
        result = normalize_collection({"Items": [1, 2], "TotalCount": True})

        assert result.total_count == 2

    def test_data_envelope_recurses_into_items(self) -> None:
        result = normalize_collection({"Data": {"Items": ["a", "b"], "TotalCount": 2}})

        assert result.items == ["a", "b"]
        assert result.total_count == 2

    def test_data_envelope_recurses_into_array(self) -> None:
        result = normalize_collection({"Data": [{"Id": 1}]})

        assert result.items == [{"Id": 1}]
        assert result.total_count == 1

    def test_bare_object_becomes_single_item(self) -> None:
        result = normalize_collection({"TicketId": "t-1"})

        assert result.items == [{"TicketId": "t-1"}]
        assert result.total_count == 1

    def test_none_is_empty(self) -> None:
        assert normalize_collection(None) == PagedResult.empty()

    def test_canonical_result_is_idempotent(self) -> None:
        first = normalize_collection({"Items": [1, 2, 3], "TotalCount": 10})

        assert normalize_collection(first) == first
        assert normalize_collection(first.model_dump(by_alias=True)) == first

    def test_manufacturers_envelope_preserves_fields(self) -> None:
        payload = {
            "Items": [
                {"ManufacturerId": "m-1", "Name": "Acer"},
                {"ManufacturerId": "m-2", "Name": "Lenovo"},
            ]
        }

        result = normalize_collection(payload)

        assert result.items == payload["Items"]
        assert set(result.items[0]) == {"ManufacturerId", "Name"}


class TestNormalizeEntity:
    def test_prefers_data_field(self) -> None:
        assert normalize_entity({"Data": {"TicketId": "t-1"}}) == {"TicketId": "t-1"}

    def test_item_field_is_accepted(self) -> None:
        assert normalize_entity({"Item": {"ReportId": "r-1"}}) == {"ReportId": "r-1"}

    def test_bare_object_is_the_entity(self) -> None:
        assert normalize_entity({"AssetTag": "A100"}) == {"AssetTag": "A100"}

    @pytest.mark.parametrize("payload", [None, {}, {"Data": None}, {"Data": {}}, {"Item": None}])
    def test_absent_entity_is_none(self, payload: object) -> None:
        assert normalize_entity(payload) is None


class TestNormalizeDispatch:
    def test_collection_shapes_return_paged_result(self) -> None:
        assert isinstance(normalize([1], ResponseShape.ITEMS_OR_ARRAY), PagedResult)

    def test_entity_shapes_return_record(self) -> None:
        assert normalize({"Data": {"x": 1}}, ResponseShape.DATA_ENVELOPE) == {"x": 1}


class TestDetectShape:
    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ([], ResponseShape.BARE_ARRAY),
            ({"Items": []}, ResponseShape.ITEMS_ENVELOPE),
            ({"Data": {}}, ResponseShape.DATA_ENVELOPE),
            ({"Name": "x"}, ResponseShape.BARE_OBJECT),
            ("text", None),
        ],
    )
    def test_classifies_payload(self, payload: object, expected: ResponseShape | None) -> None:
        assert detect_shape(payload) is expected
