"""Builders de requisição para a API IncidentIQ."""

from api.payload_builders.incidentiq.search import (
    DEFAULT_SORT_DIRECTION,
    SearchPayloadBuilder,
    build_paged_query,
    build_search_payload,
)

__all__ = [
    "DEFAULT_SORT_DIRECTION",
    "SearchPayloadBuilder",
    "build_paged_query",
    "build_search_payload",
]
