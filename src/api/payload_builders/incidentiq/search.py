"""Builders de requisição para a API IncidentIQ.

Dois formatos de paginação coexistem no upstream:
- buscas POST: corpo JSON com Paging{PageIndex, PageSize} e Filters
- listagens GET: query string $p (página), $s (tamanho), $d (ordenação)
"""

from __future__ import annotations

from typing import Any

from app.protocols.models import SearchRequest

DEFAULT_SORT_DIRECTION = "Descending"


class SearchPayloadBuilder:
    """Builder para corpos de busca POST."""

    def build(self, request: SearchRequest) -> dict[str, Any]:
        """Constrói payload de busca.

        Args:
            request: Parâmetros da busca

        Returns:
            Payload PascalCase com os flags padrão sempre presentes
        """
        payload: dict[str, Any] = {
            "OnlyShowDeleted": request.only_show_deleted,
            "FilterByViewPermission": request.filter_by_view_permission,
        }

        if request.search_text:
            payload["SearchText"] = request.search_text

        if request.filters:
            payload["Filters"] = [item.to_payload() for item in request.filters]

        if request.has_paging:
            paging: dict[str, int] = {"PageIndex": request.page_index or 0}
            if request.page_size is not None:
                paging["PageSize"] = request.page_size
            payload["Paging"] = paging

        payload.update(request.extra)
        return payload


def build_search_payload(request: SearchRequest | None = None) -> dict[str, Any]:
    """Atalho funcional para SearchPayloadBuilder."""
    return SearchPayloadBuilder().build(request or SearchRequest())


def build_paged_query(
    page_index: int = 0,
    page_size: int = 100,
    sort_direction: str = DEFAULT_SORT_DIRECTION,
) -> dict[str, Any]:
    """Query string de paginação das listagens GET."""
    return {"$p": page_index, "$s": page_size, "$d": sort_direction}
