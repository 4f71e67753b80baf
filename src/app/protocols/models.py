"""Contratos canônicos compartilhados entre api/ e app/.

PagedResult é a saída única de toda operação de busca/listagem,
independente do formato que a API upstream devolveu.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResponseShape(str, Enum):
    """Formato de resposta declarado por endpoint.

    Atribuído por operação, nunca inferido: a API não publica schema e o
    mesmo endpoint pode variar de formato legitimamente.
    """

    BARE_ARRAY = "bare_array"
    ITEMS_ENVELOPE = "items_envelope"
    DATA_ENVELOPE = "data_envelope"
    BARE_OBJECT = "bare_object"
    ITEMS_OR_ARRAY = "items_or_array"

    @property
    def is_collection(self) -> bool:
        """True quando a saída canônica é um PagedResult."""
        return self in (
            ResponseShape.BARE_ARRAY,
            ResponseShape.ITEMS_ENVELOPE,
            ResponseShape.ITEMS_OR_ARRAY,
        )


class PagedResult(BaseModel):
    """Resultado paginado canônico.

    total_count pode exceder len(items): a contagem do upstream é
    preservada como veio, sem correção.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: list[Any] = Field(default_factory=list, description="Registros da página.")
    total_count: int = Field(default=0, ge=0, alias="totalCount")
    page_index: int = Field(default=0, ge=0, alias="pageIndex")
    page_size: int = Field(default=0, ge=0, alias="pageSize")

    @classmethod
    def empty(cls) -> PagedResult:
        return cls(items=[], total_count=0, page_index=0, page_size=0)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def page_count(self) -> int:
        """Número de páginas segundo a contagem do upstream."""
        if self.page_size <= 0:
            return 1 if self.total_count else 0
        return -(-self.total_count // self.page_size)


class Filter(BaseModel):
    """Predicado upstream (facet + id). Listas de filtros compõem com AND."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    facet: str = Field(..., min_length=1, alias="Facet")
    id: str = Field(..., alias="Id")
    negative: bool | None = Field(default=None, alias="Negative")

    def to_payload(self) -> dict[str, Any]:
        """Serializa no formato PascalCase esperado pela API."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def collect(cls, *pairs: tuple[str, Any]) -> tuple[Filter, ...]:
        """Filtros a partir de pares (facet, id), ignorando ids vazios.

        A ordem de entrada é preservada.
        """
        return tuple(
            cls(facet=facet, id=str(value)) for facet, value in pairs if value not in (None, "")
        )


class SearchRequest(BaseModel):
    """Parâmetros de uma busca POST (tickets, users, assets, locations...).

    Os flags OnlyShowDeleted/FilterByViewPermission assumem False salvo
    override explícito. `extra` carrega campos específicos do domínio
    (ex: EntityType, Status) e é aplicado depois dos defaults.
    """

    model_config = ConfigDict(frozen=True)

    search_text: str | None = None
    filters: tuple[Filter, ...] = ()
    page_index: int | None = Field(default=None, ge=0)
    page_size: int | None = Field(default=None, gt=0)
    only_show_deleted: bool = False
    filter_by_view_permission: bool = False
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def has_paging(self) -> bool:
        return self.page_index is not None or self.page_size is not None


class ConnectionStatus(BaseModel):
    """Resultado da sondagem de conectividade com o distrito."""

    model_config = ConfigDict(frozen=True)

    connected: bool
    district_name: str | None = None
    error: str | None = None


__all__ = [
    "ConnectionStatus",
    "Filter",
    "PagedResult",
    "ResponseShape",
    "SearchRequest",
]
