"""Normalização das respostas da API IncidentIQ.

A API upstream devolve pelo menos quatro formatos incompatíveis:
- array puro: [...]
- envelope de itens: {"Items": [...], "TotalCount": n}
- envelope de dados: {"Data": ...} (às vezes com Items dentro)
- objeto puro: {...}

Este módulo colapsa todos em exatamente duas saídas canônicas:
PagedResult (coleções) ou registro-único-ou-None (entidades).
Nunca levanta exceção por ausência de Items/Data; degrada para vazio.
"""

from __future__ import annotations

from typing import Any

from app.protocols.models import PagedResult, ResponseShape

_COUNT_KEYS = ("TotalCount", "ItemCount")
_CANONICAL_KEYS = frozenset({"items", "totalCount"})


def normalize(payload: Any, shape: ResponseShape) -> PagedResult | Any | None:
    """Normaliza conforme a categoria de formato declarada pelo endpoint."""
    if shape.is_collection:
        return normalize_collection(payload)
    return normalize_entity(payload)


def normalize_collection(payload: Any) -> PagedResult:
    """Extrai a lista canônica de itens.

    Ordem de prioridade:
    1. payload é lista -> itens diretos
    2. payload tem Items -> itens + TotalCount/ItemCount
    3. payload tem Data -> recursão em Data
    4. outro valor não nulo -> resultado de item único; None -> vazio

    Array é checado primeiro: há endpoints que devolvem lista pura
    enquanto endpoints irmãos devolvem envelope.
    """
    if isinstance(payload, PagedResult):
        return payload
    if payload is None:
        return PagedResult.empty()
    if isinstance(payload, list):
        return _from_list(payload)
    if isinstance(payload, dict):
        if _CANONICAL_KEYS <= payload.keys():
            return PagedResult.model_validate(payload)
        if "Items" in payload:
            return _from_items_envelope(payload)
        if "Data" in payload:
            return normalize_collection(payload["Data"])
    return PagedResult(items=[payload], total_count=1, page_index=0, page_size=1)


def normalize_entity(payload: Any) -> Any | None:
    """Extrai um registro único.

    Prefere o campo Data (ou Item, usado por alguns endpoints de detalhe);
    sem envelope, o próprio payload é a entidade. Nulo/ausente -> None.
    """
    if payload is None:
        return None
    if isinstance(payload, dict):
        if "Data" in payload:
            return _entity_or_none(payload["Data"])
        if "Item" in payload:
            return _entity_or_none(payload["Item"])
        return payload or None
    return payload


def detect_shape(payload: Any) -> ResponseShape | None:
    """Classifica o formato observado (usado só para diagnóstico em log)."""
    if isinstance(payload, list):
        return ResponseShape.BARE_ARRAY
    if isinstance(payload, dict):
        if "Items" in payload:
            return ResponseShape.ITEMS_ENVELOPE
        if "Data" in payload:
            return ResponseShape.DATA_ENVELOPE
        return ResponseShape.BARE_OBJECT
    return None


def _from_list(items: list[Any]) -> PagedResult:
    return PagedResult(
        items=list(items),
        total_count=len(items),
        page_index=0,
        page_size=len(items),
    )


def _from_items_envelope(payload: dict[str, Any]) -> PagedResult:
    raw_items = payload.get("Items")
    if raw_items is None:
        items: list[Any] = []
    elif isinstance(raw_items, list):
        items = list(raw_items)
    else:
        items = [raw_items]

    paging = payload.get("Paging")
    if not isinstance(paging, dict):
        paging = {}

    total_count = _first_count(*(payload.get(key) for key in _COUNT_KEYS), default=len(items))
    page_index = _first_count(payload.get("PageIndex"), paging.get("PageIndex"), default=0)
    page_size = _first_count(payload.get("PageSize"), paging.get("PageSize"), default=len(items))

    return PagedResult(
        items=items,
        total_count=total_count,
        page_index=page_index,
        page_size=page_size,
    )


def _first_count(*candidates: Any, default: int) -> int:
    """Primeiro inteiro não negativo entre os candidatos."""
    for value in candidates:
        if isinstance(value, bool):
            continue
        if isinstance(value, int) and value >= 0:
            return value
    return default


def _entity_or_none(value: Any) -> Any | None:
    if value is None:
        return None
    if isinstance(value, dict) and not value:
        return None
    return value
