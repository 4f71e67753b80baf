"""Helpers compartilhados pelos handlers de domínio.

Cada handler recebe (client, args) e devolve texto ou uma estrutura
serializável. Argumentos obrigatórios são lidos por indexação direta
(args["ticketId"]); ausência vira erro tratado pelo Dispatcher.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Callable, Iterable
from typing import Any

from app.operations.descriptor import Handler
from app.protocols.models import PagedResult
from utils.errors import UpstreamError

NOT_AVAILABLE = "N/A"


def absorbs_not_found(message: str) -> Callable[[Handler], Handler]:
    """Converte 404 do upstream em texto de domínio ("não encontrado").

    Outros erros seguem para o Dispatcher.
    """

    def decorator(handler: Handler) -> Handler:
        @functools.wraps(handler)
        async def wrapper(client: Any, args: dict[str, Any]) -> Any:
            try:
                return await handler(client, args)
            except UpstreamError as exc:
                if exc.is_not_found:
                    return message
                raise

        return wrapper

    return decorator


def int_arg(args: dict[str, Any], key: str, default: int) -> int:
    """Inteiro opcional; 0/None/ausente caem no default."""
    value = args.get(key)
    if not value:
        return default
    return int(value)


def first_of(record: Any, *keys: str, default: Any = NOT_AVAILABLE) -> Any:
    """Primeiro valor não vazio entre as chaves do registro."""
    if not isinstance(record, dict):
        return default
    for key in keys:
        value = record.get(key)
        if value not in (None, ""):
            return value
    return default


def display_name(record: Any) -> str:
    """Nome de exibição: FullName, Name ou FirstName + LastName."""
    full_name = first_of(record, "FullName", "Name", default=None)
    if full_name:
        return str(full_name)
    parts = [first_of(record, "FirstName", default=""), first_of(record, "LastName", default="")]
    return " ".join(part for part in parts if part) or "Unknown"


def yes_no(value: Any) -> str:
    return "Yes" if value else "No"


def active_label(record: Any) -> str:
    return "Active" if first_of(record, "IsActive", default=False) else "Inactive"


def bullet_list(
    items: Iterable[Any],
    formatter: Callable[[Any], str],
    separator: str = "\n\n",
) -> str:
    return separator.join(formatter(item) for item in items)


def more_line(total: int, shown: int, noun: str) -> str:
    """Sufixo "...and N more <noun>" quando a lista foi truncada."""
    if total <= shown:
        return ""
    return f"\n\n...and {total - shown} more {noun}"


def page_line(page_index: int, page_size: int, total_count: int) -> str:
    pages = max(1, math.ceil(total_count / page_size)) if page_size > 0 else 1
    return f"Page {page_index + 1} of {pages}"


def group_by(items: Iterable[Any], key: Callable[[Any], str]) -> dict[str, list[Any]]:
    """Agrupa preservando a ordem de primeira ocorrência."""
    groups: dict[str, list[Any]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def grouped_listing(
    title: str,
    groups: dict[str, list[Any]],
    formatter: Callable[[Any], str],
    limit: int | None = None,
) -> str:
    """Listagem agrupada: cabeçalho por grupo, no máximo `limit` itens cada."""
    lines = [title]
    for group, members in groups.items():
        lines.append(f"\n{group} ({len(members)}):")
        shown = members if limit is None else members[:limit]
        lines.extend(f"  • {formatter(member)}" for member in shown)
        if limit is not None and len(members) > limit:
            lines.append(f"  ... and {len(members) - limit} more")
    return "\n".join(lines)


def pick(args: dict[str, Any], mapping: dict[str, str]) -> dict[str, Any]:
    """Copia argumentos presentes para as chaves PascalCase do upstream."""
    return {
        upstream_key: args[arg_key]
        for arg_key, upstream_key in mapping.items()
        if args.get(arg_key) is not None
    }


def paged_payload(result: PagedResult) -> dict[str, Any]:
    """PagedResult no formato canônico camelCase do envelope."""
    return result.model_dump(by_alias=True)
