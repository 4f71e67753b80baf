"""Erros e helpers de parsing para respostas de erro da API IncidentIQ."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Chaves de mensagem observadas em corpos de erro (ordem de preferência)
_MESSAGE_KEYS = ("Message", "ErrorMessage", "message", "error", "title")


@dataclass(frozen=True)
class IIQApiError:
    """Erro retornado pela API IncidentIQ."""

    status_code: int
    message: str
    error_code: str | None = None


def parse_iiq_error(status_code: int, response_data: Any) -> IIQApiError:
    """Extrai informações de erro do corpo devolvido pelo upstream.

    Args:
        status_code: Status HTTP da resposta
        response_data: Corpo já decodificado (dict, str ou None)

    Returns:
        IIQApiError com a melhor mensagem disponível
    """
    message: str | None = None
    error_code: str | None = None

    if isinstance(response_data, dict):
        for key in _MESSAGE_KEYS:
            value = response_data.get(key)
            if isinstance(value, str) and value.strip():
                message = value.strip()
                break
        raw_code = response_data.get("ErrorCode")
        if raw_code is not None:
            error_code = str(raw_code)
    elif isinstance(response_data, str) and response_data.strip():
        message = response_data.strip()[:200]

    return IIQApiError(
        status_code=status_code,
        message=message or f"Request failed with status code {status_code}",
        error_code=error_code,
    )
