"""Settings específicas da API IncidentIQ.

Configurações da sessão com a plataforma upstream (base URL, credencial,
headers de escopo e timeout). A carga via env fica isolada aqui; a sessão
HTTP recebe apenas valores já resolvidos.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Endpoint de demonstração usado quando nenhum distrito é configurado
IIQ_DEFAULT_BASE_URL: str = "https://demo.iiqstaging.com/api/v1.0"

# Timeout upstream em milissegundos (mesma unidade da variável IIQ_API_TIMEOUT)
IIQ_DEFAULT_TIMEOUT_MS: int = 30_000

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class IncidentIQSettings:
    """Configurações da integração IncidentIQ.

    Attributes:
        api_base_url: URL base da API do distrito (ex: https://x.incidentiq.com/api/v1.0)
        api_key: Token bearer do distrito
        site_id: Header SiteId opcional (escopo de site)
        product_id: Header ProductId opcional (escopo de produto de ticketing)
        request_timeout_ms: Timeout fixo por requisição, em milissegundos
        debug_requests: Loga método e path de cada chamada upstream
        strict_arguments: Rejeita argumentos inválidos antes do handler
    """

    api_base_url: str = IIQ_DEFAULT_BASE_URL
    api_key: str = ""
    site_id: str | None = None
    product_id: str | None = None
    request_timeout_ms: int = IIQ_DEFAULT_TIMEOUT_MS
    debug_requests: bool = False
    strict_arguments: bool = False

    @property
    def request_timeout_seconds(self) -> float:
        """Timeout convertido para segundos (unidade do httpx)."""
        return self.request_timeout_ms / 1000

    def scoping_headers(self) -> dict[str, str]:
        """Headers opcionais de escopo de site/produto."""
        headers: dict[str, str] = {}
        if self.site_id:
            headers["SiteId"] = self.site_id
        if self.product_id:
            headers["ProductId"] = self.product_id
        return headers

    def validate(self) -> list[str]:
        """Valida configurações mínimas.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("IIQ_API_KEY não configurado")

        if not self.api_base_url.startswith(("http://", "https://")):
            errors.append("IIQ_API_BASE_URL deve começar com http:// ou https://")

        if self.request_timeout_ms <= 0:
            errors.append("IIQ_API_TIMEOUT deve ser > 0")

        return errors


def _read_optional_env(key: str) -> str | None:
    value = os.getenv(key, "").strip()
    return value or None


def _load_from_env() -> IncidentIQSettings:
    """Carrega IncidentIQSettings a partir de variáveis de ambiente."""
    return IncidentIQSettings(
        api_base_url=os.getenv("IIQ_API_BASE_URL", IIQ_DEFAULT_BASE_URL),
        api_key=os.getenv("IIQ_API_KEY", ""),
        site_id=_read_optional_env("IIQ_SITE_ID"),
        product_id=_read_optional_env("IIQ_PRODUCT_ID_TICKETS"),
        request_timeout_ms=int(os.getenv("IIQ_API_TIMEOUT", str(IIQ_DEFAULT_TIMEOUT_MS))),
        debug_requests=os.getenv("DEBUG_API", "").lower() in _TRUTHY,
        strict_arguments=os.getenv("IIQ_STRICT_ARGUMENTS", "").lower() in _TRUTHY,
    )


@lru_cache(maxsize=1)
def get_incidentiq_settings() -> IncidentIQSettings:
    """Retorna instância cacheada de IncidentIQSettings."""
    return _load_from_env()
