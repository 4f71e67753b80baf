"""Cliente HTTP base para o conector IncidentIQ.

Cada chamada upstream executa exatamente uma vez: não há retry nem
backoff. Falhas de transporte e status não-2xx viram HttpError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from utils.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuração imutável do cliente HTTP.

    `transport` permite injetar httpx.MockTransport em testes.
    """

    base_url: str
    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    transport: httpx.AsyncBaseTransport | None = None


class HttpError(UpstreamError):
    """Falha de requisição upstream (transporte ou status não-2xx).

    Nunca carrega headers nem credenciais; só status, método, path e a
    mensagem devolvida pelo upstream.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        method: str | None = None,
        path: str | None = None,
        upstream_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.path = path
        self.upstream_message = upstream_message

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code in (401, 403)


class HttpClient:
    """Cliente HTTP simples: um AsyncClient por chamada, sem estado mutável."""

    def __init__(self, config: HttpClientConfig) -> None:
        self._config = config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Executa a requisição uma única vez.

        Raises:
            HttpError: timeout ou erro de conexão (status_code=None)
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        try:
            async with httpx.AsyncClient(
                base_url=self._config.base_url,
                headers=merged_headers,
                timeout=self._config.timeout_seconds,
                verify=self._config.verify_ssl,
                transport=self._config.transport,
            ) as client:
                return await client.request(method, path, json=json, params=params)
        except httpx.TimeoutException as exc:
            logger.warning("http_timeout", extra={"method": method, "path": path})
            raise HttpError(
                f"Request timed out: {method} {path}",
                method=method,
                path=path,
            ) from exc
        except httpx.TransportError as exc:
            logger.warning(
                "http_connection_error",
                extra={"method": method, "path": path, "error_type": type(exc).__name__},
            )
            raise HttpError(
                f"Connection failed: {method} {path}",
                method=method,
                path=path,
            ) from exc
