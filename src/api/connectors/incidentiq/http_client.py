"""Cliente HTTP da API IncidentIQ (sessão de domínio).

Ponto único de IO com o upstream. Responsabilidades:
- Autenticação bearer e headers de escopo (SiteId/ProductId)
- Conversão de status não-2xx em HttpError tipado
- Normalização por formato declarado (coleção vs entidade)
- 404 em consultas de entidade única vira None, não exceção

A sessão é imutável após a construção; recursos por domínio
(tickets, users, assets...) compartilham a mesma instância.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

import httpx

from api.connectors.incidentiq.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.incidentiq.iiq_errors import parse_iiq_error
from api.connectors.incidentiq.iiq_logging import (
    log_iiq_error,
    log_request,
    log_shape_mismatch,
    log_success,
)
from api.connectors.incidentiq.resources import (
    AnalyticsResource,
    AssetsResource,
    CustomFieldsResource,
    IssuesResource,
    LocationsResource,
    NotificationsResource,
    PartsResource,
    PurchaseOrdersResource,
    SlasResource,
    TeamsResource,
    TicketsResource,
    UsersResource,
    ViewsResource,
)
from api.normalizers.incidentiq import detect_shape, normalize_collection, normalize_entity
from app.protocols.models import ConnectionStatus, PagedResult
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from api.connectors.incidentiq.endpoints import Endpoint
    from config.settings import IncidentIQSettings

logger: logging.Logger = logging.getLogger(__name__)

# Endpoint leve usado para sondar conectividade/autenticação
_PROBE_PATH = "/tickets/statuses"


class IncidentIQHttpClient(HttpClient):
    """Sessão autenticada com a API IncidentIQ de um distrito."""

    def __init__(
        self,
        config: HttpClientConfig,
        api_key: str,
        *,
        debug_requests: bool = False,
    ) -> None:
        """Inicializa a sessão.

        Args:
            config: Configuração HTTP (base_url, timeout, headers de escopo)
            api_key: Token bearer do distrito
            debug_requests: Loga método e path de cada chamada

        Raises:
            ConfigurationError: Se api_key ou base_url ausentes
        """
        if not api_key or not api_key.strip():
            logger.error("iiq_api_key_missing", extra={"base_url": config.base_url})
            raise ConfigurationError(
                "IncidentIQ API key is required. Configure IIQ_API_KEY for your district."
            )
        if not config.base_url:
            raise ConfigurationError("IncidentIQ base URL is required (IIQ_API_BASE_URL).")

        headers = {
            "Authorization": f"Bearer {api_key.strip()}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            **config.default_headers,
        }
        super().__init__(replace(config, default_headers=headers))
        self._debug_requests = debug_requests

        self.tickets = TicketsResource(self)
        self.users = UsersResource(self)
        self.assets = AssetsResource(self)
        self.locations = LocationsResource(self)
        self.parts = PartsResource(self)
        self.teams = TeamsResource(self)
        self.slas = SlasResource(self)
        self.views = ViewsResource(self)
        self.notifications = NotificationsResource(self)
        self.purchase_orders = PurchaseOrdersResource(self)
        self.custom_fields = CustomFieldsResource(self)
        self.analytics = AnalyticsResource(self)
        self.issues = IssuesResource(self)

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        """Executa a chamada e devolve o JSON decodificado (None se vazio).

        Raises:
            HttpError: Falha de transporte, status não-2xx ou JSON inválido
        """
        if self._debug_requests:
            log_request(method, path)

        params = {key: value for key, value in (query or {}).items() if value is not None}
        response = await self.send(method, path, json=body, params=params or None)

        if not response.is_success:
            error = parse_iiq_error(response.status_code, _decode_error_body(response))
            log_iiq_error(error, method, path)
            raise HttpError(
                f"IncidentIQ API error {response.status_code}: {error.message}",
                status_code=response.status_code,
                method=method,
                path=path,
                upstream_message=error.message,
            )

        log_success(method, path, response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("iiq_invalid_json", extra={"method": method, "path": path})
            raise HttpError(
                "IncidentIQ API returned an invalid JSON response",
                status_code=response.status_code,
                method=method,
                path=path,
            ) from exc

    async def fetch_collection(
        self,
        endpoint: Endpoint,
        *,
        body: Any = None,
        query: dict[str, Any] | None = None,
        **path_params: object,
    ) -> PagedResult:
        """Chama um endpoint de coleção e devolve o PagedResult canônico."""
        path = endpoint.format(**path_params)
        payload = await self.request(endpoint.method, path, body, query)
        self._check_shape(endpoint, path, payload)
        return normalize_collection(payload)

    async def fetch_entity(
        self,
        endpoint: Endpoint,
        *,
        body: Any = None,
        query: dict[str, Any] | None = None,
        absorb_not_found: bool = True,
        **path_params: object,
    ) -> Any | None:
        """Chama um endpoint de entidade única.

        404 devolve None quando absorb_not_found (consultas); ações
        (POST/PUT) usam absorb_not_found=False e propagam o HttpError.
        """
        path = endpoint.format(**path_params)
        try:
            payload = await self.request(endpoint.method, path, body, query)
        except HttpError as exc:
            if absorb_not_found and exc.is_not_found:
                logger.debug("iiq_entity_not_found", extra={"path": path})
                return None
            raise
        self._check_shape(endpoint, path, payload)
        return normalize_entity(payload)

    async def fetch_raw(
        self,
        endpoint: Endpoint,
        *,
        body: Any = None,
        query: dict[str, Any] | None = None,
        **path_params: object,
    ) -> Any:
        """Chama o endpoint sem normalizar (formatos que variam demais)."""
        path = endpoint.format(**path_params)
        return await self.request(endpoint.method, path, body, query)

    async def test_connection(self) -> ConnectionStatus:
        """Sonda o upstream com uma chamada leve e autenticada."""
        try:
            await self.request("GET", _PROBE_PATH)
        except HttpError as exc:
            if exc.status_code == 401:
                return ConnectionStatus(connected=False, error="Invalid API key")
            return ConnectionStatus(connected=False, error=f"Connection failed: {exc}")
        return ConnectionStatus(connected=True, district_name=self.district_name)

    @property
    def district_name(self) -> str | None:
        """Primeiro rótulo do host (ex: 'springfield' em springfield.incidentiq.com)."""
        host = httpx.URL(self.base_url).host
        if not host:
            return None
        return host.split(".")[0] or None

    def _check_shape(self, endpoint: Endpoint, path: str, payload: Any) -> None:
        if payload is None:
            return
        observed = detect_shape(payload)
        if not endpoint.matches(observed):
            log_shape_mismatch(path, endpoint.shape, observed)


def _decode_error_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def create_incidentiq_client(
    settings: IncidentIQSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> IncidentIQHttpClient:
    """Factory para criar a sessão IncidentIQ a partir das settings.

    Args:
        settings: IncidentIQSettings opcional. Se None, carrega do ambiente.
        transport: Transporte httpx alternativo (testes)

    Returns:
        Sessão configurada. Levanta ConfigurationError sem API key.
    """
    # Import local para evitar dependência circular
    from config.settings import get_incidentiq_settings

    iiq = settings or get_incidentiq_settings()
    config = HttpClientConfig(
        base_url=iiq.api_base_url,
        timeout_seconds=iiq.request_timeout_seconds,
        default_headers=iiq.scoping_headers(),
        transport=transport,
    )
    return IncidentIQHttpClient(
        config=config,
        api_key=iiq.api_key,
        debug_requests=iiq.debug_requests,
    )
