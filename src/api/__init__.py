"""API - camada de borda com a plataforma IncidentIQ.

Responsabilidades:
- Sessão HTTP autenticada com o distrito (único ponto de IO upstream)
- Normalizar as respostas heterogêneas para os contratos canônicos
- Construir corpos de busca e queries de paginação
- Expor a superfície HTTP (health, readiness, operações)

Subpastas:
- connectors/: sessão IncidentIQ e recursos por domínio
- normalizers/: respostas upstream -> PagedResult / entidade
- payload_builders/: buscas POST e paginação GET
- routes/: endpoints HTTP (health, operations)

NÃO PODE conter: catálogo de operações, formatação de texto, regras de domínio.
"""
