"""App - catálogo de operações, despacho e composição do serviço.

Subpastas:
- bootstrap/: composition root (logging, settings, sessão, dispatcher)
- operations/: descritores, registry, dispatcher e handlers por domínio
- protocols/: contratos consumidos pelos handlers (sem depender de api/)
- observability/: correlation_id e métricas via log estruturado

Padrão: app executa; api adapta; config parametriza; utils apoia.
"""
