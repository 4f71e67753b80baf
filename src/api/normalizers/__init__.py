"""Normalizers - conversão de payloads externos para modelos internos.

Estrutura:
- incidentiq/: normalizer das respostas da API IncidentIQ

Cada integração tem seu próprio normalizer, mantendo SRP.
"""

from .incidentiq import normalize, normalize_collection, normalize_entity

__all__ = [
    "normalize",
    "normalize_collection",
    "normalize_entity",
]
