"""Payload builders - construção de payloads para APIs externas.

Estrutura:
- incidentiq/: buscas POST e paginação GET da API IncidentIQ

Cada integração tem seus próprios builders, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
