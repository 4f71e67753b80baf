"""Connectors - adapters de borda para APIs externas.

Estrutura:
- incidentiq/: API REST IncidentIQ (K-12 service management)

Cada integração tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
