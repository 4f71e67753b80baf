"""Agregador de settings do gateway IncidentIQ.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Upstream settings
from config.settings.incidentiq import (
    IIQ_DEFAULT_BASE_URL,
    IIQ_DEFAULT_TIMEOUT_MS,
    IncidentIQSettings,
    get_incidentiq_settings,
)

__all__ = [
    # Constants
    "IIQ_DEFAULT_BASE_URL",
    "IIQ_DEFAULT_TIMEOUT_MS",
    # Base
    "BaseSettings",
    "Environment",
    # Upstream
    "IncidentIQSettings",
    "get_base_settings",
    "get_incidentiq_settings",
]
