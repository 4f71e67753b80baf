"""Configuração do pytest para o gateway IncidentIQ."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ e a raiz ao PYTHONPATH para imports absolutos (e tests.fakes)
root_path = Path(__file__).parent.parent
for path in (root_path / "src", root_path):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from tests.fakes.fake_incidentiq_api import FakeIncidentIQClient  # noqa: E402


@pytest.fixture
def fake_client() -> FakeIncidentIQClient:
    """Sessão IncidentIQ em memória."""
    return FakeIncidentIQClient()
