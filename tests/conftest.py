"""
Pytest fixtures for plume tests. Storage goes to a temporary SQLite file.
"""

from __future__ import annotations

import pytest

from plume_cli.config import Settings
from plume_cli.engine import AnalysisEngine
from plume_cli.service import DetectionService
from plume_cli.storage import DetectionStore

AI_TEXT = (
    "Il est important de noter que l'intelligence artificielle transforme profondément la société moderne. "
    "Premièrement, les technologies numériques modifient notre rapport au travail et à l'apprentissage. "
    "Deuxièmement, il convient de souligner que la recherche scientifique bénéficie de nouvelles méthodes d'analyse des données. "
    "Cependant, il faut noter que ces transformations soulèvent des questions éthiques importantes. "
    "En conclusion, le développement durable et la mondialisation exigent une réflexion approfondie."
)

HUMAN_TEXT = (
    "Hier soir, on a raté le dernier bus. Du coup, on est rentrés à pied sous la pluie, "
    "trempés mais morts de rire. Bon, je ne recommande pas."
)


@pytest.fixture
def ai_text():
    """Texte au style générique : formules toutes faites, énumération, connecteurs."""
    return AI_TEXT


@pytest.fixture
def human_text():
    """Texte familier, court, sans formule type."""
    return HUMAN_TEXT


@pytest.fixture
def engine():
    return AnalysisEngine()


@pytest.fixture
def store(tmp_path):
    """Detection store on a fresh temporary database, tables created."""
    db = DetectionStore(tmp_path / "plume.db")
    db.init_tables()
    return db


@pytest.fixture
def service(store):
    return DetectionService(store=store, settings=Settings())


@pytest.fixture
def db_env(tmp_path, monkeypatch):
    """Point the CLI at a temporary database through PLUME_DB_PATH."""
    path = tmp_path / "cli.db"
    monkeypatch.setenv("PLUME_DB_PATH", str(path))
    monkeypatch.delenv("PLUME_LOG_FORMAT", raising=False)
    monkeypatch.delenv("PLUME_LOG_LEVEL", raising=False)
    return path
