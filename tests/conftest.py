"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports `cosmic` en ajoutant la racine du projet au
sys.path pour les tests, et fournit les données de naissance de référence.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from cosmic...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture
def reference_birth():
    """Naissance de référence: 1990-01-15 06:30, 23.1765 N / 75.7885 E."""
    from cosmic.domain.entities import BirthInput

    return BirthInput(date="1990-01-15", time="06:30", lat=23.1765, lon=75.7885)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restaure la configuration structlog par défaut après chaque test."""
    import structlog

    yield
    structlog.reset_defaults()
