"""Tests pour le dépôt de thèmes en mémoire."""

from __future__ import annotations

from cosmic.domain.entities import BirthInput
from cosmic.infra.astro.internal_astro import InternalAstroEngine
from cosmic.infra.repositories import InMemoryChartRepo


def test_save_and_get(reference_birth: BirthInput) -> None:
    """Teste l'enregistrement puis la relecture d'un thème."""
    repo = InMemoryChartRepo()
    chart = InternalAstroEngine("fast").compute_natal_chart(reference_birth)
    key = reference_birth.cache_key()

    assert repo.get(key) is None
    assert repo.save(key, chart) is chart
    assert repo.get(key) is chart
    assert len(repo) == 1


def test_clear(reference_birth: BirthInput) -> None:
    """Teste la vidange du dépôt."""
    repo = InMemoryChartRepo()
    chart = InternalAstroEngine("fast").compute_natal_chart(reference_birth)
    repo.save("a", chart)
    repo.save("b", chart)
    repo.clear()
    assert len(repo) == 0
    assert repo.get("a") is None
