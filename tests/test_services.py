"""Tests pour le service de contexte cosmique (mémoïsation et doshas)."""

from __future__ import annotations

from datetime import date
from unittest.mock import Mock

from cosmic.domain.entities import BirthInput
from cosmic.domain.services import CosmicService
from cosmic.infra.astro.internal_astro import InternalAstroEngine
from cosmic.infra.repositories import InMemoryChartRepo


def _spy_engine(**kwargs) -> Mock:
    """Moteur réel enveloppé dans un Mock pour compter les appels."""
    return Mock(wraps=InternalAstroEngine(**kwargs))


def test_compute_natal_memoised(reference_birth: BirthInput) -> None:
    """Teste que le second appel relit le thème depuis le dépôt."""
    engine = _spy_engine()
    repo = InMemoryChartRepo()
    service = CosmicService(engine, repo)

    first = service.compute_natal(reference_birth)
    second = service.compute_natal(reference_birth)

    assert first is second
    assert engine.compute_natal_chart.call_count == 1
    assert len(repo) == 1


def test_compute_natal_without_cache(reference_birth: BirthInput) -> None:
    """Teste que sans dépôt chaque appel recalcule un thème égal."""
    engine = _spy_engine()
    service = CosmicService(engine, None)

    first = service.compute_natal(reference_birth)
    second = service.compute_natal(reference_birth)

    assert first == second
    assert engine.compute_natal_chart.call_count == 2


def test_cache_key_includes_user(reference_birth: BirthInput) -> None:
    """Teste que deux utilisateurs ne partagent pas la même entrée de cache."""
    engine = _spy_engine()
    service = CosmicService(engine, InMemoryChartRepo())
    other = reference_birth.model_copy(update={"user_id": "someone"})

    service.compute_natal(reference_birth)
    service.compute_natal(other)

    assert engine.compute_natal_chart.call_count == 2


def test_doshas_added_when_engine_omits_them(reference_birth: BirthInput) -> None:
    """Teste que le service joint les doshas si le moteur ne les fournit pas."""
    service = CosmicService(InternalAstroEngine(include_doshas=False), include_doshas=True)
    chart = service.compute_natal(reference_birth)
    assert chart.doshas is not None
    assert chart.doshas.vata + chart.doshas.pitta + chart.doshas.kapha == 100


def test_doshas_removed_when_disabled(reference_birth: BirthInput) -> None:
    """Teste que le service retire les doshas quand ils sont désactivés."""
    service = CosmicService(InternalAstroEngine(), include_doshas=False)
    assert service.compute_natal(reference_birth).doshas is None


def test_daily_context_delegates() -> None:
    """Teste la délégation du contexte du jour au moteur."""
    engine = _spy_engine(precision="fast")
    service = CosmicService(engine)

    ctx = service.daily_context(date(2024, 3, 21))

    engine.compute_daily_context.assert_called_once_with(date(2024, 3, 21))
    assert ctx.date == "2024-03-21"
    assert ctx.precision == "fast"


def test_daily_context_defaults_to_today() -> None:
    """Teste que la date par défaut est aujourd'hui."""
    engine = Mock()
    CosmicService(engine).daily_context()
    engine.compute_daily_context.assert_called_once_with(date.today())


def test_service_metrics(reference_birth: BirthInput) -> None:
    """Teste que les calculs et les relectures du cache sont comptés."""
    from prometheus_client import REGISTRY

    def sample(name: str, labels: dict[str, str] | None = None) -> float:
        return REGISTRY.get_sample_value(name, labels or {}) or 0.0

    computed = sample("cosmic_charts_computed_total", {"precision": "fast"})
    hits = sample("cosmic_chart_cache_hits_total")
    service = CosmicService(InternalAstroEngine("fast"), InMemoryChartRepo())

    service.compute_natal(reference_birth)
    service.compute_natal(reference_birth)

    assert sample("cosmic_charts_computed_total", {"precision": "fast"}) == computed + 1
    assert sample("cosmic_chart_cache_hits_total") == hits + 1
