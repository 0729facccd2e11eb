from __future__ import annotations

import time
from datetime import date as _date

import structlog

from cosmic.core.metrics import CHART_CACHE_HITS, CHART_COMPUTE_SECONDS, CHARTS_COMPUTED
from cosmic.domain.dosha import dosha_balance
from cosmic.domain.entities import BirthInput, NatalChart, VedicDailyContext


class CosmicService:
    """Service métier pour le contexte cosmique védique.

    Responsabilités:
    - Orchestrer les calculs de thème natal et de contexte du jour via `astro_engine`.
    - Mémoïser les thèmes dans `chart_repo` (clé: utilisateur, date, heure, lieu).
    - Joindre ou retirer l'équilibre des doshas selon `include_doshas`.
    """

    def __init__(self, astro_engine, chart_repo=None, include_doshas: bool = True):
        """Initialise le service avec ses dépendances.

        Paramètres:
        - astro_engine: composant réalisant les calculs astronomiques.
        - chart_repo: dépôt de thèmes servant de cache (None: pas de mémoïsation).
        - include_doshas: joindre un `DoshaBalance` aux thèmes natals.
        """
        self.astro = astro_engine
        self.charts = chart_repo
        self.include_doshas = include_doshas

    def compute_natal(self, birth: BirthInput) -> NatalChart:
        """Calcule (ou relit) le thème natal correspondant à `birth`.

        Paramètres:
        - birth: `BirthInput` avec les informations de naissance.

        Retour: `NatalChart` immuable; deux appels avec la même entrée renvoient des thèmes égaux.
        """
        log = structlog.get_logger(__name__).bind(user_id=birth.user_id)
        key = birth.cache_key()
        if self.charts is not None:
            cached = self.charts.get(key)
            if cached is not None:
                CHART_CACHE_HITS.inc()
                log.debug("chart_cache_hit", date=birth.date, time=birth.time)
                return cached

        start = time.perf_counter()
        chart = self.astro.compute_natal_chart(birth)
        CHART_COMPUTE_SECONDS.labels(precision=chart.precision).observe(
            time.perf_counter() - start
        )
        CHARTS_COMPUTED.labels(precision=chart.precision).inc()
        if self.include_doshas and chart.doshas is None:
            chart = chart.model_copy(
                update={"doshas": dosha_balance(chart.ascendant.rashi, chart.planets)}
            )
        elif not self.include_doshas and chart.doshas is not None:
            chart = chart.model_copy(update={"doshas": None})

        if self.charts is not None:
            self.charts.save(key, chart)
        log.info("natal_chart_ready", ascendant=chart.ascendant.rashi, precision=chart.precision)
        return chart

    def daily_context(self, day: _date | str | None = None) -> VedicDailyContext:
        """Contexte védique du jour (aujourd'hui par défaut)."""
        return self.astro.compute_daily_context(day if day is not None else _date.today())
