"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, dépôt, moteur astro, service)
et expose un singleton `container` utilisé par le reste de l'application.
"""

from __future__ import annotations

from cosmic.core.logging import setup_logging
from cosmic.core.settings import Settings, get_settings
from cosmic.domain.services import CosmicService
from cosmic.infra.astro.internal_astro import InternalAstroEngine
from cosmic.infra.repositories import InMemoryChartRepo


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        setup_logging(self.settings.LOG_LEVEL)
        self.astro = InternalAstroEngine(
            precision=self.settings.ASTRO_PRECISION,
            include_doshas=self.settings.ASTRO_INCLUDE_DOSHAS,
        )
        if self.settings.CHART_CACHE_ENABLED:
            self.chart_repo = InMemoryChartRepo()
            self.storage_backend = "memory"
        else:
            self.chart_repo = None
            self.storage_backend = "none"
        self.service = CosmicService(
            self.astro,
            self.chart_repo,
            include_doshas=self.settings.ASTRO_INCLUDE_DOSHAS,
        )


container = Container()
