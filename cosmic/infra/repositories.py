"""
Repositories pour la gestion des thèmes calculés.

Ce module fournit un dépôt en mémoire, indexé par la clé de naissance, utilisé comme cache de
mémoïsation par le service.
"""

from __future__ import annotations

import threading
from collections.abc import Hashable

from cosmic.domain.entities import NatalChart


class InMemoryChartRepo:
    """
    Dépôt de thèmes en mémoire (utilisé pour dev/tests).

    Stocke les thèmes dans un dict local, non persistant. Les thèmes étant immuables, une
    même instance peut être renvoyée à plusieurs appelants.
    """

    def __init__(self):
        """Initialise une base mémoire vide."""
        self._db: dict[Hashable, NatalChart] = {}
        self._lock = threading.Lock()

    def save(self, key: Hashable, chart: NatalChart) -> NatalChart:
        """Enregistre/écrase un thème et le renvoie."""
        with self._lock:
            self._db[key] = chart
        return chart

    def get(self, key: Hashable) -> NatalChart | None:
        """Retourne un thème par clé, ou None s'il est absent."""
        with self._lock:
            return self._db.get(key)

    def clear(self) -> None:
        """Vide le dépôt."""
        with self._lock:
            self._db.clear()

    def __len__(self) -> int:
        return len(self._db)
