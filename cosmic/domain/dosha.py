"""
Équilibre des doshas (Vata / Pitta / Kapha) dérivé du thème.

Règles:
- chaque planète classique porte un élément (feu, terre, air, eau, éther) et compte pour 1;
- l'élément du signe ascendant compte double;
- feu → Pitta, terre/eau → Kapha, air/éther → Vata.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from cosmic.core.constants import NEUTRAL_DOSHA_SPLIT
from cosmic.domain.entities import CLASSICAL_PLANETS, Body, DoshaBalance
from cosmic.domain.vedic_tables import DOSHA_ELEMENTS, PLANET_ELEMENTS, RASHI_ELEMENTS, RASHIS

ASCENDANT_WEIGHT = 2

_DOSHAS = ("vata", "pitta", "kapha")


def dosha_of_element(element: str) -> str:
    """Dosha associé à un élément."""
    for dosha, elements in DOSHA_ELEMENTS.items():
        if element in elements:
            return dosha
    raise ValueError(f"unknown element: {element!r}")


def tally_doshas(ascendant_rashi: str, planets) -> dict[str, int]:
    """Décompte brut (non normalisé) des doshas."""
    counts = dict.fromkeys(_DOSHAS, 0)
    for body in CLASSICAL_PLANETS:
        if body in planets:
            counts[dosha_of_element(PLANET_ELEMENTS[body.value])] += 1
    element = RASHI_ELEMENTS[RASHIS.index(ascendant_rashi)]
    counts[dosha_of_element(element)] += ASCENDANT_WEIGHT
    return counts


def to_percentages(counts: Mapping[str, int]) -> dict[str, int]:
    """Normalise en pourcentages entiers dont la somme vaut exactement 100.

    Méthode du plus fort reste: partie entière de chaque part, puis les points manquants
    vont aux plus grands restes (ordre vata, pitta, kapha en cas d'égalité).
    """
    total = sum(counts.values())
    if total <= 0:
        raise ValueError("cannot normalise an empty dosha tally")
    exact = {k: counts[k] * 100 / total for k in _DOSHAS}
    floors = {k: int(v) for k, v in exact.items()}
    missing = 100 - sum(floors.values())
    by_remainder = sorted(_DOSHAS, key=lambda k: exact[k] - floors[k], reverse=True)
    for k in by_remainder[:missing]:
        floors[k] += 1
    return floors


def dosha_balance(ascendant_rashi: str, planets: Mapping[Body, object] | None) -> DoshaBalance:
    """Calcule l'équilibre des doshas.

    Args:
        ascendant_rashi: Nom du signe ascendant.
        planets: Positions indexées par `Body` (seules les clés sont lues).

    Returns:
        DoshaBalance: pourcentages; repli explicite 33/33/34 (`is_fallback=True`) si aucune
        planète classique n'est disponible.
    """
    if not planets or not any(body in planets for body in CLASSICAL_PLANETS):
        structlog.get_logger(__name__).warning(
            "dosha_fallback", reason="no_planets", ascendant=ascendant_rashi
        )
        vata, pitta, kapha = NEUTRAL_DOSHA_SPLIT
        return DoshaBalance(vata=vata, pitta=pitta, kapha=kapha, is_fallback=True)
    if ascendant_rashi not in RASHIS:
        raise ValueError(f"unknown rashi: {ascendant_rashi!r}")
    pct = to_percentages(tally_doshas(ascendant_rashi, planets))
    return DoshaBalance(**pct)
