"""
Mise en forme des résultats pour les consommateurs (affichage, génération de texte).
"""

from __future__ import annotations

from typing import Any

from cosmic.domain.entities import NatalChart, VedicDailyContext


def _sign_degree(rashi: str, degree: float, digits: int = 1) -> str:
    return f"{rashi} {degree:.{digits}f}°"


def natal_chart_for_prompt(chart: NatalChart) -> dict[str, Any]:
    """Vue compacte d'un thème natal, sérialisable en JSON.

    Clés: `ascendant` (texte), `planets` (par nom de corps), `houses` (par numéro de maison),
    `dosha_balance` (pourcentages, ou None), `panchanga` (tithi, yoga, phase).
    """
    planets = {
        body.value: {
            "sign": pos.rashi,
            "degree": round(pos.degree_in_rashi, 2),
            "nakshatra": pos.nakshatra,
            "pada": pos.nakshatra_pada,
            "lord": pos.rashi_lord,
            "house": pos.house,
            "retrograde": pos.is_retrograde,
        }
        for body, pos in chart.planets.items()
    }
    houses = {
        str(house.number): {
            "sign": house.rashi,
            "degree": round(house.degree_in_rashi, 2),
            "lord": house.lord,
        }
        for house in chart.houses
    }
    doshas = None
    if chart.doshas is not None:
        doshas = {
            "vata": chart.doshas.vata,
            "pitta": chart.doshas.pitta,
            "kapha": chart.doshas.kapha,
        }
    return {
        "ascendant": _sign_degree(chart.ascendant.rashi, chart.ascendant.degree_in_rashi, 2),
        "ascendant_nakshatra": chart.ascendant.nakshatra,
        "planets": planets,
        "houses": houses,
        "dosha_balance": doshas,
        "panchanga": {
            "tithi": f"{chart.tithi.paksha} {chart.tithi.name}",
            "yoga": chart.yoga.name,
            "phase": chart.lunar_phase.phase,
        },
    }


def format_daily_context(ctx: VedicDailyContext) -> dict[str, str]:
    """Chaînes courtes pour l'affichage du contexte du jour."""
    return {
        "sun": _sign_degree(ctx.sun.rashi, ctx.sun.degree_in_rashi),
        "moon": _sign_degree(ctx.moon.rashi, ctx.moon.degree_in_rashi),
        "nakshatra": ctx.moon.nakshatra,
        "tithi": ctx.tithi.name,
        "paksha": ctx.tithi.paksha,
        "phase": ctx.lunar_phase.phase,
        "yoga": ctx.yoga.name,
    }
