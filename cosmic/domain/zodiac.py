"""
Classification sidérale et panchanga.

Objectif: à partir d'une longitude sidérale (degrés), retrouver le rashi, le nakshatra et le
pada; à partir des longitudes du Soleil et de la Lune, calculer tithi, yoga et phase lunaire;
à partir de l'ascendant, dérouler les douze maisons en signes entiers.
"""

from __future__ import annotations

import math

from cosmic.core.constants import (
    FULL_CIRCLE,
    NAKSHATRA_SPAN,
    PADA_SPAN,
    PHASE_BUCKET_SPAN,
    RASHI_SPAN,
    TITHI_SPAN,
)
from cosmic.domain.entities import House, LunarPhase, Placement, Tithi, Yoga
from cosmic.domain.errors import AstroInputError
from cosmic.domain.vedic_tables import (
    LUNAR_PHASES,
    NAKSHATRAS,
    PAKSHAS,
    RASHI_LORDS,
    RASHIS,
    TITHIS,
    VIMSHOTTARI_LORDS,
    YOGAS,
)


def normalize_degrees(value: float) -> float:
    """Ramène un angle dans [0, 360).

    Raises:
        AstroInputError: si la valeur n'est pas finie.
    """
    if not math.isfinite(value):
        raise AstroInputError(f"non-finite angle: {value!r}")
    result = value % FULL_CIRCLE
    # -1e-20 % 360.0 == 360.0 en flottant
    if result >= FULL_CIRCLE:
        result = 0.0
    return result


def rashi_index(longitude: float) -> int:
    """Index 0..11 du signe contenant la longitude."""
    return int(normalize_degrees(longitude) // RASHI_SPAN) % 12


def nakshatra_index(longitude: float) -> int:
    """Index 0..26 du nakshatra contenant la longitude."""
    return int(normalize_degrees(longitude) // NAKSHATRA_SPAN) % 27


def nakshatra_pada(longitude: float) -> int:
    """Quart (1..4) du nakshatra contenant la longitude."""
    within = normalize_degrees(longitude) % NAKSHATRA_SPAN
    return min(int(within // PADA_SPAN), 3) + 1


def classify(longitude: float) -> Placement:
    """Classe une longitude sidérale en rashi / nakshatra / pada avec leurs maîtres."""
    lon = normalize_degrees(longitude)
    r_idx = rashi_index(lon)
    n_idx = nakshatra_index(lon)
    return Placement(
        sidereal_longitude=lon,
        rashi=RASHIS[r_idx],
        rashi_index=r_idx,
        degree_in_rashi=lon % RASHI_SPAN,
        nakshatra=NAKSHATRAS[n_idx],
        nakshatra_index=n_idx,
        nakshatra_pada=nakshatra_pada(lon),
        rashi_lord=RASHI_LORDS[r_idx],
        nakshatra_lord=VIMSHOTTARI_LORDS[n_idx % len(VIMSHOTTARI_LORDS)],
    )


def elongation(sun_longitude: float, moon_longitude: float) -> float:
    """Élongation Lune - Soleil dans [0, 360) (même sens pour tithi et phase)."""
    return normalize_degrees(moon_longitude - sun_longitude)


def tithi(sun_longitude: float, moon_longitude: float) -> Tithi:
    """Jour lunaire: un tithi par tranche de 12° d'élongation."""
    lunar_day = elongation(sun_longitude, moon_longitude)
    index = min(int(lunar_day // TITHI_SPAN), 29)
    return Tithi(
        name=TITHIS[index],
        index=index,
        paksha=PAKSHAS[index // 15],
        degree=lunar_day % TITHI_SPAN,
    )


def yoga(sun_longitude: float, moon_longitude: float) -> Yoga:
    """Yoga: somme des longitudes découpée en 27 parts de 13°20'."""
    total = normalize_degrees(sun_longitude + moon_longitude)
    index = int(total // NAKSHATRA_SPAN) % 27
    return Yoga(name=YOGAS[index], index=index)


def lunar_phase(sun_longitude: float, moon_longitude: float) -> LunarPhase:
    """Phase lunaire (8 octants de 45°) et fraction éclairée du disque.

    Fraction éclairée: (1 + cos élongation) / 2, soit 1 à élongation 0° et 0 à 180°.
    """
    angle = elongation(sun_longitude, moon_longitude)
    bucket = min(int(angle // PHASE_BUCKET_SPAN), 7)
    illumination = (1.0 + math.cos(math.radians(angle))) / 2.0
    return LunarPhase(
        phase=LUNAR_PHASES[bucket],
        illumination=min(max(illumination, 0.0), 1.0),
        phase_angle=angle,
    )


def house_of(longitude: float, ascendant_longitude: float) -> int:
    """Maison (1..12, signes entiers) occupée par une longitude."""
    return (rashi_index(longitude) - rashi_index(ascendant_longitude)) % 12 + 1


def whole_sign_houses(ascendant_longitude: float) -> list[House]:
    """Douze maisons de 30° à partir de la longitude de l'ascendant."""
    houses = []
    for number in range(1, 13):
        lon = normalize_degrees(ascendant_longitude + (number - 1) * RASHI_SPAN)
        idx = rashi_index(lon)
        houses.append(
            House(
                number=number,
                longitude=lon,
                rashi=RASHIS[idx],
                degree_in_rashi=lon % RASHI_SPAN,
                lord=RASHI_LORDS[idx],
            )
        )
    return houses


def format_dms(degrees: float) -> str:
    """Formate un angle positif en `D° M' S"` (secondes tronquées)."""
    total_seconds = int(round(abs(degrees) * 3600.0, 6))
    d, rest = divmod(total_seconds, 3600)
    m, s = divmod(rest, 60)
    sign = "-" if degrees < 0 else ""
    return f"{sign}{d}° {m}' {s}\""
