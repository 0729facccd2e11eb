"""Tests pour la conversion instant civil → jour julien et l'ayanamsa."""

from __future__ import annotations

import pytest

from cosmic.domain.entities import CivilDateTime
from cosmic.infra.astro.internal_astro import ayanamsa, julian_centuries, julian_day

JD_J2000 = 2451545.0
JD_REFERENCE_BIRTH = 2447906.7708333
JD_MEEUS_MOON = 2448724.5
AYANAMSA_J2000 = 23.85
AYANAMSA_TOLERANCE = 0.01


def test_julian_day_j2000() -> None:
    """Teste que 2000-01-01 12:00 correspond à JD 2451545.0."""
    civil = CivilDateTime(year=2000, month=1, day=1, hour=12)
    assert julian_day(civil) == pytest.approx(JD_J2000, abs=1e-9)
    assert julian_centuries(julian_day(civil)) == pytest.approx(0.0, abs=1e-12)


def test_julian_day_reference_birth() -> None:
    """Teste le jour julien de la naissance de référence (heure décimale incluse)."""
    civil = CivilDateTime.from_strings("1990-01-15", "06:30")
    assert julian_day(civil) == pytest.approx(JD_REFERENCE_BIRTH, abs=1e-6)


def test_julian_day_january_february_shift() -> None:
    """Teste la continuité autour du 1er mars (mois 13/14 de l'année précédente)."""
    feb_end = julian_day(CivilDateTime(year=1992, month=2, day=29))
    march_first = julian_day(CivilDateTime(year=1992, month=3, day=1))
    assert march_first - feb_end == pytest.approx(1.0)
    assert julian_day(CivilDateTime(year=1992, month=4, day=12)) == pytest.approx(JD_MEEUS_MOON)


def test_julian_day_strictly_increasing_with_time() -> None:
    """Teste que le jour julien croît avec l'heure dans la journée."""
    values = [
        julian_day(CivilDateTime(year=2024, month=6, day=1, hour=h, minute=m))
        for h in range(24)
        for m in (0, 30)
    ]
    assert values == sorted(values)
    assert len(set(values)) == len(values)


@pytest.mark.parametrize("precision", ["fast", "standard"])
def test_ayanamsa_at_j2000(precision: str) -> None:
    """Teste la valeur de l'ayanamsa à J2000."""
    assert ayanamsa(JD_J2000, precision) == pytest.approx(AYANAMSA_J2000, abs=AYANAMSA_TOLERANCE)


def test_ayanamsa_standard_increases_with_time() -> None:
    """Teste que l'ayanamsa standard croît avec la précession (≈ 50.29″/an)."""
    years = range(1900, 2101, 10)
    values = [ayanamsa(julian_day(CivilDateTime(year=y, month=1, day=1))) for y in years]
    assert values == sorted(values)
    per_year = (values[-1] - values[0]) / (years[-1] - years[0])
    assert per_year * 3600 == pytest.approx(50.29, abs=0.05)


def test_ayanamsa_unknown_precision_raises() -> None:
    """Teste qu'une précision inconnue est refusée."""
    with pytest.raises(ValueError):
        ayanamsa(JD_J2000, "ultra")  # type: ignore[arg-type]


@pytest.mark.parametrize("centuries", [-1.0, 0.5, 1.0, 2.0])
def test_ayanamsa_fast_is_plain_polynomial(centuries: float) -> None:
    """Teste que l'ayanamsa rapide est le polynôme 23.85 + 0.000117·t² − 0.000000002·t³."""
    expected = 23.85 + 0.000117 * centuries**2 - 0.000000002 * centuries**3
    jd = JD_J2000 + centuries * 36525.0
    assert ayanamsa(jd, "fast") == pytest.approx(expected, abs=1e-12)
