"""
Moteur astronomique interne pour l'astrologie védique.

Ce module implémente toute la chaîne de calcul, sans I/O ni état partagé:
instant civil → jour julien → ayanamsa → longitudes tropicales (Soleil, Lune, planètes,
nœuds) → longitudes sidérales → classification; plus l'ascendant (temps sidéral local)
et les maisons en signes entiers.

Deux niveaux de précision sont proposés par un seul paramètre:
- "fast": formules courtes (13 termes lunaires, longitudes moyennes des planètes);
- "standard": série lunaire complète, réduction géocentrique képlérienne des planètes,
  ayanamsa de Lahiri avec taux de précession.
"""

from __future__ import annotations

import math
from datetime import date as _date
from typing import NamedTuple

import structlog
from pydantic import ValidationError

from cosmic.core.constants import (
    AYANAMSA_J2000,
    DAYS_PER_CENTURY,
    FAST_MOON_TERMS,
    J2000,
    LAHIRI_RATE_PER_CENTURY,
    RETROGRADE_STEP_DAYS,
)
from cosmic.domain.dosha import dosha_balance
from cosmic.domain.entities import (
    Ascendant,
    AyanamsaCalibration,
    BirthInput,
    Body,
    BodyDebug,
    BodyPosition,
    CivilDateTime,
    NatalChart,
    Precision,
    VedicDailyContext,
)
from cosmic.domain.errors import InvalidBirthDataError, UnknownBodyError
from cosmic.domain.zodiac import (
    classify,
    house_of,
    lunar_phase,
    normalize_degrees,
    tithi,
    whole_sign_houses,
    yoga,
)

PRECISIONS: tuple[Precision, ...] = ("fast", "standard")


def _check_precision(precision: str) -> None:
    if precision not in PRECISIONS:
        raise ValueError(f"unknown precision {precision!r}, expected one of {PRECISIONS}")


# --------------------------------------------------------------------------- temps


def julian_day(civil: CivilDateTime) -> float:
    """Jour julien d'un instant civil grégorien (janvier/février = mois 13/14)."""
    year, month = civil.year, civil.month
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    day_number = (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + civil.day
        + b
        - 1524.5
    )
    return day_number + civil.day_fraction()


def julian_centuries(jd: float) -> float:
    """Siècles juliens écoulés depuis J2000.0."""
    return (jd - J2000) / DAYS_PER_CENTURY


def ayanamsa(jd: float, precision: Precision = "standard") -> float:
    """Ayanamsa de Lahiri (degrés) pour un jour julien.

    "fast": polynôme seul, 23.85 + 0.000117·t² − 0.000000002·t³ (formule de référence telle
    quelle, quasi constante). "standard": même polynôme plus le taux de précession de Lahiri
    (50.2882″/an), croissant avec le temps.
    """
    _check_precision(precision)
    t = julian_centuries(jd)
    value = AYANAMSA_J2000 + 0.000117 * t * t - 0.000000002 * t * t * t
    if precision == "standard":
        value += LAHIRI_RATE_PER_CENTURY * t
    return value


def to_sidereal(tropical: float, ayanamsa_deg: float) -> float:
    """Longitude sidérale (nirayana) normalisée."""
    return normalize_degrees(tropical - ayanamsa_deg)


# --------------------------------------------------------------------------- Soleil


def sun_position(t: float) -> tuple[float, float]:
    """Longitude tropicale géocentrique du Soleil et rayon vecteur (UA).

    Args:
        t: Siècles juliens depuis J2000.0.
    """
    l0 = 280.46645 + 36000.76983 * t + 0.0003032 * t * t
    m = 357.52910 + 35999.05030 * t - 0.0001559 * t * t - 0.00000048 * t * t * t
    m_rad = math.radians(m)
    c = (
        (1.914600 - 0.004817 * t - 0.000014 * t * t) * math.sin(m_rad)
        + (0.019993 - 0.000101 * t) * math.sin(2 * m_rad)
        + 0.000290 * math.sin(3 * m_rad)
    )
    e = 0.016708634 - 0.000042037 * t - 0.0000001267 * t * t
    radius = 1.000001018 * (1 - e * e) / (1 + e * math.cos(math.radians(m + c)))
    return normalize_degrees(l0 + c), radius


# --------------------------------------------------------------------------- Lune

# (D, M, M', F, coefficient en 1e-6 degré), par amplitude décroissante
MOON_LONGITUDE_TERMS: tuple[tuple[int, int, int, int, int], ...] = (
    (0, 0, 1, 0, 6288774),
    (2, 0, -1, 0, 1274027),
    (2, 0, 0, 0, 658314),
    (0, 0, 2, 0, 213618),
    (0, 1, 0, 0, -185116),
    (0, 0, 0, 2, -114332),
    (2, 0, -2, 0, 58793),
    (2, -1, -1, 0, 57066),
    (2, 0, 1, 0, 53322),
    (2, -1, 0, 0, 45758),
    (0, 1, -1, 0, -40923),
    (1, 0, 0, 0, -34720),
    (0, 1, 1, 0, -30383),
    (2, 0, 0, -2, 15327),
    (0, 0, 1, 2, -12528),
    (0, 0, 1, -2, 10980),
    (4, 0, -1, 0, 10675),
    (0, 0, 3, 0, 10034),
    (4, 0, -2, 0, 8548),
    (2, 1, -1, 0, -7888),
    (2, 1, 0, 0, -6766),
    (1, 0, -1, 0, -5163),
    (1, 1, 0, 0, 4987),
    (2, -1, 1, 0, 4036),
    (2, 0, 2, 0, 3994),
    (4, 0, 0, 0, 3861),
    (2, 0, -3, 0, 3665),
    (0, 1, -2, 0, -2689),
    (2, 0, -1, 2, -2602),
    (2, -1, -2, 0, 2390),
    (1, 0, 1, 0, -2348),
    (2, -2, 0, 0, 2236),
    (0, 1, 2, 0, -2120),
    (0, 2, 0, 0, -2069),
    (2, -2, -1, 0, 2048),
    (2, 0, 1, -2, -1773),
    (2, 0, 0, 2, -1595),
    (4, -1, -1, 0, 1215),
    (0, 0, 2, 2, -1110),
    (3, 0, -1, 0, -892),
    (2, 1, 1, 0, -810),
    (4, -1, -2, 0, 759),
    (0, 2, -1, 0, -713),
    (2, 2, -1, 0, -700),
    (2, 1, -2, 0, 691),
    (2, -1, 0, -2, 596),
    (4, 0, 1, 0, 549),
    (0, 0, 4, 0, 537),
    (4, -1, 0, 0, 520),
    (1, 0, -2, 0, -487),
    (2, 1, 0, -2, -399),
    (0, 0, 2, -2, -381),
    (1, 1, 1, 0, 351),
    (3, 0, -2, 0, -340),
    (4, 0, -3, 0, 330),
    (2, -1, 2, 0, 327),
    (0, 2, 1, 0, -323),
    (1, 1, -1, 0, 299),
    (2, 0, 3, 0, 294),
)


def moon_longitude(t: float, precision: Precision = "standard") -> float:
    """Longitude tropicale géocentrique de la Lune (série périodique en D, M, M', F)."""
    _check_precision(precision)
    t2, t3, t4 = t * t, t * t * t, t * t * t * t
    mean_lon = 218.3164477 + 481267.88123421 * t - 0.0015786 * t2 + t3 / 538841 - t4 / 65194000
    elong = 297.8501921 + 445267.1114034 * t - 0.0018819 * t2 + t3 / 545868 - t4 / 113065000
    sun_anom = 357.5291092 + 35999.0502909 * t - 0.0001536 * t2 + t3 / 24490000
    moon_anom = 134.9633964 + 477198.8675055 * t + 0.0087414 * t2 + t3 / 69699 - t4 / 14712000
    arg_lat = 93.2720950 + 483202.0175233 * t - 0.0036539 * t2 - t3 / 3526000 + t4 / 863310000
    # Excentricité décroissante de l'orbite terrestre
    ecc = 1 - 0.002516 * t - 0.0000074 * t2

    d, m, mp, f = (math.radians(x) for x in (elong, sun_anom, moon_anom, arg_lat))
    terms = MOON_LONGITUDE_TERMS[:FAST_MOON_TERMS] if precision == "fast" else MOON_LONGITUDE_TERMS
    total = 0.0
    for cd, cm, cmp_, cf, coeff in terms:
        value = coeff * math.sin(cd * d + cm * m + cmp_ * mp + cf * f)
        if abs(cm) == 1:
            value *= ecc
        elif abs(cm) == 2:
            value *= ecc * ecc
        total += value

    if precision == "standard":
        a1 = math.radians(119.75 + 131.849 * t)
        a2 = math.radians(53.09 + 479264.290 * t)
        total += (
            3958 * math.sin(a1)
            + 1962 * math.sin(math.radians(mean_lon - arg_lat))
            + 318 * math.sin(a2)
        )
    return normalize_degrees(mean_lon + total / 1_000_000.0)


# --------------------------------------------------------------------------- nœuds


def rahu_longitude(t: float) -> float:
    """Nœud lunaire moyen ascendant (Rahu), rétrograde d'environ 1934°/siècle."""
    raw = (
        125.044555
        - 1934.1362619 * t
        + 0.0020762 * t * t
        + t * t * t / 467410
        - t * t * t * t / 60616000
    )
    return normalize_degrees(raw)


# --------------------------------------------------------------------------- planètes


class MeanOrbit(NamedTuple):
    """Éléments moyens (équinoxe de la date) en polynômes de t."""

    mean_longitude: tuple[float, float, float]
    semi_major_axis: float
    eccentricity: tuple[float, float]
    perihelion: tuple[float, float]


MEAN_ORBITS: dict[Body, MeanOrbit] = {
    Body.MERCURY: MeanOrbit(
        (252.250906, 149474.0722491, 0.00030350), 0.387098310,
        (0.20563175, 0.000020407), (77.456119, 1.5564775),
    ),
    Body.VENUS: MeanOrbit(
        (181.979801, 58519.2130302, 0.00031014), 0.723329820,
        (0.00677188, -0.000047766), (131.563707, 1.4022188),
    ),
    Body.MARS: MeanOrbit(
        (355.433275, 19141.6964746, 0.00031052), 1.523679342,
        (0.09340062, 0.000090483), (336.060234, 1.8410331),
    ),
    Body.JUPITER: MeanOrbit(
        (34.351484, 3036.3027889, 0.00022330), 5.202603191,
        (0.04849485, 0.000163244), (14.331309, 1.6126668),
    ),
    Body.SATURN: MeanOrbit(
        (50.077471, 1223.5110141, 0.00051908), 9.554909596,
        (0.05550862, -0.000346818), (93.056787, 1.9637694),
    ),
}


def solve_kepler(mean_anomaly: float, eccentricity: float) -> float:
    """Anomalie excentrique (radians) par itérations de Newton."""
    ecc_anom = mean_anomaly
    for _ in range(50):
        delta = (ecc_anom - eccentricity * math.sin(ecc_anom) - mean_anomaly) / (
            1 - eccentricity * math.cos(ecc_anom)
        )
        ecc_anom -= delta
        if abs(delta) < 1e-12:
            break
    return ecc_anom


def planet_longitude(body: Body, t: float, precision: Precision = "standard") -> float:
    """Longitude tropicale d'une planète (Mercure à Saturne).

    En précision "fast", la longitude moyenne héliocentrique est utilisée telle quelle.
    En "standard", la position képlérienne est ramenée au géocentre via le Soleil.
    """
    _check_precision(precision)
    orbit = MEAN_ORBITS.get(body)
    if orbit is None:
        raise UnknownBodyError(body)
    c0, c1, c2 = orbit.mean_longitude
    mean_lon = c0 + c1 * t + c2 * t * t
    if precision == "fast":
        return normalize_degrees(mean_lon)

    ecc = orbit.eccentricity[0] + orbit.eccentricity[1] * t
    perihelion = orbit.perihelion[0] + orbit.perihelion[1] * t
    mean_anom = math.radians(normalize_degrees(mean_lon - perihelion))
    ecc_anom = solve_kepler(mean_anom, ecc)
    true_anom = 2 * math.atan2(
        math.sqrt(1 + ecc) * math.sin(ecc_anom / 2),
        math.sqrt(1 - ecc) * math.cos(ecc_anom / 2),
    )
    radius = orbit.semi_major_axis * (1 - ecc * math.cos(ecc_anom))
    helio = true_anom + math.radians(perihelion)

    # Terre héliocentrique = Soleil géocentrique + 180°
    sun_lon, sun_radius = sun_position(t)
    earth = math.radians(sun_lon + 180.0)
    x = radius * math.cos(helio) - sun_radius * math.cos(earth)
    y = radius * math.sin(helio) - sun_radius * math.sin(earth)
    return normalize_degrees(math.degrees(math.atan2(y, x)))


def tropical_longitude(body: Body | str, jd: float, precision: Precision = "standard") -> float:
    """Longitude tropicale d'un corps quelconque au jour julien `jd`.

    Raises:
        UnknownBodyError: si `body` n'est pas un corps connu.
    """
    body = Body.parse(body)
    t = julian_centuries(jd)
    if body is Body.SUN:
        return sun_position(t)[0]
    if body is Body.MOON:
        return moon_longitude(t, precision)
    if body is Body.RAHU:
        return rahu_longitude(t)
    if body is Body.KETU:
        return normalize_degrees(rahu_longitude(t) + 180.0)
    return planet_longitude(body, t, precision)


def is_retrograde(body: Body | str, jd: float, precision: Precision = "standard") -> bool:
    """Mouvement apparent rétrograde (longitude décroissante sur un demi-jour)."""
    body = Body.parse(body)
    if body in (Body.RAHU, Body.KETU):
        return True
    if body in (Body.SUN, Body.MOON):
        return False
    before = tropical_longitude(body, jd, precision)
    after = tropical_longitude(body, jd + RETROGRADE_STEP_DAYS, precision)
    return normalize_degrees(after - before) > 180.0


# --------------------------------------------------------------------------- ascendant


def greenwich_sidereal_time(jd: float) -> float:
    """Temps sidéral moyen de Greenwich (degrés)."""
    t = julian_centuries(jd)
    theta = (
        280.46061837
        + 360.98564736629 * (jd - J2000)
        + 0.000387933 * t * t
        - t * t * t / 38710000
    )
    return normalize_degrees(theta)


def local_sidereal_time(jd: float, longitude: float) -> float:
    """Temps sidéral local (degrés) pour une longitude est-positive."""
    return normalize_degrees(greenwich_sidereal_time(jd) + longitude)


def obliquity(jd: float, precision: Precision = "standard") -> float:
    """Obliquité moyenne de l'écliptique (degrés)."""
    _check_precision(precision)
    t = julian_centuries(jd)
    if precision == "fast":
        return 23.439 - 0.0000004 * t
    return 23.4392911 - 0.0130042 * t - 0.000000164 * t * t + 0.000000504 * t * t * t


def ascendant_from_sidereal_time(lst: float, obliquity_deg: float, latitude: float) -> float:
    """Longitude tropicale de l'ascendant.

    atan[(sin LST·cos ε + tan φ·sin ε) / cos LST] évalué par arc tangente à deux arguments:
    le quadrant vient des signes du numérateur et du dénominateur, y compris lorsque
    cos(LST) s'annule (LST = 90° ou 270°).
    """
    theta = math.radians(lst)
    eps = math.radians(obliquity_deg)
    phi = math.radians(latitude)
    y = math.sin(theta) * math.cos(eps) + math.tan(phi) * math.sin(eps)
    x = math.cos(theta)
    return normalize_degrees(math.degrees(math.atan2(y, x)))


def ascendant_longitude(
    jd: float, latitude: float, longitude: float, precision: Precision = "standard"
) -> float:
    """Longitude tropicale de l'ascendant pour un lieu et un instant."""
    lst = local_sidereal_time(jd, longitude)
    return ascendant_from_sidereal_time(lst, obliquity(jd, precision), latitude)


# --------------------------------------------------------------------------- assemblage


def _validated_coordinates(latitude: float, longitude: float) -> tuple[float, float]:
    for field, value, bound in (("latitude", latitude, 90.0), ("longitude", longitude, 180.0)):
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise InvalidBirthDataError(field, value, "expected a number")
        if not math.isfinite(value) or abs(value) > bound:
            raise InvalidBirthDataError(field, value, f"expected a value in [-{bound}, {bound}]")
    return float(latitude), float(longitude)


def _validated_civil(birth_date: str, birth_time: str) -> CivilDateTime:
    try:
        return CivilDateTime.from_strings(birth_date, birth_time)
    except ValidationError as err:
        first = err.errors()[0]
        loc = first.get("loc") or ()
        if loc and loc[0] in ("hour", "minute", "second"):
            raise InvalidBirthDataError("time", birth_time, first["msg"]) from err
        raise InvalidBirthDataError("date", birth_date, first["msg"]) from err


class InternalAstroEngine:
    """
    Moteur astrologique védique interne.

    Fonction pure de ses entrées: deux appels identiques produisent des résultats égaux, et
    une instance peut être partagée entre threads sans verrou.
    """

    def __init__(self, precision: Precision = "standard", include_doshas: bool = True):
        """
        Initialise le moteur.

        Args:
            precision: "fast" ou "standard".
            include_doshas: Joindre l'équilibre des doshas aux thèmes natals.
        """
        _check_precision(precision)
        self.precision = precision
        self.include_doshas = include_doshas

    def body_position(
        self,
        body: Body | str,
        jd: float,
        ayanamsa_deg: float,
        ascendant_sidereal: float | None = None,
    ) -> BodyPosition:
        """Position classée d'un corps; la maison n'est renseignée qu'avec un ascendant."""
        body = Body.parse(body)
        tropical = tropical_longitude(body, jd, self.precision)
        sidereal = to_sidereal(tropical, ayanamsa_deg)
        return self._position(body, tropical, sidereal, jd, ascendant_sidereal)

    def _position(
        self,
        body: Body,
        tropical: float,
        sidereal: float,
        jd: float,
        ascendant_sidereal: float | None,
    ) -> BodyPosition:
        placement = classify(sidereal)
        house = None if ascendant_sidereal is None else house_of(sidereal, ascendant_sidereal)
        return BodyPosition(
            **placement.model_dump(),
            body=body,
            tropical_longitude=tropical,
            is_retrograde=is_retrograde(body, jd, self.precision),
            house=house,
        )

    def compute_natal_chart(self, birth: BirthInput) -> NatalChart:
        """
        Calculate a Vedic natal chart.

        Args:
            birth: Données de naissance (heure locale déjà convertie, lat/lon en degrés).

        Returns:
            NatalChart: ascendant, neuf corps, douze maisons, panchanga et doshas.
        """
        civil = birth.civil()
        jd = julian_day(civil)
        ayan = ayanamsa(jd, self.precision)

        asc_tropical = ascendant_longitude(jd, birth.lat, birth.lon, self.precision)
        asc_sidereal = to_sidereal(asc_tropical, ayan)
        ascendant = Ascendant(
            **classify(asc_sidereal).model_dump(),
            tropical_longitude=asc_tropical,
            local_sidereal_time=local_sidereal_time(jd, birth.lon),
        )

        planets: dict[Body, BodyPosition] = {}
        for body in Body:
            if body is Body.KETU:
                continue
            planets[body] = self.body_position(body, jd, ayan, asc_sidereal)
        rahu = planets[Body.RAHU]
        # Ketu dérivé de Rahu en sidéral: opposition exacte garantie
        planets[Body.KETU] = self._position(
            Body.KETU,
            normalize_degrees(rahu.tropical_longitude + 180.0),
            normalize_degrees(rahu.sidereal_longitude + 180.0),
            jd,
            asc_sidereal,
        )

        sun = planets[Body.SUN].sidereal_longitude
        moon = planets[Body.MOON].sidereal_longitude
        doshas = dosha_balance(ascendant.rashi, planets) if self.include_doshas else None

        chart = NatalChart(
            birth=birth,
            birth_datetime=civil,
            precision=self.precision,
            julian_day=jd,
            ayanamsa=ayan,
            ascendant=ascendant,
            planets=planets,
            houses=whole_sign_houses(asc_sidereal),
            tithi=tithi(sun, moon),
            yoga=yoga(sun, moon),
            lunar_phase=lunar_phase(sun, moon),
            doshas=doshas,
        )
        structlog.get_logger(__name__).debug(
            "natal_chart_computed",
            julian_day=jd,
            precision=self.precision,
            ascendant=ascendant.rashi,
        )
        return chart

    def compute_daily_context(self, day: _date | str | CivilDateTime) -> VedicDailyContext:
        """
        Calculate the daily (location-free) Vedic context.

        Args:
            day: Date (`date`, chaîne ISO `YYYY-MM-DD`) ou instant civil précis.

        Returns:
            VedicDailyContext: Soleil, Lune, tithi, yoga, phase et ayanamsa.
        """
        if isinstance(day, CivilDateTime):
            civil = day
        elif isinstance(day, _date):
            civil = CivilDateTime.from_date(day)
        else:
            civil = CivilDateTime.from_strings(day)
        jd = julian_day(civil)
        ayan = ayanamsa(jd, self.precision)
        sun = self.body_position(Body.SUN, jd, ayan)
        moon = self.body_position(Body.MOON, jd, ayan)
        return VedicDailyContext(
            date=f"{civil.year:04d}-{civil.month:02d}-{civil.day:02d}",
            precision=self.precision,
            julian_day=jd,
            ayanamsa=ayan,
            sun=sun,
            moon=moon,
            tithi=tithi(sun.sidereal_longitude, moon.sidereal_longitude),
            yoga=yoga(sun.sidereal_longitude, moon.sidereal_longitude),
            lunar_phase=lunar_phase(sun.sidereal_longitude, moon.sidereal_longitude),
        )

    def debug_body_position(self, birth: BirthInput, body: Body | str) -> BodyDebug:
        """Valeurs intermédiaires (jour julien, ayanamsa, tropical, sidéral) d'un corps."""
        body = Body.parse(body)
        jd = julian_day(birth.civil())
        ayan = ayanamsa(jd, self.precision)
        tropical = tropical_longitude(body, jd, self.precision)
        placement = classify(to_sidereal(tropical, ayan))
        return BodyDebug(
            body=body,
            julian_day=jd,
            ayanamsa=ayan,
            tropical_longitude=tropical,
            sidereal_longitude=placement.sidereal_longitude,
            rashi=placement.rashi,
            degree_in_rashi=placement.degree_in_rashi,
            nakshatra=placement.nakshatra,
        )

    def calibrate_ayanamsa(
        self, birth: BirthInput, known_tropical: float, known_sidereal: float
    ) -> AyanamsaCalibration:
        """Compare l'ayanamsa implicite d'un thème de référence à celui du moteur."""
        jd = julian_day(birth.civil())
        calculated = known_tropical - known_sidereal
        return AyanamsaCalibration(
            julian_day=jd,
            calculated_ayanamsa=calculated,
            difference=calculated - ayanamsa(jd, self.precision),
        )


def compute_natal_chart(
    birth_date: str,
    birth_time: str,
    latitude: float,
    longitude: float,
    precision: Precision = "standard",
    include_doshas: bool = True,
) -> NatalChart:
    """Point d'entrée fonctionnel: thème natal pour (date, heure, latitude, longitude).

    Raises:
        InvalidBirthDataError: date/heure mal formées ou coordonnées hors bornes.
    """
    lat, lon = _validated_coordinates(latitude, longitude)
    _validated_civil(birth_date, birth_time)
    birth = BirthInput(date=birth_date, time=birth_time, lat=lat, lon=lon)
    return InternalAstroEngine(precision, include_doshas).compute_natal_chart(birth)


def compute_vedic_daily_context(
    day: _date | str | CivilDateTime, precision: Precision = "standard"
) -> VedicDailyContext:
    """Point d'entrée fonctionnel: contexte védique du jour (sans lieu)."""
    return InternalAstroEngine(precision).compute_daily_context(day)
