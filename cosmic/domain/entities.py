"""
Entités du domaine métier.

Ce module définit les enregistrements de valeur (immuables) produits et consommés par le moteur
védique: instant civil, données de naissance, positions, maisons, panchanga et thème natal.
"""

from __future__ import annotations

import re
from datetime import date as _date
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cosmic.domain.errors import InvalidBirthDataError, UnknownBodyError

Precision = Literal["fast", "standard"]

_DATE_RE = re.compile(r"^(-?\d{1,6})-(\d{1,2})-(\d{1,2})$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}(?:\.\d+)?))?$")


def is_leap_year(year: int) -> bool:
    """Règle grégorienne proleptique (valable aussi avant 1582)."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Nombre de jours du mois `month` de l'année `year`."""
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return 30 if month in (4, 6, 9, 11) else 31


class Body(str, Enum):
    """Corps pris en compte dans le thème: 7 planètes classiques et nœuds lunaires."""

    SUN = "Sun"
    MOON = "Moon"
    MARS = "Mars"
    MERCURY = "Mercury"
    JUPITER = "Jupiter"
    VENUS = "Venus"
    SATURN = "Saturn"
    RAHU = "Rahu"
    KETU = "Ketu"

    @classmethod
    def parse(cls, value: Body | str) -> Body:
        """Convertit un nom (insensible à la casse) en `Body`.

        Raises:
            UnknownBodyError: si le nom ne correspond à aucun corps.
        """
        if isinstance(value, Body):
            return value
        if isinstance(value, str):
            for body in cls:
                if body.value.lower() == value.strip().lower():
                    return body
        raise UnknownBodyError(value)


CLASSICAL_PLANETS = (
    Body.SUN,
    Body.MOON,
    Body.MARS,
    Body.MERCURY,
    Body.JUPITER,
    Body.VENUS,
    Body.SATURN,
)


class CivilDateTime(BaseModel):
    """Instant civil grégorien, déjà exprimé dans le fuseau de calcul souhaité."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)
    hour: int = Field(default=0, ge=0, le=23)
    minute: int = Field(default=0, ge=0, le=59)
    second: float = Field(default=0.0, ge=0.0, lt=60.0)

    @model_validator(mode="after")
    def _check_day_of_month(self) -> CivilDateTime:
        limit = days_in_month(self.year, self.month)
        if self.day > limit:
            raise ValueError(f"day {self.day} out of range for {self.year}-{self.month:02d}")
        return self

    @classmethod
    def from_strings(cls, date_str: str, time_str: str = "00:00") -> CivilDateTime:
        """Construit un instant à partir de `YYYY-MM-DD` et `HH:MM[:SS]`.

        Raises:
            InvalidBirthDataError: si l'une des chaînes est mal formée.
        """
        date_match = _DATE_RE.match(date_str.strip()) if isinstance(date_str, str) else None
        if not date_match:
            raise InvalidBirthDataError("date", date_str, "expected YYYY-MM-DD")
        time_match = _TIME_RE.match(time_str.strip()) if isinstance(time_str, str) else None
        if not time_match:
            raise InvalidBirthDataError("time", time_str, "expected HH:MM or HH:MM:SS")
        year, month, day = (int(g) for g in date_match.groups())
        hour, minute, second = time_match.groups()
        return cls(
            year=year,
            month=month,
            day=day,
            hour=int(hour),
            minute=int(minute),
            second=float(second) if second else 0.0,
        )

    @classmethod
    def from_date(cls, day: _date) -> CivilDateTime:
        """Minuit civil du jour donné."""
        return cls(year=day.year, month=day.month, day=day.day)

    def day_fraction(self) -> float:
        """Fraction de jour écoulée depuis minuit."""
        return (self.hour + self.minute / 60.0 + self.second / 3600.0) / 24.0

    def isoformat(self) -> str:
        """Représentation ISO (secondes entières)."""
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{int(self.second):02d}"
        )


class BirthInput(BaseModel):
    """Données de naissance pour le calcul astrologique."""

    model_config = ConfigDict(frozen=True)

    date: str  # YYYY-MM-DD
    time: str  # HH:MM[:SS], heure locale déjà convertie par l'appelant
    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)  # est positif
    user_id: str | None = None

    @model_validator(mode="after")
    def _check_civil(self) -> BirthInput:
        self.civil()
        return self

    def civil(self) -> CivilDateTime:
        """Instant civil correspondant à `date` + `time`."""
        return CivilDateTime.from_strings(self.date, self.time)

    def cache_key(self) -> tuple[str | None, str, str, float, float]:
        """Clé de mémoïsation (utilisateur, date, heure, latitude, longitude)."""
        return (self.user_id, self.date, self.time, self.lat, self.lon)


class Placement(BaseModel):
    """Longitude sidérale classée en rashi, nakshatra et pada."""

    model_config = ConfigDict(frozen=True)

    sidereal_longitude: float
    rashi: str
    rashi_index: int = Field(ge=0, le=11)
    degree_in_rashi: float
    nakshatra: str
    nakshatra_index: int = Field(ge=0, le=26)
    nakshatra_pada: int = Field(ge=1, le=4)
    rashi_lord: str
    nakshatra_lord: str


class BodyPosition(Placement):
    """Position d'un corps: valeurs tropicale et sidérale, rétrogradation, maison."""

    body: Body
    tropical_longitude: float
    is_retrograde: bool = False
    house: int | None = Field(default=None, ge=1, le=12)


class Ascendant(Placement):
    """Ascendant (Lagna) calculé depuis le temps sidéral local."""

    tropical_longitude: float
    local_sidereal_time: float


class House(BaseModel):
    """Maison en signes entiers (whole-sign)."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1, le=12)
    longitude: float
    rashi: str
    degree_in_rashi: float
    lord: str


class Tithi(BaseModel):
    """Jour lunaire (12° d'élongation Lune - Soleil)."""

    model_config = ConfigDict(frozen=True)

    name: str
    index: int = Field(ge=0, le=29)
    paksha: Literal["Shukla", "Krishna"]
    degree: float


class Yoga(BaseModel):
    """Combinaison Soleil + Lune (27 divisions de 13°20')."""

    model_config = ConfigDict(frozen=True)

    name: str
    index: int = Field(ge=0, le=26)


class LunarPhase(BaseModel):
    """Phase lunaire nommée par octant de l'élongation."""

    model_config = ConfigDict(frozen=True)

    phase: str
    illumination: float = Field(ge=0.0, le=1.0)
    phase_angle: float


class DoshaBalance(BaseModel):
    """Répartition Vata/Pitta/Kapha en pourcentages entiers (somme = 100)."""

    model_config = ConfigDict(frozen=True)

    vata: int
    pitta: int
    kapha: int
    is_fallback: bool = False

    @model_validator(mode="after")
    def _check_total(self) -> DoshaBalance:
        if self.vata + self.pitta + self.kapha != 100:
            raise ValueError("dosha percentages must sum to 100")
        return self


class NatalChart(BaseModel):
    """Thème natal complet, créé une fois par tuple (date, heure, lat, lon)."""

    model_config = ConfigDict(frozen=True)

    birth: BirthInput
    birth_datetime: CivilDateTime
    precision: Precision
    julian_day: float
    ayanamsa: float
    ascendant: Ascendant
    planets: dict[Body, BodyPosition]
    houses: list[House]
    tithi: Tithi
    yoga: Yoga
    lunar_phase: LunarPhase
    doshas: DoshaBalance | None = None


class VedicDailyContext(BaseModel):
    """Contexte cosmique du jour, sans observateur (pas d'ascendant ni de maisons)."""

    model_config = ConfigDict(frozen=True)

    date: str
    precision: Precision
    julian_day: float
    ayanamsa: float
    sun: BodyPosition
    moon: BodyPosition
    tithi: Tithi
    yoga: Yoga
    lunar_phase: LunarPhase


class BodyDebug(BaseModel):
    """Détail intermédiaire du calcul d'un corps (diagnostic)."""

    model_config = ConfigDict(frozen=True)

    body: Body
    julian_day: float
    ayanamsa: float
    tropical_longitude: float
    sidereal_longitude: float
    rashi: str
    degree_in_rashi: float
    nakshatra: str


class AyanamsaCalibration(BaseModel):
    """Écart entre l'ayanamsa implicite d'un thème connu et celui du moteur."""

    model_config = ConfigDict(frozen=True)

    julian_day: float
    calculated_ayanamsa: float
    difference: float
