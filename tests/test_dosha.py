"""Tests pour l'équilibre des doshas."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from cosmic.domain.dosha import dosha_balance, dosha_of_element, tally_doshas, to_percentages
from cosmic.domain.entities import CLASSICAL_PLANETS, Body, DoshaBalance
from cosmic.domain.vedic_tables import RASHIS

ALL_PLANETS = dict.fromkeys(CLASSICAL_PLANETS, object())


def test_dosha_of_element() -> None:
    """Teste la correspondance élément → dosha."""
    assert dosha_of_element("fire") == "pitta"
    assert dosha_of_element("water") == "kapha"
    assert dosha_of_element("earth") == "kapha"
    assert dosha_of_element("air") == "vata"
    assert dosha_of_element("ether") == "vata"
    with pytest.raises(ValueError):
        dosha_of_element("metal")


def test_tally_counts_ascendant_twice() -> None:
    """Teste que le signe ascendant compte double."""
    counts = tally_doshas("Pisces", ALL_PLANETS)
    assert counts == {"vata": 2, "pitta": 2, "kapha": 5}
    assert tally_doshas("Aries", ALL_PLANETS)["pitta"] == 4


def test_reference_balance() -> None:
    """Teste l'équilibre pour un ascendant Poissons."""
    balance = dosha_balance("Pisces", ALL_PLANETS)
    assert (balance.vata, balance.pitta, balance.kapha) == (22, 22, 56)
    assert balance.is_fallback is False


@pytest.mark.parametrize("rashi", RASHIS)
def test_balance_sums_to_100(rashi: str) -> None:
    """Teste que les pourcentages totalisent 100 pour tout ascendant."""
    balance = dosha_balance(rashi, ALL_PLANETS)
    assert balance.vata + balance.pitta + balance.kapha == 100
    assert min(balance.vata, balance.pitta, balance.kapha) >= 0


def test_to_percentages_largest_remainder() -> None:
    """Teste l'arrondi au plus fort reste."""
    assert to_percentages({"vata": 1, "pitta": 1, "kapha": 1}) == {
        "vata": 34,
        "pitta": 33,
        "kapha": 33,
    }
    assert to_percentages({"vata": 0, "pitta": 0, "kapha": 3}) == {
        "vata": 0,
        "pitta": 0,
        "kapha": 100,
    }
    with pytest.raises(ValueError):
        to_percentages({"vata": 0, "pitta": 0, "kapha": 0})


def test_fallback_without_planets() -> None:
    """Teste le repli explicite et journalisé quand les planètes manquent."""
    with capture_logs() as logs:
        balance = dosha_balance("Leo", {})
    assert (balance.vata, balance.pitta, balance.kapha) == (33, 33, 34)
    assert balance.is_fallback is True
    assert any(e["event"] == "dosha_fallback" and e["log_level"] == "warning" for e in logs)


def test_nodes_only_is_fallback() -> None:
    """Teste que les nœuds seuls ne suffisent pas au calcul."""
    balance = dosha_balance("Leo", {Body.RAHU: object(), Body.KETU: object()})
    assert balance.is_fallback is True


def test_unknown_rashi_raises() -> None:
    """Teste qu'un signe inconnu est refusé."""
    with pytest.raises(ValueError):
        dosha_balance("Ophiuchus", ALL_PLANETS)


def test_balance_model_rejects_bad_total() -> None:
    """Teste que le modèle refuse un total différent de 100."""
    with pytest.raises(ValueError):
        DoshaBalance(vata=50, pitta=50, kapha=50)
