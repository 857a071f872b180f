"""Tests pour le modèle d'énergie des cinq éléments."""

import pytest

from almanac.domain.elements import compute_elements, raw_energy, round_half_up
from almanac.domain.ganzhi import Branch, Element, Pillar, Stem

JIA_ZI = Pillar(Stem.JIA, Branch.ZI)
YI_CHOU = Pillar(Stem.YI, Branch.CHOU)
MIN_ENERGY = 10
MAX_ENERGY = 100


def constant(value):
    return lambda: value


def test_round_half_up():
    """Teste l'arrondi des demis vers le haut (différent de `round`)."""
    assert round_half_up(2.5) == 3
    assert round_half_up(77.5) == 78
    assert round_half_up(64.49) == 64
    assert round_half_up(-0.5) == 0


def test_raw_energy_day_and_month_weights():
    """Teste les bonus du jour (poids 1) et du mois (poids 0.5)."""
    energy = raw_energy(JIA_ZI, YI_CHOU)
    assert energy[Element.WOOD] == pytest.approx(50 + 20 + 7.5)
    assert energy[Element.WATER] == pytest.approx(65)
    assert energy[Element.EARTH] == pytest.approx(55)
    assert energy[Element.METAL] == pytest.approx(50)
    assert energy[Element.FIRE] == pytest.approx(50)


def test_compute_elements_without_jitter():
    """Teste qu'un tirage à 0.5 n'ajoute aucune variation."""
    energy = compute_elements(JIA_ZI, YI_CHOU, constant(0.5))
    assert energy.values() == [50, 78, 65, 50, 55]


def test_compute_elements_draw_order():
    """Teste que les tirages sont consommés dans l'ordre metal, wood, water, fire, earth."""
    draws = iter([0.0, 0.5, 0.5, 0.5, 1.0])
    energy = compute_elements(JIA_ZI, YI_CHOU, lambda: next(draws))
    assert energy.metal == 40
    assert energy.earth == 65


def test_compute_elements_clamped():
    """Teste le bornage à [10, 100] quel que soit le tirage."""
    high = compute_elements(Pillar(Stem.JIA, Branch.MAO), Pillar(Stem.JIA, Branch.YIN), constant(0.9999))
    assert high.wood <= MAX_ENERGY
    for rng_value in (0.0, 0.25, 0.75, 0.9999):
        energy = compute_elements(JIA_ZI, YI_CHOU, constant(rng_value))
        assert all(MIN_ENERGY <= v <= MAX_ENERGY for v in energy.values())
