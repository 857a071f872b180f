"""Modèle d'énergie des cinq éléments (五行).

Base 50 par élément, bonus des tiges/branches du jour (poids plein) et du mois (demi-poids),
puis une variation aléatoire de ±10 par élément.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from almanac.domain.entities import ElementEnergy
from almanac.domain.ganzhi import BRANCH_MODIFIERS, STEM_MODIFIERS, Element, Pillar

BASE_ENERGY = 50.0
JITTER_SPAN = 20.0
MIN_ENERGY = 10
MAX_ENERGY = 100

DAY_WEIGHT = 1.0
MONTH_WEIGHT = 0.5


def round_half_up(value: float) -> int:
    """Arrondi au plus proche, les demis vers +inf (le `round` natif arrondit au pair)."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _apply(energy: dict[Element, float], modifier: tuple[Element, int] | None, weight: float) -> None:
    # Entrée absente de la table: contribution nulle
    if modifier is None:
        return
    element, bonus = modifier
    energy[element] += bonus * weight


def raw_energy(day: Pillar, month: Pillar) -> dict[Element, float]:
    """Énergies avant variation aléatoire, indexées dans l'ordre de `Element`."""
    energy = {element: BASE_ENERGY for element in Element}
    _apply(energy, STEM_MODIFIERS.get(day.stem), DAY_WEIGHT)
    _apply(energy, BRANCH_MODIFIERS.get(day.branch), DAY_WEIGHT)
    _apply(energy, STEM_MODIFIERS.get(month.stem), MONTH_WEIGHT)
    _apply(energy, BRANCH_MODIFIERS.get(month.branch), MONTH_WEIGHT)
    return energy


def compute_elements(day: Pillar, month: Pillar, rng: Callable[[], float]) -> ElementEnergy:
    """Calcule l'énergie des cinq éléments pour un jour.

    Args:
        day: Tige/branche du jour.
        month: Tige/branche du mois.
        rng: Flux déterministe; un tirage par élément (metal, wood, water, fire, earth).

    Returns:
        ElementEnergy: valeurs entières bornées à [10, 100].
    """
    energy = raw_energy(day, month)
    final = {}
    for element in Element:
        jittered = energy[element] + (rng() - 0.5) * JITTER_SPAN
        final[element.value] = round_half_up(clamp(jittered, MIN_ENERGY, MAX_ENERGY))
    return ElementEnergy(**final)
