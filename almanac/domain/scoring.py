"""Composition des scores et sélection de la recommandation.

- Score global: moyenne de l'équilibre (100 - variance) et de la proximité de la moyenne à 65.
- Score d'investissement: score global + bonus du signe + variation de ±5, borné à [0, 100].
- Recommandation: bandes sur la moyenne des deux scores (70 / 40).
- Conseil: bandes sur le seul score d'investissement (80 / 60 / 40), indépendantes des
  bandes de recommandation.
"""

from __future__ import annotations

from collections.abc import Callable

from almanac.domain.elements import clamp
from almanac.domain.entities import ElementEnergy, Recommendation
from almanac.domain.ganzhi import ZODIAC_BONUS, Zodiac

IDEAL_AVERAGE = 65.0
INVESTMENT_JITTER_SPAN = 10.0

BUY_THRESHOLD = 70.0
HOLD_THRESHOLD = 40.0

ADVICE_HIGH = "今日財運亨通，適合積極投資。建議在台股開盤時段（09:00-13:30）把握進場機會。"
ADVICE_MEDIUM = "今日運勢平穩，可考慮適量投資。建議觀察台股開盤後走勢再決定進場時機。"
ADVICE_LOW = "今日運勢一般，建議保持觀望。如有台股持倉建議持有，避免盤中頻繁交易。"
ADVICE_POOR = "今日運勢較弱，不宜投資。建議等待台股收盤後檢視，尋找更好的進場時機。"

# (seuil inclusif, texte), du plus haut au plus bas
ADVICE_BANDS: tuple[tuple[float, str], ...] = (
    (80.0, ADVICE_HIGH),
    (60.0, ADVICE_MEDIUM),
    (40.0, ADVICE_LOW),
)


def overall_score(elements: ElementEnergy) -> float:
    """Score global non arrondi, récompensant équilibre et moyenne proche de 65."""
    values = elements.values()
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    balance = max(0.0, 100.0 - variance)
    closeness = 100.0 - abs(mean - IDEAL_AVERAGE)
    return (balance + closeness) * 0.5


def investment_score(overall: float, zodiac: Zodiac, rng: Callable[[], float]) -> float:
    """Score d'investissement non arrondi (un tirage sur `rng`)."""
    score = overall + ZODIAC_BONUS.get(zodiac, 0)
    score += (rng() - 0.5) * INVESTMENT_JITTER_SPAN
    return clamp(score, 0.0, 100.0)


def combined_score(overall: float, investment: float) -> float:
    return (overall + investment) / 2


def select_recommendation(overall: float, investment: float) -> Recommendation:
    """BUY si combiné >= 70, HOLD si >= 40, SELL sinon (bornes basses inclusives)."""
    combined = combined_score(overall, investment)
    if combined >= BUY_THRESHOLD:
        return Recommendation.BUY
    if combined >= HOLD_THRESHOLD:
        return Recommendation.HOLD
    return Recommendation.SELL


def advice_for(investment: float) -> str:
    for threshold, text in ADVICE_BANDS:
        if investment >= threshold:
            return text
    return ADVICE_POOR
