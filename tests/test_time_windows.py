"""Tests pour la sélection des créneaux favorables et à éviter."""

import re

from almanac.domain.ganzhi import Branch, Pillar, Stem, Zodiac
from almanac.domain.time_windows import (
    AVOID_PERIODS,
    TRADING_PERIODS,
    avoid_time,
    candidate_periods,
    lucky_time,
)

LABEL_RE = re.compile(r"^\d{2}:\d{2}-\d{2}:\d{2} \(.+\)$")
JIA_ZI = Pillar(Stem.JIA, Branch.ZI)  # bois (tige) et eau (branche)
WU_CHEN = Pillar(Stem.WU, Branch.CHEN)  # terre: aucun biais
GENG_WU = Pillar(Stem.GENG, Branch.WU)  # métal


class CountingRng:
    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return self.value


def test_candidates_around_anchor():
    """Teste les sous-périodes à ±1h de l'ancre de 巳 (9h)."""
    found = candidate_periods([Branch.SI], TRADING_PERIODS)
    assert [p.time for p in found] == ["09:00-09:30", "09:30-10:00", "10:00-10:30", "10:30-11:00"]


def test_candidates_keep_duplicates():
    """Teste que les doublons entre branches voisines sont conservés."""
    found = candidate_periods([Branch.SI, Branch.WU], TRADING_PERIODS)
    names = [p.name for p in found]
    assert names.count("上午中段") == 2


def test_candidates_fallback_to_all_periods():
    """Teste qu'aucune branche ancrée donne toutes les sous-périodes."""
    assert candidate_periods([Branch.ZI, Branch.SHEN], TRADING_PERIODS) == list(TRADING_PERIODS)
    assert candidate_periods([], AVOID_PERIODS) == list(AVOID_PERIODS)


def test_lucky_time_wood_day_keeps_morning():
    """Teste le biais des jours de bois (9h-11h) et le premier index."""
    assert lucky_time(Zodiac.RAT, JIA_ZI, lambda: 0.0) == "09:00-09:30 (開盤搶進)"
    last = lucky_time(Zodiac.RAT, JIA_ZI, lambda: 0.9999)
    assert last == "11:30-12:00 (盤整觀望)"


def test_lucky_time_without_bias_uses_all_candidates():
    """Teste qu'un jour de terre ne filtre pas les candidats."""
    assert lucky_time(Zodiac.RAT, WU_CHEN, lambda: 0.9999) == "13:00-13:30 (尾盤衝刺)"


def test_avoid_time_water_day():
    """Teste le signe du rat (conflit 午) un jour d'eau: seule l'ouverture reste."""
    assert avoid_time(Zodiac.RAT, JIA_ZI, lambda: 0.7) == "10:45-11:15 (中場休息)"


def test_avoid_time_empty_filter_falls_back_to_first_candidate():
    """Teste le repli sur le premier candidat, le tirage étant tout de même consommé."""
    rng = CountingRng(0.9)
    assert avoid_time(Zodiac.RAT, GENG_WU, rng) == "10:45-11:15 (中場休息)"
    assert rng.calls == 1


def test_labels_format():
    """Teste le format `HH:MM-HH:MM (nom)` pour tous les signes."""
    for zodiac in Zodiac:
        for value in (0.0, 0.5, 0.9999):
            assert LABEL_RE.match(lucky_time(zodiac, WU_CHEN, lambda: value))
            assert LABEL_RE.match(avoid_time(zodiac, WU_CHEN, lambda: value))


def test_lucky_time_fire_day_keeps_midday():
    """Teste le biais des jours de feu: seules les heures de début 11h-13h restent."""
    bing_xu = Pillar(Stem.BING, Branch.XU)
    assert lucky_time(Zodiac.RAT, bing_xu, lambda: 0.0) == "11:00-11:30 (午前加碼)"
    assert lucky_time(Zodiac.RAT, bing_xu, lambda: 0.9999) == "13:00-13:30 (尾盤衝刺)"


def test_avoid_time_hour_bounds_by_day_element():
    """Teste les bornes d'heures: métal garde l'après-midi, eau garde l'ouverture."""
    assert avoid_time(Zodiac.HORSE, GENG_WU, lambda: 0.0) == "13:15-13:30 (尾盤殺跌)"
    assert avoid_time(Zodiac.HORSE, GENG_WU, lambda: 0.9999) == "13:15-13:30 (尾盤殺跌)"
    assert avoid_time(Zodiac.HORSE, JIA_ZI, lambda: 0.0) == "09:00-09:15 (開盤震盪)"
    assert avoid_time(Zodiac.HORSE, JIA_ZI, lambda: 0.9999) == "09:45-10:15 (早盤追高)"
