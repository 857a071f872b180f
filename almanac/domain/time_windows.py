"""Sélection des créneaux favorables et à éviter dans la séance de la bourse de Taïwan.

Les branches horaires favorables (ou en opposition) du signe sont projetées sur la séance
09:00-13:30; seules 巳, 午 et 未 tombent dans la séance. Un second filtre dépend de
l'élément dominant du jour, puis un créneau est tiré dans le flux déterministe.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from almanac.domain.ganzhi import (
    ZODIAC_CONFLICT_BRANCH,
    ZODIAC_LUCKY_BRANCHES,
    Branch,
    Pillar,
    Stem,
    Zodiac,
)

ANCHOR_TOLERANCE_HOURS = 1


@dataclass(frozen=True)
class TradingPeriod:
    """Sous-période nommée de la séance, avec sa justification."""

    name: str
    time: str  # HH:MM-HH:MM
    description: str

    @property
    def start_hour(self) -> int:
        return int(self.time.split("-")[0].split(":")[0])

    def label(self) -> str:
        return f"{self.time} ({self.name})"


@dataclass(frozen=True)
class HourBranchWindow:
    """Plage horaire d'une branche (時辰) ramenée à la séance."""

    anchor_hour: int
    period: str


TRADING_PERIODS: tuple[TradingPeriod, ...] = (
    TradingPeriod("開盤搶進", "09:00-09:30", "適合搶進強勢股"),
    TradingPeriod("早盤選股", "09:30-10:00", "適合觀察選股"),
    TradingPeriod("上午中段", "10:00-10:30", "適合逢低買入"),
    TradingPeriod("盤中整理", "10:30-11:00", "適合觀察整理"),
    TradingPeriod("午前加碼", "11:00-11:30", "適合加碼投資"),
    TradingPeriod("盤整觀望", "11:30-12:00", "適合觀望等待"),
    TradingPeriod("午後佈局", "12:00-12:30", "適合佈局進場"),
    TradingPeriod("收盤前段", "12:30-13:00", "適合短線操作"),
    TradingPeriod("尾盤衝刺", "13:00-13:30", "適合尾盤衝刺"),
)

AVOID_PERIODS: tuple[TradingPeriod, ...] = (
    TradingPeriod("開盤震盪", "09:00-09:15", "開盤價格震盪劇烈"),
    TradingPeriod("早盤追高", "09:45-10:15", "容易追高套牢"),
    TradingPeriod("中場休息", "10:45-11:15", "交易量萎縮整理"),
    TradingPeriod("午前賣壓", "11:45-12:15", "獲利了結賣壓"),
    TradingPeriod("尾盤殺跌", "13:15-13:30", "尾盤容易殺跌"),
)

BRANCH_TRADING_WINDOWS: dict[Branch, HourBranchWindow] = {
    Branch.SI: HourBranchWindow(9, "09:00-11:00"),
    Branch.WU: HourBranchWindow(11, "11:00-13:00"),
    Branch.WEI: HourBranchWindow(13, "13:00-13:30"),
}

WOOD_DAY = ({Stem.JIA, Stem.YI}, {Branch.YIN, Branch.MAO})
FIRE_DAY = ({Stem.BING, Stem.DING}, {Branch.SI, Branch.WU})
METAL_DAY = ({Stem.GENG, Stem.XIN}, {Branch.SHEN, Branch.YOU})
WATER_DAY = ({Stem.REN, Stem.GUI}, {Branch.ZI, Branch.HAI})


def _is_day(day: Pillar, kind: tuple[set[Stem], set[Branch]]) -> bool:
    stems, branches = kind
    return day.stem in stems or day.branch in branches


def candidate_periods(
    branches: Iterable[Branch], periods: Sequence[TradingPeriod]
) -> list[TradingPeriod]:
    """Sous-périodes dont l'heure de début est à ±1h de l'ancre d'une des branches.

    Les doublons sont conservés dans l'ordre de rencontre; sans intersection, toutes les
    sous-périodes sont candidates.
    """
    found: list[TradingPeriod] = []
    for branch in branches:
        window = BRANCH_TRADING_WINDOWS.get(branch)
        if window is None:
            continue
        found.extend(
            p for p in periods if abs(p.start_hour - window.anchor_hour) <= ANCHOR_TOLERANCE_HOURS
        )
    return found or list(periods)


# Bornes (incluses) des heures de début retenues selon l'élément du jour
LUCKY_WOOD_HOURS = (9, 11)
LUCKY_FIRE_HOURS = (11, 13)
AVOID_METAL_HOURS = (12, 23)
AVOID_WATER_HOURS = (0, 10)


def _pick(
    candidates: list[TradingPeriod],
    hours: tuple[int, int] | None,
    rng: Callable[[], float],
) -> TradingPeriod:
    if hours is None:
        filtered = candidates
    else:
        low, high = hours
        filtered = [p for p in candidates if low <= p.start_hour <= high]
    r = rng()
    if not filtered:
        return candidates[0]
    return filtered[math.floor(r * len(filtered))]


def lucky_time(zodiac: Zodiac, day: Pillar, rng: Callable[[], float]) -> str:
    """Créneau favorable: jours de bois -> matin (9-11h), jours de feu -> midi (11-13h)."""
    candidates = candidate_periods(ZODIAC_LUCKY_BRANCHES.get(zodiac, ()), TRADING_PERIODS)
    hours = None
    if _is_day(day, WOOD_DAY):
        hours = LUCKY_WOOD_HOURS
    elif _is_day(day, FIRE_DAY):
        hours = LUCKY_FIRE_HOURS
    return _pick(candidates, hours, rng).label()


def avoid_time(zodiac: Zodiac, day: Pillar, rng: Callable[[], float]) -> str:
    """Créneau à éviter: jours de métal -> après-midi (>= 12h), jours d'eau -> ouverture (<= 10h)."""
    conflict = ZODIAC_CONFLICT_BRANCH.get(zodiac)
    candidates = candidate_periods([conflict] if conflict else [], AVOID_PERIODS)
    hours = None
    if _is_day(day, METAL_DAY):
        hours = AVOID_METAL_HOURS
    elif _is_day(day, WATER_DAY):
        hours = AVOID_WATER_HOURS
    return _pick(candidates, hours, rng).label()
