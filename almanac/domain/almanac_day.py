"""
Almanach du jour (農民曆): date lunaire, 宜/忌, fêtes, 節氣 et 納音, avec une lecture boursière.

Le calendrier fournit un `AlmanacDay` déjà traduit en chinois traditionnel; ce module en dérive
un conseil (score, heure et direction favorables, niveau de risque) et une répartition des
heures de séance entre heures fastes et heures à éviter selon la tige du jour.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from datetime import date
from enum import Enum

import structlog

from almanac.domain.elements import round_half_up
from almanac.domain.entities import CamelModel
from almanac.domain.errors import ApplicationError, CalendarUnavailableError
from almanac.domain.ganzhi import Branch, Stem, Zodiac

ALMANAC_CACHE_SIZE = 366

BASE_SCORE = 50
LUCKY_STEMS = frozenset({Stem.JIA, Stem.YI, Stem.BING, Stem.DING, Stem.WU})
LUCKY_BRANCHES = frozenset(
    {Branch.ZI, Branch.YIN, Branch.MAO, Branch.WU, Branch.WEI, Branch.YOU}
)
YEAR_STEM_BONUS = 10
YEAR_BRANCH_BONUS = 10
DAY_STEM_BONUS = 15
DAY_BRANCH_BONUS = 15

INVESTMENT_YI = ("開市", "交易", "立券", "納財", "求財")
INVESTMENT_JI = ("破財", "大耗", "劫煞", "災煞")
YI_BONUS = 10
JI_PENALTY = 15


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AlmanacAction(str, Enum):
    BUY = "buy"
    HOLD = "hold"
    OBSERVE = "observe"
    SELL = "sell"


class AlmanacDay(CamelModel):
    """Données de l'almanach pour une date civile, libellés en chinois traditionnel."""

    date: str
    lunar_year: str
    lunar_month: str
    lunar_day: str
    year_gan_zhi: str
    month_gan_zhi: str
    day_gan_zhi: str
    zodiac: Zodiac
    constellation: str = ""
    year_na_yin: str = ""
    day_na_yin: str = ""
    jie_qi: str = ""
    festivals: tuple[str, ...] = ()
    yi: tuple[str, ...] = ()
    ji: tuple[str, ...] = ()
    peng_zu: str = ""

    @property
    def day_stem(self) -> Stem:
        return _stem_of(self.day_gan_zhi, self.date)


class AlmanacAdvice(CamelModel):
    lucky_score: int
    lucky_time: str
    lucky_direction: str
    advice: str
    risk_level: RiskLevel
    recommended_action: AlmanacAction


class HourAdvice(CamelModel):
    time: str
    description: str
    reason: str


class TradingTimeAnalysis(CamelModel):
    recommended_times: tuple[HourAdvice, ...]
    avoid_times: tuple[HourAdvice, ...]


class AlmanacReport(CamelModel):
    """Réponse complète de `/almanac/{day}`."""

    day: AlmanacDay
    advice: AlmanacAdvice
    trading_times: TradingTimeAnalysis


# Heures fastes (時辰) selon la tige du jour
LUCKY_HOURS_BY_STEM: dict[Stem, frozenset[Branch]] = {
    Stem.JIA: frozenset({Branch.ZI, Branch.MAO, Branch.WU, Branch.YOU}),
    Stem.YI: frozenset({Branch.CHOU, Branch.CHEN, Branch.WEI, Branch.XU}),
    Stem.BING: frozenset({Branch.YIN, Branch.SI, Branch.SHEN, Branch.HAI}),
    Stem.DING: frozenset({Branch.MAO, Branch.WU, Branch.YOU, Branch.ZI}),
    Stem.WU: frozenset({Branch.CHEN, Branch.WEI, Branch.XU, Branch.CHOU}),
    Stem.JI: frozenset({Branch.SI, Branch.SHEN, Branch.HAI, Branch.YIN}),
    Stem.GENG: frozenset({Branch.WU, Branch.YOU, Branch.ZI, Branch.MAO}),
    Stem.XIN: frozenset({Branch.WEI, Branch.XU, Branch.CHOU, Branch.CHEN}),
    Stem.REN: frozenset({Branch.SHEN, Branch.HAI, Branch.YIN, Branch.SI}),
    Stem.GUI: frozenset({Branch.YOU, Branch.ZI, Branch.MAO, Branch.WU}),
}

LUCKY_TIME_BY_STEM: dict[Stem, str] = {
    Stem.JIA: "卯時 (05:00-07:00)",
    Stem.YI: "辰時 (07:00-09:00)",
    Stem.BING: "午時 (11:00-13:00)",
    Stem.DING: "未時 (13:00-15:00)",
    Stem.WU: "申時 (15:00-17:00)",
    Stem.JI: "酉時 (17:00-19:00)",
    Stem.GENG: "戌時 (19:00-21:00)",
    Stem.XIN: "亥時 (21:00-23:00)",
    Stem.REN: "子時 (23:00-01:00)",
    Stem.GUI: "丑時 (01:00-03:00)",
}

LUCKY_DIRECTION_BY_STEM: dict[Stem, str] = {
    Stem.JIA: "東方",
    Stem.YI: "東南",
    Stem.BING: "南方",
    Stem.DING: "西南",
    Stem.WU: "中央",
    Stem.JI: "中央",
    Stem.GENG: "西方",
    Stem.XIN: "西北",
    Stem.REN: "北方",
    Stem.GUI: "東北",
}

# Heures de séance (09:00-13:30) et leur 時辰
SESSION_HOURS: tuple[tuple[str, Branch, str], ...] = (
    ("09:00-10:00", Branch.SI, "早盤交易"),
    ("10:00-11:00", Branch.SI, "上午盤中"),
    ("11:00-12:00", Branch.WU, "午盤交易"),
    ("12:00-13:00", Branch.WU, "午盤後段"),
    ("13:00-13:30", Branch.WEI, "收盤交易"),
)


def _stem_of(gan_zhi: str, day: str) -> Stem:
    try:
        return Stem(gan_zhi[:1])
    except ValueError as err:
        raise CalendarUnavailableError(f"干支無法辨識: {gan_zhi}", details={"day": day}) from err


def _parts(gan_zhi: str) -> tuple[Stem | None, Branch | None]:
    stems = {s.value: s for s in Stem}
    branches = {b.value: b for b in Branch}
    return stems.get(gan_zhi[:1]), branches.get(gan_zhi[1:2])


def ganzhi_score(year_gan_zhi: str, day_gan_zhi: str) -> int:
    """Score 0-100: base 50, bonus pour les tiges 甲-戊 et les branches 子寅卯午未酉."""
    score = BASE_SCORE
    for gan_zhi, stem_bonus, branch_bonus in (
        (year_gan_zhi, YEAR_STEM_BONUS, YEAR_BRANCH_BONUS),
        (day_gan_zhi, DAY_STEM_BONUS, DAY_BRANCH_BONUS),
    ):
        stem, branch = _parts(gan_zhi)
        if stem in LUCKY_STEMS:
            score += stem_bonus
        if branch in LUCKY_BRANCHES:
            score += branch_bonus
    return min(100, max(0, score))


def yi_ji_score(yi: Iterable[str], ji: Iterable[str]) -> int:
    """+10 par activité 宜 liée à l'argent, -15 par 忌 néfaste; borné à 0-100."""
    score = BASE_SCORE
    score += YI_BONUS * sum(1 for item in yi if any(word in item for word in INVESTMENT_YI))
    score -= JI_PENALTY * sum(1 for item in ji if any(word in item for word in INVESTMENT_JI))
    return min(100, max(0, score))


def almanac_advice(day: AlmanacDay) -> AlmanacAdvice:
    """Conseil du jour: moyenne des scores 干支 et 宜忌, puis bandes 80/60/40."""
    gan_zhi = ganzhi_score(day.year_gan_zhi, day.day_gan_zhi)
    score = round_half_up((gan_zhi + yi_ji_score(day.yi, day.ji)) / 2)
    if score >= 80:
        text = f"今日{day.year_gan_zhi}，天時地利，適合積極投資。建議把握機會進場。"
        risk, action = RiskLevel.LOW, AlmanacAction.BUY
    elif score >= 60:
        text = "今日運勢平穩，適合持有現有部位，小量加減碼。"
        risk, action = RiskLevel.MEDIUM, AlmanacAction.HOLD
    elif score >= 40:
        text = "今日宜觀望，避免大額交易，可考慮減少風險部位。"
        risk, action = RiskLevel.MEDIUM, AlmanacAction.OBSERVE
    else:
        text = "今日運勢不佳，建議減倉避險，暫停新投資計畫。"
        risk, action = RiskLevel.HIGH, AlmanacAction.SELL
    stem = day.day_stem
    return AlmanacAdvice(
        lucky_score=score,
        lucky_time=LUCKY_TIME_BY_STEM[stem],
        lucky_direction=LUCKY_DIRECTION_BY_STEM[stem],
        advice=text,
        risk_level=risk,
        recommended_action=action,
    )


def trading_time_analysis(day: AlmanacDay) -> TradingTimeAnalysis:
    """Répartit les heures de séance entre heures fastes et heures à éviter."""
    lucky_hours = LUCKY_HOURS_BY_STEM[day.day_stem]
    recommended, avoid = [], []
    for time_range, branch, description in SESSION_HOURS:
        name = f"{branch.value}時"
        if branch in lucky_hours:
            reason = f"{name}為今日吉時，適合進場操作"
            recommended.append(HourAdvice(time=time_range, description=description, reason=reason))
        else:
            reason = f"{name}為今日平時或凶時，宜謹慎觀望"
            avoid.append(HourAdvice(time=time_range, description=description, reason=reason))
    return TradingTimeAnalysis(recommended_times=tuple(recommended), avoid_times=tuple(avoid))


class AlmanacService:
    """Almanach par date avec cache FIFO.

    Args:
        calendar: Calendrier fournissant `almanac_day`.
        max_size: Nombre de dates conservées.
    """

    def __init__(self, calendar, max_size: int = ALMANAC_CACHE_SIZE):
        self.calendar = calendar
        self.max_size = max_size
        self._entries: dict[date, AlmanacDay] = {}
        self._lock = threading.Lock()
        self._log = structlog.get_logger(__name__).bind(component="almanac")

    def get_day(self, day: date) -> AlmanacDay:
        with self._lock:
            cached = self._entries.get(day)
        if cached is not None:
            return cached
        try:
            result = self.calendar.almanac_day(day)
        except ApplicationError:
            raise
        except Exception as err:
            self._log.error("almanac_lookup_failed", day=day.isoformat(), error=str(err))
            raise CalendarUnavailableError(
                f"無法計算農民曆資料: {day.isoformat()}", details={"day": day.isoformat()}
            ) from err
        with self._lock:
            if day not in self._entries and len(self._entries) >= self.max_size:
                del self._entries[next(iter(self._entries))]
            self._entries[day] = result
        self._log.info("almanac_computed", day=day.isoformat(), festivals=len(result.festivals))
        return result

    def report(self, day: date) -> AlmanacReport:
        almanac = self.get_day(day)
        return AlmanacReport(
            day=almanac,
            advice=almanac_advice(almanac),
            trading_times=trading_time_analysis(almanac),
        )
