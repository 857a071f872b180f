"""
Moteur de fortune déterministe.

Point d'entrée public du domaine: pour un couple (profil, date), interroge le calendrier
lunaire, dérive la graine, calcule énergies, scores, recommandation et créneaux, puis met le
résultat en cache.

Le même couple (profil, date) produit toujours le même résultat, que le cache soit chaud ou
froid.
"""

from __future__ import annotations

import time
from datetime import date, datetime

import structlog

from almanac.app.metrics import FORTUNE_CACHE_SIZE, FORTUNE_COMPUTE_LATENCY, FORTUNE_REQUESTS
from almanac.domain.disclaimer import EnhancedFortune, enhance
from almanac.domain.elements import compute_elements, round_half_up
from almanac.domain.entities import FortuneResult, UserProfile
from almanac.domain.errors import (
    ApplicationError,
    CalendarUnavailableError,
    InvalidDateError,
    ProfileIncompleteError,
)
from almanac.domain.fortune_cache import DEFAULT_CAPACITY, FortuneCache, cache_key
from almanac.domain.scoring import (
    advice_for,
    investment_score,
    overall_score,
    select_recommendation,
)
from almanac.domain.seed import (
    AVOID_TIME_STREAM,
    ELEMENTS_STREAM,
    INVESTMENT_STREAM,
    LUCKY_TIME_STREAM,
    derive_seed,
    make_rng,
)
from almanac.domain.time_windows import avoid_time, lucky_time
from almanac.infra.calendar.base import LunarCalendar

log = structlog.get_logger(__name__)


def parse_day(value) -> date:
    """Normalise la date cible: `date`, `datetime` (partie date) ou chaîne ISO `YYYY-MM-DD`.

    Raises:
        InvalidDateError: valeur absente, d'un autre type ou illisible.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as err:
            raise InvalidDateError(f"無效的日期: {value}", details={"date": value}) from err
    raise InvalidDateError(details={"date": repr(value)})


class FortuneEngine:
    """Calcule les fortunes quotidiennes et conserve les derniers résultats.

    Args:
        calendar: Adaptateur calendaire (tiges/branches, signe de l'année).
        cache_capacity: Nombre maximal de résultats conservés (éviction FIFO).
    """

    def __init__(self, calendar: LunarCalendar, cache_capacity: int = DEFAULT_CAPACITY):
        self.calendar = calendar
        self.cache = FortuneCache(cache_capacity)

    def calculate_daily_fortune(self, profile: UserProfile, day) -> FortuneResult:
        """Retourne la fortune de `profile` pour `day`.

        Raises:
            InvalidDateError: date illisible.
            ProfileIncompleteError: nom, date ou heure de naissance manquant.
            CalendarUnavailableError: le calendrier n'a pas pu résoudre la date.
        """
        target = parse_day(day)
        if not profile.is_complete:
            missing = profile.missing_fields()
            raise ProfileIncompleteError(
                f"請完整填寫個人資料: {'、'.join(missing)}", details={"missing": missing}
            )

        key = cache_key(profile, target)
        cached = self.cache.get(key)
        if cached is not None:
            FORTUNE_REQUESTS.labels("hit").inc()
            log.debug("fortune_cache_hit", key=key)
            return cached

        FORTUNE_REQUESTS.labels("miss").inc()
        start = time.perf_counter()
        result = self._compute(profile, target)
        FORTUNE_COMPUTE_LATENCY.observe(time.perf_counter() - start)

        self.cache.set(key, result)
        FORTUNE_CACHE_SIZE.set(len(self.cache))
        log.info(
            "fortune_computed",
            date=result.date,
            overall=result.overall_score,
            investment=result.investment_score,
            recommendation=result.recommendation.value,
        )
        return result

    def calculate_enhanced_fortune(self, profile: UserProfile, day) -> EnhancedFortune:
        """Fortune enrichie de l'avertissement, de la transparence et du contenu pédagogique."""
        return enhance(self.calculate_daily_fortune(profile, day))

    def clear_cache(self) -> None:
        self.cache.clear()
        FORTUNE_CACHE_SIZE.set(0)

    def get_cache_stats(self) -> dict[str, int]:
        return self.cache.stats()

    def _pillars(self, target: date):
        try:
            return (
                self.calendar.stem_branch_of_day(target),
                self.calendar.stem_branch_of_month(target),
            )
        except ApplicationError:
            raise
        except Exception as err:
            log.error("calendar_lookup_failed", date=target.isoformat(), error=str(err))
            raise CalendarUnavailableError(
                f"無法計算農民曆資料: {target.isoformat()}", details={"date": target.isoformat()}
            ) from err

    def _compute(self, profile: UserProfile, target: date) -> FortuneResult:
        day_pillar, month_pillar = self._pillars(target)
        seed = derive_seed(profile, target)

        elements = compute_elements(day_pillar, month_pillar, make_rng(seed + ELEMENTS_STREAM))
        overall = overall_score(elements)
        investment = investment_score(overall, profile.zodiac, make_rng(seed + INVESTMENT_STREAM))

        return FortuneResult(
            date=target.isoformat(),
            overall_score=round_half_up(overall),
            investment_score=round_half_up(investment),
            recommendation=select_recommendation(overall, investment),
            advice=advice_for(investment),
            lucky_time=lucky_time(profile.zodiac, day_pillar, make_rng(seed + LUCKY_TIME_STREAM)),
            avoid_time=avoid_time(profile.zodiac, day_pillar, make_rng(seed + AVOID_TIME_STREAM)),
            elements=elements,
        )
