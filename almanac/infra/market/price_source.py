"""
Source de prix de l'ETF avec repli synthétique.

`PriceService` interroge FinMind et, en cas d'échec ou de réponse vide, fabrique une série
synthétique plausible. Une série fabriquée est toujours marquée (`source="synthetic"`,
`fallback_reason`), journalisée et comptée: elle ne doit jamais passer pour une vraie donnée.
"""

from __future__ import annotations

import random
import threading
import time
from collections.abc import Callable
from datetime import date, timedelta

import structlog

from almanac.app.metrics import PRICE_FALLBACK_TOTAL, PRICE_FETCH_TOTAL
from almanac.domain.entities import PriceBar, PriceSeries
from almanac.domain.errors import PriceDataUnavailableError
from almanac.domain.trading_calendar import is_trading_day, previous_trading_day
from almanac.infra.market.finmind_client import FinMindClient

SOURCE_FINMIND = "finmind"
SOURCE_SYNTHETIC = "synthetic"

REASON_ERROR = "source_error"
REASON_EMPTY = "empty_result"

# Marche aléatoire: écart d'ouverture, variation de séance, mèches, borne autour du prix de base
GAP_SPAN = 0.005
MOVE_SPAN = 0.02
WICK_SPAN = 0.01
DRIFT_LIMIT = 0.3
VOLUME_RANGE = (10_000, 60_000)


def trading_days_between(start: date, end: date) -> list[date]:
    days = []
    current = start
    while current <= end:
        if is_trading_day(current):
            days.append(current)
        current += timedelta(days=1)
    return days


def synthetic_days(start: date, end: date) -> list[date]:
    """Jours ouvrés de l'intervalle; sans aucun, le dernier jour ouvré au plus tard `end`."""
    days = trading_days_between(start, end)
    if days:
        return days
    return [previous_trading_day(end + timedelta(days=1))]


def synthetic_bars(
    start: date, end: date, base_price: float, rng: random.Random
) -> list[PriceBar]:
    """Marche aléatoire bornée sur les seuls jours ouvrés, OHLC cohérents.

    Chaque bougie vérifie `low <= min(open, close)` et `high >= max(open, close)`; la clôture
    reste dans ±30 % du prix de base. Un intervalle sans séance (week-end, congé) donne une
    bougie unique au dernier jour ouvré.
    """
    floor_price = base_price * (1 - DRIFT_LIMIT)
    ceiling_price = base_price * (1 + DRIFT_LIMIT)
    previous_close = base_price
    bars = []
    for day in synthetic_days(start, end):
        open_ = previous_close * (1 + rng.uniform(-GAP_SPAN, GAP_SPAN))
        close = open_ * (1 + rng.uniform(-MOVE_SPAN, MOVE_SPAN))
        close = min(ceiling_price, max(floor_price, close))
        open_, close = round(open_, 2), round(close, 2)
        high = round(max(open_, close) * (1 + rng.uniform(0, WICK_SPAN)), 2)
        low = round(min(open_, close) * (1 - rng.uniform(0, WICK_SPAN)), 2)
        bars.append(
            PriceBar(
                date=day.isoformat(),
                open=open_,
                high=max(high, open_, close),
                low=min(low, open_, close),
                close=close,
                volume=rng.randint(*VOLUME_RANGE),
            )
        )
        previous_close = close
    return bars


class PriceService:
    """Séries de prix avec cache TTL et repli synthétique.

    Args:
        client: Client FinMind.
        base_price: Prix de départ de la marche synthétique.
        fallback_enabled: Si False, les erreurs de la source sont propagées.
        fallback_seed: Graine fixe du générateur synthétique (None: dérivée de la requête).
        cache_ttl: Durée de vie des séries réelles en cache, en secondes.
        lookback_days: Profondeur par défaut de `recent_series`.
        clock: Horloge monotone injectable (tests).
    """

    def __init__(
        self,
        client: FinMindClient,
        base_price: float = 133.5,
        fallback_enabled: bool = True,
        fallback_seed: int | None = None,
        cache_ttl: float = 300.0,
        lookback_days: int = 30,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.base_price = base_price
        self.fallback_enabled = fallback_enabled
        self.fallback_seed = fallback_seed
        self.cache_ttl = cache_ttl
        self.lookback_days = lookback_days
        self._clock = clock
        self._cache: dict[tuple[str, date, date], tuple[float, PriceSeries]] = {}
        self._lock = threading.Lock()
        self._log = structlog.get_logger(__name__).bind(component="price_service")

    def get_series(self, symbol: str, start: date, end: date) -> PriceSeries:
        """Série `symbol` entre `start` et `end`.

        Raises:
            PriceDataUnavailableError: source en échec et repli désactivé.
        """
        key = (symbol, start, end)
        cached = self._cached(key)
        if cached is not None:
            return cached

        try:
            bars = self.client.get_daily_prices(symbol, start, end)
        except PriceDataUnavailableError as err:
            if not self.fallback_enabled:
                raise
            return self._synthetic(symbol, start, end, REASON_ERROR, err.message)

        if not bars:
            if not self.fallback_enabled:
                raise PriceDataUnavailableError(
                    "查無股市資料", details={"symbol": symbol, "start": start.isoformat()}
                )
            return self._synthetic(symbol, start, end, REASON_EMPTY, "查無股市資料")

        series = PriceSeries(symbol=symbol, source=SOURCE_FINMIND, bars=tuple(bars))
        PRICE_FETCH_TOTAL.labels(SOURCE_FINMIND).inc()
        with self._lock:
            self._cache[key] = (self._clock() + self.cache_ttl, series)
        return series

    def recent_series(self, symbol: str, today: date | None = None) -> PriceSeries:
        """Série des `lookback_days` derniers jours calendaires jusqu'à `today` inclus."""
        end = today or date.today()
        return self.get_series(symbol, end - timedelta(days=self.lookback_days), end)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _cached(self, key) -> PriceSeries | None:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            expires_at, series = entry
            if self._clock() >= expires_at:
                del self._cache[key]
                return None
            return series

    def _synthetic(
        self, symbol: str, start: date, end: date, reason: str, detail: str
    ) -> PriceSeries:
        seed = self.fallback_seed
        if seed is None:
            seed = f"{symbol}:{start.isoformat()}:{end.isoformat()}"
        bars = synthetic_bars(start, end, self.base_price, random.Random(seed))
        self._log.warning(
            "price_fallback_synthetic",
            symbol=symbol,
            start=start.isoformat(),
            end=end.isoformat(),
            reason=reason,
            detail=detail,
        )
        PRICE_FALLBACK_TOTAL.labels(reason).inc()
        PRICE_FETCH_TOTAL.labels(SOURCE_SYNTHETIC).inc()
        return PriceSeries(
            symbol=symbol,
            source=SOURCE_SYNTHETIC,
            bars=tuple(bars),
            fallback_reason=f"{reason}: {detail}",
        )
