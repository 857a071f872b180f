"""
Routes marché: série de prix de l'ETF, état de la séance et découpage des séances.

La série de prix peut être synthétique (`source="synthetic"`) si la source réelle est
indisponible; le client doit alors afficher `fallbackReason`.
"""

from dataclasses import asdict
from datetime import date, datetime

from fastapi import APIRouter, Query

from almanac.api.schemas import TradingSessionResponse, TradingStatusResponse
from almanac.core.container import container
from almanac.domain.entities import PriceSeries
from almanac.domain.errors import InvalidDateError
from almanac.domain.trading_calendar import trading_sessions, trading_status

router = APIRouter(prefix="/market", tags=["market"])


def _parse_date(value: str, field: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as err:
        raise InvalidDateError(f"無效的日期: {value}", details={field: value}) from err


@router.get("/etf", response_model=PriceSeries)
def etf_series(
    symbol: str | None = Query(default=None),
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
):
    """
    Série journalière de l'ETF.

    Paramètres:
    - symbol: code du titre (défaut: `ETF_SYMBOL`, 0050).
    - start/end: bornes ISO incluses; sans `start`, les `PRICE_LOOKBACK_DAYS` derniers jours.
    """
    symbol = symbol or container.settings.ETF_SYMBOL
    end_day = _parse_date(end, "end") if end else date.today()
    if start is None:
        return container.price_service.recent_series(symbol, today=end_day)
    start_day = _parse_date(start, "start")
    if start_day > end_day:
        raise InvalidDateError("開始日期不能晚於結束日期", details={"start": start, "end": end})
    return container.price_service.get_series(symbol, start_day, end_day)


@router.get("/status", response_model=TradingStatusResponse)
def market_status(at: datetime | None = Query(default=None)):
    """État de la séance à l'instant `at` (défaut: maintenant)."""
    return TradingStatusResponse(**asdict(trading_status(at)))


@router.get("/sessions", response_model=list[TradingSessionResponse])
def market_sessions():
    return [asdict(session) for session in trading_sessions()]
