"""
Calendrier de la bourse de Taïwan (TWSE).

Jours ouvrés (hors week-ends et jours fériés 2024/2025), séance 09:00-13:30 incluse, état de la
séance à un instant donné et créneaux recommandés pour la journée en cours.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

SESSION_OPEN = time(9, 0)
SESSION_CLOSE = time(13, 30)

# Jours fériés du calendrier gouvernemental, jours de pont compris
HOLIDAYS_2024 = frozenset(
    date.fromisoformat(d)
    for d in (
        "2024-01-01",
        "2024-02-08",
        "2024-02-09",
        "2024-02-10",
        "2024-02-11",
        "2024-02-12",
        "2024-02-13",
        "2024-02-14",
        "2024-02-28",
        "2024-04-04",
        "2024-04-05",
        "2024-05-01",
        "2024-06-10",
        "2024-09-17",
        "2024-10-10",
    )
)

HOLIDAYS_2025 = frozenset(
    date.fromisoformat(d)
    for d in (
        "2025-01-01",
        "2025-01-27",
        "2025-01-28",
        "2025-01-29",
        "2025-01-30",
        "2025-01-31",
        "2025-02-28",
        "2025-04-03",
        "2025-04-04",
        "2025-04-05",
        "2025-05-01",
        "2025-05-31",
        "2025-09-28",
        "2025-10-06",
        "2025-10-10",
    )
)

HOLIDAYS = HOLIDAYS_2024 | HOLIDAYS_2025

_WEEKDAY_LABELS = ("週一", "週二", "週三", "週四", "週五", "週六", "週日")

STATUS_CLOSED = "closed"
STATUS_PRE_MARKET = "pre_market"
STATUS_TRADING = "trading"
STATUS_POST_MARKET = "post_market"


@dataclass(frozen=True)
class TradingStatus:
    is_open: bool
    status: str
    message: str
    next_trading_day: date | None = None


@dataclass(frozen=True)
class TradingSession:
    name: str
    start: str
    end: str
    description: str
    type: str  # opening | morning | midday | closing


@dataclass(frozen=True)
class PeriodAdvice:
    time: str
    reason: str


@dataclass(frozen=True)
class RecommendedPeriods:
    recommended: list[PeriodAdvice] = field(default_factory=list)
    avoid: list[PeriodAdvice] = field(default_factory=list)
    is_today: bool = False
    trading_day: date | None = None


TRADING_SESSIONS: tuple[TradingSession, ...] = (
    TradingSession("開盤競價", "09:00", "09:05", "開盤集合競價時段", "opening"),
    TradingSession("早盤交易", "09:05", "10:00", "早盤活躍交易時段", "morning"),
    TradingSession("上午盤中", "10:00", "11:00", "上午盤中交易", "morning"),
    TradingSession("午前交易", "11:00", "12:00", "午前交易時段", "midday"),
    TradingSession("午後開盤", "12:00", "13:00", "午後開盤交易", "midday"),
    TradingSession("收盤前段", "13:00", "13:25", "收盤前交易", "closing"),
    TradingSession("收盤競價", "13:25", "13:30", "收盤集合競價", "closing"),
)

# Tranches horaires évaluées pour les créneaux recommandés
HOURLY_SLOTS: tuple[tuple[str, str], ...] = (
    ("09:00-10:00", "早盤交易"),
    ("10:00-11:00", "上午盤中"),
    ("11:00-12:00", "午前交易"),
    ("12:00-13:00", "午後開盤"),
    ("13:00-13:30", "收盤交易"),
)


def is_trading_day(day: date) -> bool:
    """Vrai du lundi au vendredi, hors jours fériés connus."""
    if day.weekday() >= 5:
        return False
    return day not in HOLIDAYS


def is_in_trading_hours(moment: datetime) -> bool:
    """Vrai si `moment` tombe un jour ouvré entre 09:00 et 13:30 (bornes incluses)."""
    if not is_trading_day(moment.date()):
        return False
    current = moment.time().replace(second=0, microsecond=0)
    return SESSION_OPEN <= current <= SESSION_CLOSE


def next_trading_day(day: date) -> date:
    """Premier jour ouvré strictement après `day`."""
    candidate = day + timedelta(days=1)
    while not is_trading_day(candidate):
        candidate += timedelta(days=1)
    return candidate


def previous_trading_day(day: date) -> date:
    """Dernier jour ouvré strictement avant `day`."""
    candidate = day - timedelta(days=1)
    while not is_trading_day(candidate):
        candidate -= timedelta(days=1)
    return candidate


def format_day(day: date) -> str:
    """Libellé court zh-TW, ex: `1月16日 週二`."""
    return f"{day.month}月{day.day}日 {_WEEKDAY_LABELS[day.weekday()]}"


def trading_status(now: datetime | None = None) -> TradingStatus:
    """État de la séance à l'instant `now` (heure locale de Taipei attendue)."""
    now = now or datetime.now()
    today = now.date()
    if not is_trading_day(today):
        upcoming = next_trading_day(today)
        return TradingStatus(
            is_open=False,
            status=STATUS_CLOSED,
            message=f"今日休市，下個交易日為 {format_day(upcoming)}",
            next_trading_day=upcoming,
        )

    if is_in_trading_hours(now):
        return TradingStatus(True, STATUS_TRADING, "交易時間中")
    if now.time() < SESSION_OPEN:
        return TradingStatus(False, STATUS_PRE_MARKET, "尚未開盤，交易時間 09:00-13:30")
    upcoming = next_trading_day(today)
    return TradingStatus(
        is_open=False,
        status=STATUS_POST_MARKET,
        message=f"今日交易結束，下個交易日為 {format_day(upcoming)}",
        next_trading_day=upcoming,
    )


def trading_sessions() -> list[TradingSession]:
    return list(TRADING_SESSIONS)


def _minutes(hhmm: str) -> int:
    hour, _, minute = hhmm.strip().partition(":")
    return int(hour) * 60 + int(minute or 0)


def parse_range(label: str) -> tuple[int, int]:
    """`"HH:MM-HH:MM (nom)"` ou `"HH:MM-HH:MM"` -> (début, fin) en minutes."""
    span = label.split(" ", 1)[0]
    start, end = span.split("-")
    return _minutes(start), _minutes(end)


def ranges_overlap(first: str, second: str) -> bool:
    """Chevauchement strict: des plages seulement contiguës ne se chevauchent pas."""
    a_start, a_end = parse_range(first)
    b_start, b_end = parse_range(second)
    return not (a_end <= b_start or b_end <= a_start)


def recommended_trading_periods(
    lucky: list[str],
    avoid: list[str],
    day: date,
    today: date | None = None,
) -> RecommendedPeriods:
    """Tranches horaires à privilégier ou à éviter pour `day`.

    Calculé seulement si `day` est aujourd'hui et un jour ouvré; sinon les deux listes restent
    vides. Une tranche qui chevauche un créneau à éviter n'est jamais recommandée.
    """
    is_today = day == (today or date.today())
    result = RecommendedPeriods(is_today=is_today, trading_day=day)
    if not (is_today and is_trading_day(day)):
        return result

    for slot, name in HOURLY_SLOTS:
        is_lucky = any(ranges_overlap(slot, window) for window in lucky)
        is_avoid = any(ranges_overlap(slot, window) for window in avoid)
        if is_avoid:
            result.avoid.append(PeriodAdvice(slot, f"{name} - 兇時避免"))
        elif is_lucky:
            result.recommended.append(PeriodAdvice(slot, f"{name} - 吉時交易"))
    return result
