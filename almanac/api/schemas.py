# Schémas Pydantic exposés par l'API (requêtes et réponses).

from datetime import date, datetime

from pydantic import Field

from almanac.domain.disclaimer import EnhancedFortune
from almanac.domain.entities import CamelModel, FortuneResult, UserProfile


class FortuneRequest(CamelModel):
    """Requête de calcul de fortune.

    Champs:
    - profile: UserProfile (alias camelCase acceptés)
    - date: str (YYYY-MM-DD); validée par le moteur pour renvoyer une erreur métier
    """

    profile: UserProfile
    date: str


class EnhancedFortuneRequest(FortuneRequest):
    """Requête de fortune enrichie.

    Champs supplémentaires:
    - last_acknowledgment: datetime | None (dernière confirmation de l'avertissement)
    """

    last_acknowledgment: datetime | None = None


class EnhancedFortuneResponse(EnhancedFortune):
    force_disclaimer: bool


class TradingStatusResponse(CamelModel):
    """État de la séance.

    Champs:
    - is_open: bool
    - status: closed | pre_market | trading | post_market
    - message: str (zh-TW)
    - next_trading_day: date | None (renseigné hors séance)
    """

    is_open: bool
    status: str
    message: str
    next_trading_day: date | None = None


class TradingSessionResponse(CamelModel):
    name: str
    start: str
    end: str
    description: str
    type: str


class PeriodAdviceResponse(CamelModel):
    time: str
    reason: str


class RecommendedPeriodsResponse(CamelModel):
    recommended: list[PeriodAdviceResponse] = Field(default_factory=list)
    avoid: list[PeriodAdviceResponse] = Field(default_factory=list)
    is_today: bool
    trading_day: date


class TodayResponse(CamelModel):
    """Vue "aujourd'hui" d'un profil stocké.

    Champs:
    - fortune: FortuneResult
    - trading_status: TradingStatusResponse
    - periods: RecommendedPeriodsResponse (vide si la date n'est pas le jour courant)
    """

    fortune: FortuneResult
    trading_status: TradingStatusResponse
    periods: RecommendedPeriodsResponse


class CacheStatsResponse(CamelModel):
    size: int
    max_size: int
