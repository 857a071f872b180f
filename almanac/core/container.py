"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, calendrier, moteur de fortune, almanach, dépôt de
profils, source de prix) et expose un singleton `container` utilisé par le reste de l'application.
"""

from almanac.core.settings import get_settings
from almanac.domain.almanac_day import AlmanacService
from almanac.domain.fortune_engine import FortuneEngine
from almanac.domain.services import FortuneService
from almanac.infra.calendar.lunar_adapter import LunarPythonCalendar
from almanac.infra.market.finmind_client import FinMindClient
from almanac.infra.market.price_source import PriceService
from almanac.infra.repositories import InMemoryProfileRepo, RedisProfileRepo


class Container:
    def __init__(self, settings=None):
        self.settings = settings or get_settings()
        self.calendar = LunarPythonCalendar()
        self.engine = FortuneEngine(self.calendar, cache_capacity=self.settings.FORTUNE_CACHE_SIZE)
        self.almanac_service = AlmanacService(self.calendar)

        if self.settings.REDIS_URL:
            try:
                self.profile_repo = RedisProfileRepo(self.settings.REDIS_URL)
                self.profile_repo.client.ping()
                self.storage_backend = "redis"
            except Exception as err:
                if self.settings.REQUIRE_REDIS:
                    raise RuntimeError("Redis required but unavailable") from err
                self.profile_repo = InMemoryProfileRepo()
                self.storage_backend = "memory-fallback"
        else:
            if self.settings.REQUIRE_REDIS:
                raise RuntimeError("Redis required but REDIS_URL not set")
            self.profile_repo = InMemoryProfileRepo()
            self.storage_backend = "memory"

        self.fortune_service = FortuneService(self.engine, self.profile_repo)

        self.finmind = FinMindClient(
            self.settings.FINMIND_BASE_URL,
            token=self.settings.FINMIND_TOKEN,
            timeout=self.settings.FINMIND_TIMEOUT_S,
        )
        self.price_service = PriceService(
            self.finmind,
            base_price=self.settings.ETF_BASE_PRICE,
            fallback_enabled=self.settings.PRICE_FALLBACK_ENABLED,
            fallback_seed=self.settings.PRICE_FALLBACK_SEED,
            cache_ttl=self.settings.PRICE_CACHE_TTL_S,
            lookback_days=self.settings.PRICE_LOOKBACK_DAYS,
        )


container = Container()
