"""Doublures de test partagées: profil d'exemple, réponses FinMind et transports simulés."""

import httpx

from almanac.infra.calendar.base import LunarCalendar
from almanac.infra.market.finmind_client import FinMindClient

EXAMPLE_PROFILE = {
    "name": "測試用戶",
    "birthDate": "1990-01-01",
    "birthTime": "10:30",
    "zodiac": "鼠",
    "element": "金",
    "luckyColors": ["金色", "白色"],
    "luckyNumbers": [1, 6],
}

FINMIND_ROWS = [
    {
        "date": "2024-01-16",
        "stock_id": "0050",
        "Trading_Volume": 4800000,
        "open": 131.0,
        "max": 131.5,
        "min": 128.0,
        "close": 128.5,
    },
    {
        "date": "2024-01-15",
        "stock_id": "0050",
        "Trading_Volume": 5123000,
        "open": 130.0,
        "max": 132.0,
        "min": 129.5,
        "close": 131.0,
    },
]


class RecordingHandler:
    """Transport FinMind simulé qui renvoie `payload` et mémorise les requêtes reçues."""

    def __init__(self, payload=None, status_code: int = 200):
        self.payload = {"msg": "success", "status": 200, "data": FINMIND_ROWS} if payload is None else payload
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


def failing_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def finmind_client(handler) -> FinMindClient:
    """Client FinMind branché sur un transport simulé (`handler(request) -> httpx.Response`)."""
    return FinMindClient("https://finmind.test/api/v4", transport=httpx.MockTransport(handler))


class BrokenCalendar(LunarCalendar):
    """Calendrier dont chaque appel échoue avec une erreur non métier."""

    def stem_branch_of_day(self, day):
        raise RuntimeError("ephemeris table missing")

    def stem_branch_of_month(self, day):
        raise RuntimeError("ephemeris table missing")

    def zodiac_of_year(self, year):
        raise RuntimeError("ephemeris table missing")

    def almanac_day(self, day):
        raise RuntimeError("ephemeris table missing")
