"""
Script de serveur de développement.

Lance l'API avec uvicorn. Avec `FAKE_CALENDAR=1`, le moteur et l'almanach utilisent le
calendrier déterministe à piliers fixes, utile pour comparer des sorties entre machines.
"""

import os

import uvicorn

from almanac.app.main import app
from almanac.core.container import container
from almanac.domain.almanac_day import AlmanacService
from almanac.domain.fortune_engine import FortuneEngine
from almanac.infra.calendar.fake_deterministic import FakeDeterministicCalendar


def main():
    """Point d'entrée: `python -m almanac.scripts.run_server` (port via `PORT`, défaut 8000)."""
    if os.environ.get("FAKE_CALENDAR") == "1":
        calendar = FakeDeterministicCalendar()
        container.engine = FortuneEngine(
            calendar, cache_capacity=container.settings.FORTUNE_CACHE_SIZE
        )
        container.fortune_service.engine = container.engine
        container.almanac_service = AlmanacService(calendar)

    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port, reload=False)


if __name__ == "__main__":
    main()
