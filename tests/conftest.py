"""Configuration de test pour pytest avec gestion des chemins et fixtures partagées.

Ce module ajoute la racine du projet au sys.path, fournit le profil d'exemple, un moteur adossé
au calendrier déterministe et un client HTTP dont la source de prix est injoignable.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from almanac...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture
def profile():
    from almanac.domain.entities import UserProfile
    from tests.fakes import EXAMPLE_PROFILE

    return UserProfile.model_validate(EXAMPLE_PROFILE)


@pytest.fixture
def fake_calendar():
    from almanac.infra.calendar.fake_deterministic import FakeDeterministicCalendar

    return FakeDeterministicCalendar()


@pytest.fixture
def engine(fake_calendar):
    from almanac.domain.fortune_engine import FortuneEngine

    return FortuneEngine(fake_calendar)


@pytest.fixture
def api_client():
    """TestClient avec calendrier déterministe (fortune et almanach), dépôt mémoire vierge et
    FinMind injoignable."""
    from fastapi.testclient import TestClient

    from almanac.app.main import app
    from almanac.core.container import container
    from almanac.domain.almanac_day import AlmanacService
    from almanac.domain.fortune_engine import FortuneEngine
    from almanac.domain.services import FortuneService
    from almanac.infra.calendar.fake_deterministic import FakeDeterministicCalendar
    from almanac.infra.market.price_source import PriceService
    from almanac.infra.repositories import InMemoryProfileRepo
    from tests.fakes import failing_handler, finmind_client

    saved = (
        container.engine,
        container.fortune_service,
        container.price_service,
        container.almanac_service,
    )
    calendar = FakeDeterministicCalendar()
    container.engine = FortuneEngine(calendar)
    container.almanac_service = AlmanacService(calendar)
    container.fortune_service = FortuneService(container.engine, InMemoryProfileRepo())
    container.price_service = PriceService(finmind_client(failing_handler), fallback_seed=7)
    try:
        yield TestClient(app)
    finally:
        (
            container.engine,
            container.fortune_service,
            container.price_service,
            container.almanac_service,
        ) = saved
