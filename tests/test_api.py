"""Tests des routes HTTP: fortune, profils, marché et enveloppe d'erreur."""

import re
from datetime import datetime

from almanac.core.http_constants import (
    HTTP_NO_CONTENT,
    HTTP_NOT_FOUND,
    HTTP_OK,
    HTTP_UNPROCESSABLE_ENTITY,
)
from tests.fakes import EXAMPLE_PROFILE

TIME_RE = re.compile(r"^\d{2}:\d{2}-\d{2}:\d{2}")
DAY = "2024-01-15"


def _body(**profile_overrides):
    return {"profile": {**EXAMPLE_PROFILE, **profile_overrides}, "date": DAY}


def test_daily_fortune_camel_case(api_client):
    """Teste le calcul quotidien et la sérialisation camelCase."""
    r = api_client.post("/fortune/daily", json=_body())
    assert r.status_code == HTTP_OK
    data = r.json()
    assert data["date"] == DAY
    assert 0 <= data["overallScore"] <= 100
    assert 0 <= data["investmentScore"] <= 100
    assert data["recommendation"] in {"BUY", "HOLD", "SELL"}
    assert TIME_RE.match(data["luckyTime"]) and TIME_RE.match(data["avoidTime"])
    assert set(data["elements"]) == {"metal", "wood", "water", "fire", "earth"}


def test_daily_fortune_is_stable(api_client):
    first = api_client.post("/fortune/daily", json=_body()).json()
    api_client.delete("/fortune/cache")
    assert api_client.post("/fortune/daily", json=_body()).json() == first


def test_invalid_date_envelope(api_client):
    """Teste l'enveloppe d'erreur d'une date illisible."""
    r = api_client.post("/fortune/daily", json={"profile": EXAMPLE_PROFILE, "date": "2024-13-01"})
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
    body = r.json()
    assert body["code"] == "VAL_003"
    assert body["details"]["category"] == "validation"
    assert body["details"]["retryable"] is False
    assert body["trace_id"]


def test_incomplete_profile_envelope(api_client):
    r = api_client.post("/fortune/daily", json=_body(name=""))
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
    assert r.json()["code"] == "VAL_002"
    assert r.json()["details"]["missing"] == ["姓名"]


def test_schema_error_envelope(api_client):
    """Teste qu'un signe inconnu est rejeté par le schéma avec l'enveloppe standard."""
    r = api_client.post("/fortune/daily", json=_body(zodiac="貓"))
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
    assert r.json()["code"] == "VAL_001"


def test_non_string_zodiac_and_element_rejected(api_client):
    """Teste qu'un signe ou un élément non textuel donne 422 et non une erreur interne."""
    for overrides in ({"zodiac": ["鼠"]}, {"element": {"name": "金"}}, {"zodiac": 3}):
        r = api_client.post("/fortune/daily", json=_body(**overrides))
        assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
        assert r.json()["code"] == "VAL_001"


def test_enhanced_fortune(api_client):
    r = api_client.post("/fortune/enhanced", json=_body())
    assert r.status_code == HTTP_OK
    data = r.json()
    assert data["disclaimer"]["level"] in {"low", "medium", "high", "critical"}
    assert data["transparency"]["confidenceLevel"] <= 95
    assert len(data["educationalContent"]) >= 2
    assert data["forceDisclaimer"] is data["disclaimer"]["requiresAcknowledgment"]


def test_enhanced_fortune_recent_acknowledgment(api_client):
    """Teste qu'une confirmation récente n'impose plus l'affichage de l'avertissement."""
    body = {**_body(), "lastAcknowledgment": datetime.now().isoformat()}
    r = api_client.post("/fortune/enhanced", json=body)
    assert r.status_code == HTTP_OK
    assert r.json()["forceDisclaimer"] is False


def test_cache_stats_and_clear(api_client):
    """Teste les statistiques du cache et son vidage."""
    api_client.post("/fortune/daily", json=_body())
    assert api_client.get("/fortune/cache/stats").json() == {"size": 1, "maxSize": 100}
    assert api_client.delete("/fortune/cache").status_code == HTTP_NO_CONTENT
    assert api_client.get("/fortune/cache/stats").json()["size"] == 0


def test_profile_lifecycle_and_today(api_client):
    """Teste enregistrement d'un profil puis fortune du jour par identifiant."""
    assert api_client.put("/profiles/u1", json=EXAMPLE_PROFILE).status_code == HTTP_OK
    assert api_client.get("/profiles/u1").json()["birthDate"] == "1990-01-01"

    r = api_client.get("/fortune/today/u1", params={"date": DAY})
    assert r.status_code == HTTP_OK
    data = r.json()
    assert data["fortune"]["date"] == DAY
    assert data["tradingStatus"]["status"] in {"closed", "pre_market", "trading", "post_market"}
    assert data["periods"]["tradingDay"] == DAY

    assert api_client.delete("/profiles/u1").status_code == HTTP_NO_CONTENT
    missing = api_client.get("/fortune/today/u1")
    assert missing.status_code == HTTP_NOT_FOUND
    assert missing.json()["code"] == "BIZ_404"


def test_profile_with_future_birth_date_rejected(api_client):
    r = api_client.put("/profiles/u2", json={**EXAMPLE_PROFILE, "birthDate": "2999-01-01"})
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
    assert r.json()["details"]["errors"] == ["出生日期不能是未來時間"]


def test_market_etf_synthetic_fallback(api_client):
    """Teste que la série servie après panne FinMind est marquée synthétique."""
    r = api_client.get("/market/etf", params={"start": "2024-01-15", "end": "2024-01-19"})
    assert r.status_code == HTTP_OK
    data = r.json()
    assert data["symbol"] == "0050"
    assert data["source"] == "synthetic"
    assert data["fallbackReason"]
    assert len(data["bars"]) == 5
    assert "priceChangePercent" in data


def test_market_etf_rejects_reversed_range(api_client):
    r = api_client.get("/market/etf", params={"start": "2024-01-19", "end": "2024-01-15"})
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY


def test_market_status_and_sessions(api_client):
    r = api_client.get("/market/status", params={"at": "2024-01-13T10:00:00"})
    assert r.status_code == HTTP_OK
    assert r.json()["status"] == "closed"
    assert r.json()["nextTradingDay"] == "2024-01-15"
    sessions = api_client.get("/market/sessions").json()
    assert len(sessions) == 7


def test_unknown_route_envelope(api_client):
    r = api_client.get("/nope")
    assert r.status_code == HTTP_NOT_FOUND
    assert r.json()["code"] == "NOT_FOUND"


def test_almanac_report(api_client):
    """Teste l'almanach du jour avec le calendrier déterministe."""
    r = api_client.get(f"/almanac/{DAY}")
    assert r.status_code == HTTP_OK
    data = r.json()
    assert data["day"]["dayGanZhi"] == "甲子"
    assert data["day"]["festivals"] == ["春節"]
    assert data["advice"]["recommendedAction"] == "buy"
    assert data["advice"]["luckyDirection"] == "東方"
    assert [h["time"] for h in data["tradingTimes"]["recommendedTimes"]] == [
        "11:00-12:00",
        "12:00-13:00",
    ]


def test_almanac_rejects_bad_date(api_client):
    r = api_client.get("/almanac/2024-13-01")
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
    assert r.json()["code"] == "VAL_003"
