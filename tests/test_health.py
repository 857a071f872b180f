"""Tests pour l'endpoint de santé de l'application."""

from almanac.core.http_constants import HTTP_OK


def test_health(api_client):
    """Teste que l'endpoint de santé retourne le stockage et l'état du cache."""
    r = api_client.get("/health")
    assert r.status_code == HTTP_OK
    body = r.json()
    assert body["status"] == "ok"
    assert body["storage"] in {"memory", "redis", "memory-fallback"}
    assert body["fortune_cache"] == {"size": 0, "maxSize": 100}
    assert body["price_source"] == "unavailable"


def test_request_id_propagated(api_client):
    """Teste la reprise de l'identifiant de requête et l'en-tête de durée."""
    r = api_client.get("/health", headers={"X-Request-ID": "req-123"})
    assert r.headers["X-Request-ID"] == "req-123"
    assert int(r.headers["X-Process-Time-ms"]) >= 0
