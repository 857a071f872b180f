"""
Métriques Prometheus pour l'application.

Définit les métriques HTTP, celles du moteur de fortune (cache, temps de calcul) et celles de
la source de prix (origine des données, replis synthétiques), ainsi que l'endpoint `/metrics`.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Moteur de fortune
FORTUNE_REQUESTS = Counter(
    "fortune_requests_total",
    "Fortune computations requested, by cache outcome",
    ["outcome"],
)
FORTUNE_COMPUTE_LATENCY = Histogram(
    "fortune_compute_seconds",
    "Time spent computing a fortune on cache miss",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
)
FORTUNE_CACHE_SIZE = Gauge(
    "fortune_cache_size",
    "Current number of cached fortune results",
)

# Source de prix
PRICE_FETCH_TOTAL = Counter(
    "price_fetch_total",
    "Price series served, by data source",
    ["source"],
)
PRICE_FALLBACK_TOTAL = Counter(
    "price_fallback_total",
    "Synthetic price series generated after a source failure",
    ["reason"],
)
PRICE_FETCH_LATENCY = Histogram(
    "price_fetch_seconds",
    "Latency of upstream price-data requests",
)


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte le nombre de requêtes et la latence par route.
    """

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        route = request.scope.get("path", "unknown")
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
