"""
Application principale FastAPI.

Ce module assemble tous les composants de l'application : middlewares, gestion des erreurs,
routes et métriques de l'API de fortune.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (contexte de requête, métriques)
- Monter les routers (santé, fortune, almanach, profils, marché, métriques)
"""

from __future__ import annotations

from fastapi import FastAPI

from almanac.api.routes_almanac import router as almanac_router
from almanac.api.routes_fortune import router as fortune_router
from almanac.api.routes_health import router as health_router
from almanac.api.routes_market import router as market_router
from almanac.api.routes_profile import router as profile_router
from almanac.apigw.errors import register_error_handlers
from almanac.app.metrics import PrometheusMiddleware, metrics_router
from almanac.core.container import container
from almanac.core.logging import setup_logging
from almanac.middlewares.request_context import RequestContextMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog) au niveau `LOG_LEVEL`
    - Ajoute les middlewares de traçabilité et de métriques
    - Enregistre les gestionnaires d'erreurs
    - Publie les routes
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(fortune_router)
    app.include_router(almanac_router)
    app.include_router(profile_router)
    app.include_router(market_router)
    app.include_router(metrics_router)
    return app


app = create_app()
