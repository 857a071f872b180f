"""
Endpoint de santé pour vérifier la disponibilité de l'API et du stockage.

Expose `/health` pour signaler l'état général de l'application, du stockage des profils et du
cache de fortune. La source de prix FinMind est sondée à chaque appel; son indisponibilité ne
rend pas l'API indisponible, le repli synthétique prenant le relais.
"""

from fastapi import APIRouter

from almanac.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et le backend de stockage."""
    return {
        "status": "ok",
        "storage": getattr(container, "storage_backend", "unknown"),
        "redis_url": bool(getattr(container.settings, "REDIS_URL", None)),
        "fortune_cache": container.engine.get_cache_stats(),
        "price_source": "ok" if container.price_service.client.check_status() else "unavailable",
    }
