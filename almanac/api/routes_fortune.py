"""
Routes de fortune: calcul quotidien, version enrichie, vue "aujourd'hui" et gestion du cache.

Les erreurs métier (date illisible, profil incomplet, calendrier indisponible, profil absent)
sont levées telles quelles et mises en forme par `almanac.apigw.errors`.
"""

from dataclasses import asdict

from fastapi import APIRouter, Query, Response

from almanac.api.schemas import (
    CacheStatsResponse,
    EnhancedFortuneRequest,
    EnhancedFortuneResponse,
    FortuneRequest,
    TodayResponse,
)
from almanac.core.container import container
from almanac.core.http_constants import HTTP_NO_CONTENT
from almanac.domain.disclaimer import should_force_display
from almanac.domain.entities import FortuneResult

router = APIRouter(prefix="/fortune", tags=["fortune"])


@router.post("/daily", response_model=FortuneResult)
def daily_fortune(payload: FortuneRequest):
    """
    Calcule la fortune d'un profil pour une date.

    Paramètres:
    - payload: `FortuneRequest` (profil complet + date ISO).

    Retour: `FortuneResult` (scores, recommandation, conseils, créneaux, éléments).
    """
    return container.engine.calculate_daily_fortune(payload.profile, payload.date)


@router.post("/enhanced", response_model=EnhancedFortuneResponse)
def enhanced_fortune(payload: EnhancedFortuneRequest):
    """
    Fortune accompagnée de l'avertissement, de la transparence et du contenu pédagogique.

    `forceDisclaimer` est vrai lorsque l'avertissement exige une confirmation absente ou
    vieille de plus de 7 jours (`lastAcknowledgment`).
    """
    enhanced = container.engine.calculate_enhanced_fortune(payload.profile, payload.date)
    force = should_force_display(enhanced.disclaimer, payload.last_acknowledgment)
    return EnhancedFortuneResponse.model_validate(
        {**enhanced.model_dump(), "force_disclaimer": force}
    )


@router.get("/today/{profile_id}", response_model=TodayResponse)
def today(profile_id: str, date: str | None = Query(default=None)):
    """
    Retourne la fortune d'un profil stocké, avec l'état de la séance.

    Paramètres:
    - profile_id: identifiant du profil enregistré via `PUT /profiles/{profile_id}`.
    - date: date ISO facultative (défaut: aujourd'hui).
    """
    fortune, status, periods = container.fortune_service.get_today(profile_id, date)
    return TodayResponse(
        fortune=fortune,
        trading_status=asdict(status),
        periods=asdict(periods),
    )


@router.get("/cache/stats", response_model=CacheStatsResponse)
def cache_stats():
    return container.engine.get_cache_stats()


@router.delete("/cache", status_code=HTTP_NO_CONTENT)
def clear_cache():
    container.engine.clear_cache()
    return Response(status_code=HTTP_NO_CONTENT)
