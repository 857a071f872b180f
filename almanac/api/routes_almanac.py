"""
Route de l'almanach du jour (農民曆).

Expose `/almanac/{day}`: date lunaire, 干支, 宜/忌, fêtes, 節氣 et 納音, accompagnés du conseil
d'investissement et de la répartition des heures de séance.
"""

from fastapi import APIRouter

from almanac.core.container import container
from almanac.domain.almanac_day import AlmanacReport
from almanac.domain.fortune_engine import parse_day

router = APIRouter(prefix="/almanac", tags=["almanac"])


@router.get("/{day}", response_model=AlmanacReport)
def almanac_report(day: str):
    """
    Retourne l'almanach d'une date ISO (YYYY-MM-DD).

    Une date illisible donne l'erreur `VAL_003`; un échec du calendrier donne `SYS_001`.
    """
    return container.almanac_service.report(parse_day(day))
