from __future__ import annotations

from datetime import date, datetime

import structlog

from almanac.domain.entities import FortuneResult, UserProfile, validate_profile
from almanac.domain.errors import ProfileNotFoundError, ProfileValidationError
from almanac.domain.fortune_engine import FortuneEngine, parse_day
from almanac.domain.trading_calendar import (
    RecommendedPeriods,
    TradingStatus,
    recommended_trading_periods,
    trading_status,
)

log = structlog.get_logger(__name__)


class FortuneService:
    """Service métier des profils et des fortunes.

    Responsabilités:
    - Valider et persister les profils via `profile_repo` (en mémoire ou Redis).
    - Déléguer les calculs au `FortuneEngine`.
    - Composer la vue "aujourd'hui": fortune, état de la séance et créneaux recommandés.
    """

    def __init__(self, engine: FortuneEngine, profile_repo):
        """Initialise le service avec ses dépendances.

        Paramètres:
        - engine: moteur de fortune (possède son propre cache).
        - profile_repo: dépôt de profils (InMemory ou Redis).
        """
        self.engine = engine
        self.profiles = profile_repo

    def save_profile(self, profile_id: str, profile: UserProfile, today: date | None = None) -> UserProfile:
        """Valide puis enregistre un profil.

        Raises:
            ProfileValidationError: la liste des problèmes est dans `details["errors"]`.
        """
        errors = validate_profile(profile, today=today)
        if errors:
            raise ProfileValidationError("；".join(errors), details={"errors": errors})
        self.profiles.save(profile_id, profile)
        log.info("profile_saved", profile_id=profile_id)
        return profile

    def get_profile(self, profile_id: str) -> UserProfile:
        profile = self.profiles.get(profile_id)
        if profile is None:
            raise ProfileNotFoundError(details={"profile_id": profile_id})
        return profile

    def delete_profile(self, profile_id: str) -> None:
        if not self.profiles.delete(profile_id):
            raise ProfileNotFoundError(details={"profile_id": profile_id})
        log.info("profile_deleted", profile_id=profile_id)

    def fortune_for_profile(self, profile_id: str, day) -> FortuneResult:
        return self.engine.calculate_daily_fortune(self.get_profile(profile_id), day)

    def get_today(
        self, profile_id: str, day=None, now: datetime | None = None
    ) -> tuple[FortuneResult, TradingStatus, RecommendedPeriods]:
        """Produit la vue "aujourd'hui" pour un profil stocké.

        Démarche:
        - Charge le profil (erreur si absent).
        - Calcule la fortune de `day` (défaut: date de `now`).
        - Joint l'état de la séance et les tranches horaires recommandées, calculées seulement
          si `day` est le jour courant.
        """
        now = now or datetime.now()
        target = parse_day(day) if day is not None else now.date()
        fortune = self.fortune_for_profile(profile_id, target)
        periods = recommended_trading_periods(
            [fortune.lucky_time], [fortune.avoid_time], target, today=now.date()
        )
        return fortune, trading_status(now), periods
