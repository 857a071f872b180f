"""
Entités du domaine métier.

Ce module définit les modèles de données principaux: profil utilisateur, énergies des cinq
éléments, résultat de fortune et séries de prix de l'ETF.
"""

from __future__ import annotations

import re
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from almanac.domain.ganzhi import Element, Zodiac, parse_element, parse_zodiac

_BIRTH_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class Recommendation(str, Enum):
    """Action suggérée, classification sans état."""

    BUY = "BUY"
    HOLD = "HOLD"
    SELL = "SELL"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class UserProfile(CamelModel):
    """Identité et attributs astrologiques d'une personne.

    `birth_date` et `birth_time` sont conservés tels que saisis: ils entrent dans la clé de cache
    et dans la graine.
    """

    name: str = ""
    birth_date: str = ""  # YYYY-MM-DD
    birth_time: str = ""  # HH:MM
    zodiac: Zodiac
    element: Element
    lucky_colors: tuple[str, ...] = ()
    lucky_numbers: tuple[int, ...] = ()

    @field_validator("zodiac", mode="before")
    @classmethod
    def _normalize_zodiac(cls, value):
        return parse_zodiac(value)

    @field_validator("element", mode="before")
    @classmethod
    def _normalize_element(cls, value):
        return parse_element(value)

    @property
    def is_complete(self) -> bool:
        """Nom, date et heure de naissance sont tous renseignés."""
        return bool(self.name and self.birth_date and self.birth_time)

    def missing_fields(self) -> list[str]:
        """Libellés (zh-TW) des champs obligatoires manquants."""
        missing = []
        if not self.name:
            missing.append("姓名")
        if not self.birth_date:
            missing.append("出生日期")
        if not self.birth_time:
            missing.append("出生時間")
        return missing


def validate_profile(profile: UserProfile, today: date | None = None) -> list[str]:
    """Retourne la liste des problèmes du profil (vide si le profil est valide).

    Args:
        profile: Profil à contrôler.
        today: Date de référence pour refuser une naissance future (défaut: aujourd'hui).
    """
    errors: list[str] = []
    if not profile.name.strip():
        errors.append("姓名不能為空")
    if not profile.birth_date:
        errors.append("出生日期不能為空")
    else:
        try:
            born = date.fromisoformat(profile.birth_date)
        except ValueError:
            errors.append(f"無效的出生日期: {profile.birth_date}")
        else:
            if born > (today or date.today()):
                errors.append("出生日期不能是未來時間")
    if not profile.birth_time:
        errors.append("出生時間不能為空")
    elif not _BIRTH_TIME_RE.match(profile.birth_time):
        errors.append(f"無效的出生時間: {profile.birth_time}")
    return errors


class ElementEnergy(BaseModel):
    """Énergie des cinq éléments, entiers bornés à [10, 100]."""

    model_config = ConfigDict(frozen=True)

    metal: int = Field(ge=10, le=100)
    wood: int = Field(ge=10, le=100)
    water: int = Field(ge=10, le=100)
    fire: int = Field(ge=10, le=100)
    earth: int = Field(ge=10, le=100)

    def values(self) -> list[int]:
        """Valeurs dans l'ordre metal, wood, water, fire, earth."""
        return [self.metal, self.wood, self.water, self.fire, self.earth]

    def get(self, element: Element) -> int:
        return getattr(self, element.value)


class FortuneResult(CamelModel):
    """Résultat du moteur pour un couple (profil, date); immuable et reproductible."""

    date: str
    overall_score: int = Field(ge=0, le=100)
    investment_score: int = Field(ge=0, le=100)
    recommendation: Recommendation
    advice: str
    lucky_time: str
    avoid_time: str
    elements: ElementEnergy


class PriceBar(CamelModel):
    """Bougie journalière OHLCV."""

    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int

    @computed_field
    @property
    def change(self) -> float:
        return round(self.close - self.open, 4)

    @computed_field
    @property
    def change_percent(self) -> float:
        if not self.open:
            return 0.0
        return round((self.close - self.open) / self.open * 100, 4)


class PriceSeries(CamelModel):
    """Série de prix pour un symbole.

    `source` vaut "synthetic" lorsque les données ont été fabriquées après un échec de la source
    réelle; `fallback_reason` explique alors pourquoi.
    """

    symbol: str
    source: str
    bars: tuple[PriceBar, ...] = ()
    fallback_reason: str | None = None

    @property
    def is_synthetic(self) -> bool:
        return self.source == "synthetic"

    @property
    def latest(self) -> PriceBar | None:
        return self.bars[-1] if self.bars else None

    @computed_field
    @property
    def price_change(self) -> float:
        """Variation de clôture entre les deux dernières séances (0 si moins de deux)."""
        if len(self.bars) < 2:
            return 0.0
        return round(self.bars[-1].close - self.bars[-2].close, 4)

    @computed_field
    @property
    def price_change_percent(self) -> float:
        if len(self.bars) < 2 or not self.bars[-2].close:
            return 0.0
        previous = self.bars[-2].close
        return round((self.bars[-1].close - previous) / previous * 100, 4)
