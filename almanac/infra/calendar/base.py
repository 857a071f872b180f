"""Interface de base pour les calendriers lunaires."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from almanac.domain.almanac_day import AlmanacDay
from almanac.domain.ganzhi import Pillar, Zodiac


class LunarCalendar(ABC):
    """Oracle calendaire consommé par le moteur de fortune.

    Les implémentations doivent être déterministes pour une date civile donnée; aucune
    conversion de fuseau n'est faite ici.
    """

    @abstractmethod
    def stem_branch_of_day(self, day: date) -> Pillar:
        """Tige/branche du jour."""
        raise NotImplementedError

    @abstractmethod
    def stem_branch_of_month(self, day: date) -> Pillar:
        """Tige/branche du mois contenant `day`."""
        raise NotImplementedError

    @abstractmethod
    def zodiac_of_year(self, year: int) -> Zodiac:
        """Signe de l'année `year`."""
        raise NotImplementedError

    @abstractmethod
    def almanac_day(self, day: date) -> AlmanacDay:
        """Almanach (農民曆) de `day`, libellés en chinois traditionnel."""
        raise NotImplementedError
