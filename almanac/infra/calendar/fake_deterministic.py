"""Calendrier factice déterministe pour les tests et le développement.

Renvoie toujours les mêmes piliers, quelle que soit la date, ce qui isole le moteur de fortune
de la bibliothèque calendaire.
"""

from __future__ import annotations

from datetime import date

from almanac.domain.almanac_day import AlmanacDay
from almanac.domain.ganzhi import Branch, Pillar, Stem, Zodiac
from almanac.infra.calendar.base import LunarCalendar


class FakeDeterministicCalendar(LunarCalendar):
    """Calendrier à piliers fixes (par défaut: jour 甲子, mois 乙丑, année 甲子 du rat).

    Args:
        day: Pilier renvoyé pour tout jour.
        month: Pilier renvoyé pour tout mois.
        zodiac: Signe renvoyé pour toute année.
        year: Pilier de l'année lunaire de l'almanach.
        yi: Activités 宜 de l'almanach.
        ji: Activités 忌 de l'almanach.
    """

    def __init__(
        self,
        day: Pillar = Pillar(Stem.JIA, Branch.ZI),
        month: Pillar = Pillar(Stem.YI, Branch.CHOU),
        zodiac: Zodiac = Zodiac.RAT,
        year: Pillar = Pillar(Stem.JIA, Branch.ZI),
        yi: tuple[str, ...] = ("祭祀", "開市", "納財"),
        ji: tuple[str, ...] = ("動土", "破土"),
    ):
        self.day = day
        self.month = month
        self.zodiac = zodiac
        self.year = year
        self.yi = yi
        self.ji = ji
        self.calls = 0

    def stem_branch_of_day(self, day: date) -> Pillar:
        self.calls += 1
        return self.day

    def stem_branch_of_month(self, day: date) -> Pillar:
        return self.month

    def zodiac_of_year(self, year: int) -> Zodiac:
        return self.zodiac

    def almanac_day(self, day: date) -> AlmanacDay:
        return AlmanacDay(
            date=day.isoformat(),
            lunar_year="二〇二四",
            lunar_month="正",
            lunar_day="初一",
            year_gan_zhi=str(self.year),
            month_gan_zhi=str(self.month),
            day_gan_zhi=str(self.day),
            zodiac=self.zodiac,
            festivals=("春節",),
            yi=self.yi,
            ji=self.ji,
        )
