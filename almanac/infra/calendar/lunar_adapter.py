"""
Calendrier lunaire adossé à `lunar_python`.

Convertit les sorties textuelles de la bibliothèque (tiges, branches, signes en chinois
simplifié) vers les énumérations fermées du domaine, et les libellés de l'almanach (宜忌, fêtes,
節氣, 納音) vers le chinois traditionnel.
"""

from __future__ import annotations

from datetime import date

import structlog
from lunar_python import Solar

from almanac.domain.almanac_day import AlmanacDay
from almanac.domain.errors import CalendarUnavailableError
from almanac.domain.ganzhi import Branch, Pillar, Stem, Zodiac, parse_zodiac
from almanac.infra.calendar.base import LunarCalendar

# Milieu d'année: évite la bascule du nouvel an lunaire
_MID_YEAR_MONTH = 6
_MID_YEAR_DAY = 15

# Simplifié -> traditionnel: expressions d'abord, caractères isolés ensuite
TRADITIONAL_TERMS: tuple[tuple[str, str], ...] = (
    ("开市", "開市"),
    ("纳财", "納財"),
    ("求财", "求財"),
    ("开光", "開光"),
    ("塑绘", "塑繪"),
    ("斋醮", "齋醮"),
    ("剃头", "剃頭"),
    ("纳采", "納采"),
    ("问名", "問名"),
    ("纳吉", "納吉"),
    ("纳征", "納徵"),
    ("请期", "請期"),
    ("亲迎", "親迎"),
    ("合帐", "合帳"),
    ("动土", "動土"),
    ("竖柱", "豎柱"),
    ("开池", "開池"),
    ("补垣", "補垣"),
    ("坏垣", "壞垣"),
    ("栽种", "栽種"),
    ("牧养", "牧養"),
    ("纳畜", "納畜"),
    ("渔猎", "漁獵"),
    ("教牛马", "教牛馬"),
    ("启攒", "啟攢"),
    ("谢土", "謝土"),
    ("订盟", "訂盟"),
    ("会亲友", "會親友"),
    ("进人口", "進人口"),
    ("安门", "安門"),
    ("余事勿取", "餘事勿取"),
    ("诸事不宜", "諸事不宜"),
    ("行丧", "行喪"),
    ("惊蛰", "驚蟄"),
    ("谷雨", "穀雨"),
    ("小满", "小滿"),
    ("芒种", "芒種"),
    ("处暑", "處暑"),
    ("腊", "臘"),
    ("闰", "閏"),
    ("节", "節"),
    ("开", "開"),
    ("纳", "納"),
    ("动", "動"),
    ("财", "財"),
    ("门", "門"),
    ("丧", "喪"),
    ("进", "進"),
    ("亲", "親"),
    ("启", "啟"),
    ("龙", "龍"),
    ("马", "馬"),
    ("鸡", "雞"),
    ("猪", "豬"),
    ("头", "頭"),
    ("阳", "陽"),
    ("妇", "婦"),
    ("劳", "勞"),
    ("儿", "兒"),
    ("党", "黨"),
    ("军", "軍"),
    ("师", "師"),
    ("国", "國"),
    ("圣", "聖"),
    ("诞", "誕"),
    ("为", "為"),
    ("让", "讓"),
    ("从", "從"),
    ("来", "來"),
    ("这", "這"),
    ("会", "會"),
    ("与", "與"),
    ("对", "對"),
)


def to_traditional(text: str | None) -> str:
    """Convertit les termes connus en chinois traditionnel; `None` donne une chaîne vide."""
    result = text or ""
    for simplified, traditional in TRADITIONAL_TERMS:
        result = result.replace(simplified, traditional)
    return result


def _traditional_list(items) -> tuple[str, ...]:
    return tuple(to_traditional(item) for item in items or () if item)


class LunarPythonCalendar(LunarCalendar):
    """Implémentation de `LunarCalendar` via `lunar_python.Solar`."""

    def __init__(self):
        self._log = structlog.get_logger(__name__).bind(component="lunar_calendar")

    def _lunar(self, day: date):
        try:
            return Solar.fromYmd(day.year, day.month, day.day).getLunar()
        except Exception as err:
            self._log.error("lunar_conversion_failed", day=day.isoformat(), error=str(err))
            raise CalendarUnavailableError(
                f"無法計算農民曆資料: {day.isoformat()}", details={"day": day.isoformat()}
            ) from err

    @staticmethod
    def _pillar(stem: str, branch: str, day: date) -> Pillar:
        try:
            return Pillar(Stem(stem), Branch(branch))
        except ValueError as err:
            raise CalendarUnavailableError(
                f"干支無法辨識: {stem}{branch}", details={"day": day.isoformat()}
            ) from err

    def stem_branch_of_day(self, day: date) -> Pillar:
        lunar = self._lunar(day)
        return self._pillar(lunar.getDayGan(), lunar.getDayZhi(), day)

    def stem_branch_of_month(self, day: date) -> Pillar:
        lunar = self._lunar(day)
        return self._pillar(lunar.getMonthGan(), lunar.getMonthZhi(), day)

    def zodiac_of_year(self, year: int) -> Zodiac:
        lunar = self._lunar(date(year, _MID_YEAR_MONTH, _MID_YEAR_DAY))
        try:
            return parse_zodiac(lunar.getYearShengXiao())
        except ValueError as err:
            raise CalendarUnavailableError(f"生肖無法辨識: {year}") from err

    def almanac_day(self, day: date) -> AlmanacDay:
        """Almanach du jour; les champs absents de la bibliothèque restent vides."""
        lunar = self._lunar(day)
        solar = lunar.getSolar()
        try:
            zodiac = parse_zodiac(lunar.getYearShengXiao())
            festivals = list(lunar.getFestivals() or ()) + list(solar.getFestivals() or ())
            peng_zu = " ".join(p for p in (lunar.getPengZuGan(), lunar.getPengZuZhi()) if p)
            return AlmanacDay(
                date=day.isoformat(),
                lunar_year=lunar.getYearInChinese(),
                lunar_month=to_traditional(lunar.getMonthInChinese()),
                lunar_day=to_traditional(lunar.getDayInChinese()),
                year_gan_zhi=lunar.getYearInGanZhi(),
                month_gan_zhi=lunar.getMonthInGanZhi(),
                day_gan_zhi=lunar.getDayInGanZhi(),
                zodiac=zodiac,
                constellation=to_traditional(solar.getXingZuo()),
                year_na_yin=to_traditional(lunar.getYearNaYin()),
                day_na_yin=to_traditional(lunar.getDayNaYin()),
                jie_qi=to_traditional(lunar.getJieQi()),
                festivals=_traditional_list(festivals),
                yi=_traditional_list(lunar.getDayYi()),
                ji=_traditional_list(lunar.getDayJi()),
                peng_zu=to_traditional(peng_zu),
            )
        except (AttributeError, TypeError, ValueError) as err:
            self._log.error("almanac_conversion_failed", day=day.isoformat(), error=str(err))
            raise CalendarUnavailableError(
                f"無法計算農民曆資料: {day.isoformat()}", details={"day": day.isoformat()}
            ) from err
