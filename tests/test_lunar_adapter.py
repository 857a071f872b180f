"""Tests pour l'adaptateur calendaire `lunar_python`."""

from datetime import date

from almanac.domain.ganzhi import Branch, Pillar, Stem, Zodiac
from almanac.infra.calendar.lunar_adapter import LunarPythonCalendar, to_traditional


def test_zodiac_of_year_uses_traditional_labels():
    """Teste le signe de l'année, libellés simplifiés ramenés au traditionnel."""
    calendar = LunarPythonCalendar()
    assert calendar.zodiac_of_year(2024) is Zodiac.DRAGON
    assert calendar.zodiac_of_year(2020) is Zodiac.RAT
    assert calendar.zodiac_of_year(2017) is Zodiac.ROOSTER


def test_pillars_are_domain_enums():
    """Teste que les piliers du jour et du mois sont des énumérations fermées."""
    calendar = LunarPythonCalendar()
    day = calendar.stem_branch_of_day(date(2024, 1, 15))
    month = calendar.stem_branch_of_month(date(2024, 1, 15))
    for pillar in (day, month):
        assert isinstance(pillar, Pillar)
        assert isinstance(pillar.stem, Stem)
        assert isinstance(pillar.branch, Branch)


def test_day_pillar_cycles_every_sixty_days():
    """Teste le cycle sexagésimal des jours."""
    calendar = LunarPythonCalendar()
    first = calendar.stem_branch_of_day(date(2024, 1, 15))
    assert calendar.stem_branch_of_day(date(2024, 3, 15)) == first
    assert calendar.stem_branch_of_day(date(2024, 1, 16)) != first


def test_to_traditional_terms():
    """Teste la conversion des expressions 宜忌 puis des caractères isolés."""
    assert to_traditional("开市") == "開市"
    assert to_traditional("会亲友") == "會親友"
    assert to_traditional("春节") == "春節"
    assert to_traditional("祭祀") == "祭祀"
    assert to_traditional(None) == ""


def test_almanac_day_on_lunar_new_year():
    """Teste l'almanach du 2024-02-10 (正月初一): fête, signe et libellés traditionnels."""
    almanac = LunarPythonCalendar().almanac_day(date(2024, 2, 10))
    assert almanac.date == "2024-02-10"
    assert almanac.lunar_month == "正"
    assert almanac.lunar_day == "初一"
    assert almanac.year_gan_zhi == "甲辰"
    assert almanac.zodiac is Zodiac.DRAGON
    assert "春節" in almanac.festivals
    assert almanac.yi and almanac.ji
    for term in almanac.yi + almanac.ji:
        assert "开" not in term and "纳" not in term and "动" not in term
    assert len(almanac.day_gan_zhi) == 2
    assert isinstance(almanac.jie_qi, str)
