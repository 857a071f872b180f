"""Tests pour la validation et la normalisation des profils utilisateur."""

from datetime import date

import pytest
from pydantic import ValidationError

from almanac.domain.entities import UserProfile, validate_profile
from almanac.domain.ganzhi import Element, Zodiac

TODAY = date(2024, 1, 15)


def test_aliases_and_normalisation(profile):
    """Teste les alias camelCase, l'élément chinois et les listes figées."""
    assert profile.birth_date == "1990-01-01"
    assert profile.element is Element.METAL
    assert profile.zodiac is Zodiac.RAT
    assert profile.lucky_numbers == (1, 6)
    assert profile.is_complete


def test_simplified_zodiac_accepted():
    """Teste que les libellés simplifiés sont ramenés au traditionnel."""
    assert UserProfile(zodiac="龙", element="fire").zodiac is Zodiac.DRAGON
    assert UserProfile(zodiac="猪", element="水").zodiac is Zodiac.PIG


def test_unknown_zodiac_rejected():
    with pytest.raises(ValidationError):
        UserProfile(zodiac="貓", element="metal")


def test_non_string_labels_rejected():
    """Teste qu'une liste ou un dictionnaire est une erreur de validation."""
    with pytest.raises(ValidationError):
        UserProfile(zodiac=["鼠"], element="metal")
    with pytest.raises(ValidationError):
        UserProfile(zodiac="鼠", element={"name": "金"})


def test_valid_profile_has_no_errors(profile):
    assert validate_profile(profile, today=TODAY) == []


def test_missing_fields_reported():
    """Teste les messages des champs manquants."""
    errors = validate_profile(UserProfile(name=" ", zodiac="鼠", element="金"), today=TODAY)
    assert errors == ["姓名不能為空", "出生日期不能為空", "出生時間不能為空"]


def test_inconsistent_fields_reported():
    """Teste date de naissance future, date illisible et heure mal formée."""
    future = UserProfile(
        name="未來人", birth_date="2030-01-01", birth_time="25:00", zodiac="狗", element="土"
    )
    assert validate_profile(future, today=TODAY) == ["出生日期不能是未來時間", "無效的出生時間: 25:00"]

    garbled = UserProfile(name="亂碼", birth_date="1990-13-45", birth_time="10:30", zodiac="狗", element="土")
    assert validate_profile(garbled, today=TODAY) == ["無效的出生日期: 1990-13-45"]


def test_missing_fields_labels():
    partial = UserProfile(name="王小明", zodiac="鼠", element="金")
    assert partial.missing_fields() == ["出生日期", "出生時間"]
    assert not partial.is_complete
