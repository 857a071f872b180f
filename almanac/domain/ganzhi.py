"""Alphabets fermés du calendrier sexagésimal et tables de correspondance.

Les tiges (天干), branches (地支), signes (生肖) et éléments (五行) sont des énumérations;
toutes les tables ci-dessous sont indexées par ces énumérations et non par des chaînes libres.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class Element(str, Enum):
    """Les cinq éléments, dans l'ordre d'itération stable du modèle d'énergie."""

    METAL = "metal"
    WOOD = "wood"
    WATER = "water"
    FIRE = "fire"
    EARTH = "earth"


class Stem(str, Enum):
    """Les dix tiges célestes (天干)."""

    JIA = "甲"
    YI = "乙"
    BING = "丙"
    DING = "丁"
    WU = "戊"
    JI = "己"
    GENG = "庚"
    XIN = "辛"
    REN = "壬"
    GUI = "癸"


class Branch(str, Enum):
    """Les douze branches terrestres (地支)."""

    ZI = "子"
    CHOU = "丑"
    YIN = "寅"
    MAO = "卯"
    CHEN = "辰"
    SI = "巳"
    WU = "午"
    WEI = "未"
    SHEN = "申"
    YOU = "酉"
    XU = "戌"
    HAI = "亥"


class Zodiac(str, Enum):
    """Les douze signes (生肖), libellés en chinois traditionnel."""

    RAT = "鼠"
    OX = "牛"
    TIGER = "虎"
    RABBIT = "兔"
    DRAGON = "龍"
    SNAKE = "蛇"
    HORSE = "馬"
    GOAT = "羊"
    MONKEY = "猴"
    ROOSTER = "雞"
    DOG = "狗"
    PIG = "豬"


class Pillar(NamedTuple):
    """Couple tige/branche (干支) d'un jour ou d'un mois."""

    stem: Stem
    branch: Branch

    def __str__(self) -> str:
        return f"{self.stem.value}{self.branch.value}"


# Libellés simplifiés (ex: sortie de lunar_python) -> traditionnels
ZODIAC_SIMPLIFIED_ALIASES: dict[str, Zodiac] = {
    "龙": Zodiac.DRAGON,
    "马": Zodiac.HORSE,
    "鸡": Zodiac.ROOSTER,
    "猪": Zodiac.PIG,
}

ELEMENT_CHINESE_LABELS: dict[str, Element] = {
    "金": Element.METAL,
    "木": Element.WOOD,
    "水": Element.WATER,
    "火": Element.FIRE,
    "土": Element.EARTH,
}


def parse_zodiac(value: str | Zodiac) -> Zodiac:
    """Normalise un libellé de signe (traditionnel ou simplifié).

    Raises:
        ValueError: libellé inconnu.
    """
    if isinstance(value, Zodiac):
        return value
    if not isinstance(value, str):
        raise ValueError(f"signe invalide: {value!r}")
    alias = ZODIAC_SIMPLIFIED_ALIASES.get(value)
    return alias if alias is not None else Zodiac(value)


def parse_element(value: str | Element) -> Element:
    """Normalise un élément donné en anglais (`metal`) ou en chinois (`金`)."""
    if isinstance(value, Element):
        return value
    if not isinstance(value, str):
        raise ValueError(f"élément invalide: {value!r}")
    label = ELEMENT_CHINESE_LABELS.get(value)
    return label if label is not None else Element(value.lower())


# Modificateurs d'énergie: chaque tige/branche renforce un seul élément
STEM_MODIFIERS: dict[Stem, tuple[Element, int]] = {
    Stem.JIA: (Element.WOOD, 20),
    Stem.YI: (Element.WOOD, 15),
    Stem.BING: (Element.FIRE, 20),
    Stem.DING: (Element.FIRE, 15),
    Stem.WU: (Element.EARTH, 20),
    Stem.JI: (Element.EARTH, 15),
    Stem.GENG: (Element.METAL, 20),
    Stem.XIN: (Element.METAL, 15),
    Stem.REN: (Element.WATER, 20),
    Stem.GUI: (Element.WATER, 15),
}

BRANCH_MODIFIERS: dict[Branch, tuple[Element, int]] = {
    Branch.ZI: (Element.WATER, 15),
    Branch.WU: (Element.FIRE, 15),
    Branch.MAO: (Element.WOOD, 15),
    Branch.YOU: (Element.METAL, 15),
    Branch.YIN: (Element.WOOD, 10),
    Branch.SHEN: (Element.METAL, 10),
    Branch.SI: (Element.FIRE, 10),
    Branch.HAI: (Element.WATER, 10),
    Branch.CHEN: (Element.EARTH, 10),
    Branch.XU: (Element.EARTH, 10),
    Branch.CHOU: (Element.EARTH, 10),
    Branch.WEI: (Element.EARTH, 10),
}

ZODIAC_BONUS: dict[Zodiac, int] = {
    Zodiac.RAT: 5,
    Zodiac.OX: 8,
    Zodiac.TIGER: 3,
    Zodiac.RABBIT: 6,
    Zodiac.DRAGON: 10,
    Zodiac.SNAKE: 7,
    Zodiac.HORSE: 4,
    Zodiac.GOAT: 2,
    Zodiac.MONKEY: 9,
    Zodiac.ROOSTER: 6,
    Zodiac.DOG: 5,
    Zodiac.PIG: 8,
}

# Branches horaires favorables (三合) par signe
ZODIAC_LUCKY_BRANCHES: dict[Zodiac, tuple[Branch, ...]] = {
    Zodiac.RAT: (Branch.ZI, Branch.SHEN, Branch.CHEN),
    Zodiac.OX: (Branch.CHOU, Branch.SI, Branch.YOU),
    Zodiac.TIGER: (Branch.YIN, Branch.WU, Branch.XU),
    Zodiac.RABBIT: (Branch.MAO, Branch.HAI, Branch.WEI),
    Zodiac.DRAGON: (Branch.CHEN, Branch.ZI, Branch.SHEN),
    Zodiac.SNAKE: (Branch.SI, Branch.YOU, Branch.CHOU),
    Zodiac.HORSE: (Branch.WU, Branch.XU, Branch.YIN),
    Zodiac.GOAT: (Branch.WEI, Branch.MAO, Branch.HAI),
    Zodiac.MONKEY: (Branch.SHEN, Branch.CHEN, Branch.ZI),
    Zodiac.ROOSTER: (Branch.YOU, Branch.CHOU, Branch.SI),
    Zodiac.DOG: (Branch.XU, Branch.YIN, Branch.WU),
    Zodiac.PIG: (Branch.HAI, Branch.WEI, Branch.MAO),
}

# Branche en opposition (六沖) avec le signe
ZODIAC_CONFLICT_BRANCH: dict[Zodiac, Branch] = {
    Zodiac.RAT: Branch.WU,
    Zodiac.OX: Branch.WEI,
    Zodiac.TIGER: Branch.SHEN,
    Zodiac.RABBIT: Branch.YOU,
    Zodiac.DRAGON: Branch.XU,
    Zodiac.SNAKE: Branch.HAI,
    Zodiac.HORSE: Branch.ZI,
    Zodiac.GOAT: Branch.CHOU,
    Zodiac.MONKEY: Branch.YIN,
    Zodiac.ROOSTER: Branch.MAO,
    Zodiac.DOG: Branch.CHEN,
    Zodiac.PIG: Branch.SI,
}
