"""Graine déterministe et flux pseudo-aléatoire reproductible.

- `derive_seed`: hachage FNV-1a 32 bits de (date cible, identité du profil).
- `make_rng`: générateur congruentiel linéaire (constantes Numerical Recipes) renvoyant des
  flottants dans [0, 1).

Les sous-flux indépendants s'obtiennent en décalant la graine (`seed + 1000`, ...).
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from almanac.domain.entities import UserProfile

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619

LCG_A = 1664525
LCG_C = 1013904223
LCG_M = 2**32

_MASK_32 = 0xFFFFFFFF

# Décalages des sous-flux
ELEMENTS_STREAM = 0
INVESTMENT_STREAM = 1000
LUCKY_TIME_STREAM = 2000
AVOID_TIME_STREAM = 3000


def fnv1a_32(text: str) -> int:
    """Hachage FNV-1a sur les points de code de `text`, tronqué à 32 bits à chaque étape."""
    h = FNV_OFFSET_BASIS
    for ch in text:
        h ^= ord(ch)
        h = (h * FNV_PRIME) & _MASK_32
    return h


def profile_identity(profile: UserProfile) -> str:
    """Nom + chiffres de la date de naissance + chiffres de l'heure de naissance."""
    return f"{profile.name}{profile.birth_date.replace('-', '')}{profile.birth_time.replace(':', '')}"


def derive_seed(profile: UserProfile, day: date) -> int:
    """Graine uint32 pour (profil, date); la date (sans tirets) précède l'identité."""
    return fnv1a_32(day.isoformat().replace("-", "") + profile_identity(profile))


def make_rng(seed: int) -> Callable[[], float]:
    """Construit un flux LCG reproductible initialisé à `seed` (ramené sur 32 bits)."""
    state = seed & _MASK_32

    def _next() -> float:
        nonlocal state
        state = (LCG_A * state + LCG_C) % LCG_M
        return state / LCG_M

    return _next
