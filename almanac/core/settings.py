"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
"""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Fichier .env retenu, par priorité:
# 1) ENV_FILE (chemin explicite)
# 2) .env.{APP_ENV} si présent
# 3) .env (défaut, même absent)
_cwd = Path.cwd()
_env_file_from_env = os.getenv("ENV_FILE")
if _env_file_from_env:
    _ENV_FILE_PATH = _env_file_from_env
else:
    _candidate_specific = _cwd / f".env.{os.getenv('APP_ENV', 'dev')}"
    _ENV_FILE_PATH = _candidate_specific if _candidate_specific.exists() else _cwd / ".env"


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
    )
    APP_NAME: str = "almanac-fortune"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Moteur de fortune
    FORTUNE_CACHE_SIZE: int = 100

    # Stockage des profils
    REDIS_URL: str | None = None
    REQUIRE_REDIS: bool = False

    # Source de prix (FinMind) et repli synthétique
    FINMIND_BASE_URL: str = "https://api.finmindtrade.com/api/v4"
    FINMIND_TOKEN: str | None = None
    FINMIND_TIMEOUT_S: float = 10.0
    ETF_SYMBOL: str = "0050"
    ETF_BASE_PRICE: float = 133.5
    PRICE_FALLBACK_ENABLED: bool = True
    PRICE_FALLBACK_SEED: int | None = None
    PRICE_CACHE_TTL_S: float = 300.0
    PRICE_LOOKBACK_DAYS: int = 30


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
