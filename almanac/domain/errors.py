"""Taxonomie des erreurs métier.

Chaque erreur porte un code stable, une sévérité, une catégorie et un indicateur `retryable`.
La couche API (`almanac.apigw.errors`) se charge de la présentation; le domaine se contente de
lever des erreurs typées.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Sévérité d'une erreur, utilisée pour choisir l'affichage côté client."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Catégorie fonctionnelle d'une erreur."""

    NETWORK = "network"
    API = "api"
    VALIDATION = "validation"
    BUSINESS = "business"
    DATA = "data"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorCodes:
    """Codes d'erreur stables exposés aux clients."""

    NETWORK_ERROR = "NET_001"
    NETWORK_TIMEOUT = "NET_002"

    API_ERROR = "API_001"
    API_TIMEOUT = "API_002"

    VALIDATION_ERROR = "VAL_001"
    VALIDATION_REQUIRED = "VAL_002"
    VALIDATION_FORMAT = "VAL_003"

    BUSINESS_ERROR = "BIZ_001"
    DATA_NOT_FOUND = "BIZ_404"

    SYSTEM_ERROR = "SYS_001"
    UNKNOWN_ERROR = "SYS_999"


# Messages utilisateur par défaut (zh-TW)
ERROR_MESSAGES: dict[str, str] = {
    ErrorCodes.NETWORK_ERROR: "網路連線異常，請檢查您的網路狀態",
    ErrorCodes.NETWORK_TIMEOUT: "網路連線逾時，請稍後再試",
    ErrorCodes.API_ERROR: "API 請求失敗，請稍後再試",
    ErrorCodes.API_TIMEOUT: "API 請求逾時，請稍後再試",
    ErrorCodes.VALIDATION_ERROR: "輸入資料驗證失敗",
    ErrorCodes.VALIDATION_REQUIRED: "此欄位為必填",
    ErrorCodes.VALIDATION_FORMAT: "輸入格式不正確",
    ErrorCodes.BUSINESS_ERROR: "操作失敗",
    ErrorCodes.DATA_NOT_FOUND: "找不到相關資料",
    ErrorCodes.SYSTEM_ERROR: "系統發生錯誤",
    ErrorCodes.UNKNOWN_ERROR: "發生未知錯誤",
}


class ApplicationError(Exception):
    """Erreur applicative de base.

    Args:
        code: Code stable (voir `ErrorCodes`).
        message: Message destiné à l'utilisateur; défaut issu de `ERROR_MESSAGES`.
        severity: Sévérité (défaut: error).
        category: Catégorie fonctionnelle.
        retryable: True si rejouer l'opération a une chance d'aboutir.
        details: Informations complémentaires pour le diagnostic.
    """

    default_code = ErrorCodes.UNKNOWN_ERROR
    default_category = ErrorCategory.UNKNOWN
    default_severity = ErrorSeverity.ERROR
    default_retryable = False

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code or self.default_code
        self.message = message or ERROR_MESSAGES.get(self.code, ERROR_MESSAGES[ErrorCodes.UNKNOWN_ERROR])
        self.severity = severity or self.default_severity
        self.category = category or self.default_category
        self.retryable = self.default_retryable if retryable is None else retryable
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Représentation sérialisable (utilisée par l'enveloppe d'erreur API)."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "retryable": self.retryable,
            **({"details": self.details} if self.details else {}),
        }


class InvalidDateError(ApplicationError):
    """Date cible absente ou illisible; jamais remplacée silencieusement."""

    default_code = ErrorCodes.VALIDATION_FORMAT
    default_category = ErrorCategory.VALIDATION


class ProfileValidationError(ApplicationError):
    """Profil incohérent (date de naissance future, heure mal formée, ...)."""

    default_code = ErrorCodes.VALIDATION_ERROR
    default_category = ErrorCategory.VALIDATION


class ProfileIncompleteError(ProfileValidationError):
    """Nom, date ou heure de naissance manquant."""

    default_code = ErrorCodes.VALIDATION_REQUIRED


class ProfileNotFoundError(ApplicationError):
    default_code = ErrorCodes.DATA_NOT_FOUND
    default_category = ErrorCategory.DATA
    default_severity = ErrorSeverity.WARNING


class CalendarUnavailableError(ApplicationError):
    """Le calendrier lunaire n'a pas pu résoudre la date demandée."""

    default_code = ErrorCodes.SYSTEM_ERROR
    default_category = ErrorCategory.SYSTEM
    default_retryable = True


class PriceDataUnavailableError(ApplicationError):
    """Source de prix injoignable ou réponse invalide."""

    default_code = ErrorCodes.NETWORK_ERROR
    default_category = ErrorCategory.NETWORK
    default_retryable = True
