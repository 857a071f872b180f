"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module traduit les erreurs métier (`ApplicationError`) et les exceptions HTTP en réponses JSON
de forme constante `{code, message, trace_id, details}`. Le statut HTTP dépend de la catégorie de
l'erreur.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from almanac.core.http_constants import (
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NOT_FOUND,
    HTTP_SERVICE_UNAVAILABLE,
    HTTP_UNPROCESSABLE_ENTITY,
)
from almanac.domain.errors import ApplicationError, ErrorCategory, ErrorCodes

log = structlog.get_logger(__name__)

CATEGORY_STATUS: dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: HTTP_UNPROCESSABLE_ENTITY,
    ErrorCategory.DATA: HTTP_NOT_FOUND,
    ErrorCategory.NETWORK: HTTP_SERVICE_UNAVAILABLE,
    ErrorCategory.API: HTTP_SERVICE_UNAVAILABLE,
}

HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


@dataclass
class ErrorEnvelope:
    """Enveloppe d'erreur standard des réponses API."""

    code: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None


def status_for(exc: ApplicationError) -> int:
    """Validation -> 422, donnée absente -> 404, réseau/API -> 503, autres -> 500."""
    return CATEGORY_STATUS.get(exc.category, HTTP_INTERNAL_SERVER_ERROR)


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id, details=details)
    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
            **({"details": envelope.details} if envelope.details else {}),
        },
    )


def extract_trace_id(request: Request) -> str | None:
    """Identifiant de corrélation: en-tête `X-Trace-ID`, sinon l'id posé par le middleware."""
    trace_id = request.headers.get("X-Trace-ID")
    if trace_id:
        return trace_id
    return getattr(request.state, "request_id", None)


def handle_application_error(request: Request, exc: ApplicationError) -> JSONResponse:
    """Erreur métier: statut selon la catégorie, sévérité et rejouabilité dans `details`."""
    status_code = status_for(exc)
    trace_id = extract_trace_id(request)
    payload = exc.to_dict()
    details = {
        "severity": payload["severity"],
        "category": payload["category"],
        "retryable": payload["retryable"],
        **(exc.details or {}),
    }
    log_method = log.error if status_code >= HTTP_INTERNAL_SERVER_ERROR else log.warning
    log_method(
        "application_error",
        code=exc.code,
        error_message=exc.message,
        status_code=status_code,
        trace_id=trace_id,
    )
    return create_error_response(status_code, exc.code, exc.message, trace_id, details)


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    trace_id = extract_trace_id(request)
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    log.warning("http_exception", code=code, status_code=exc.status_code, trace_id=trace_id)
    return create_error_response(exc.status_code, code, str(exc.detail), trace_id)


def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps ou paramètres invalides (schéma pydantic)."""
    trace_id = extract_trace_id(request)
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    log.warning("request_validation_error", trace_id=trace_id, errors=len(errors))
    return create_error_response(
        HTTP_UNPROCESSABLE_ENTITY,
        ErrorCodes.VALIDATION_ERROR,
        "輸入資料驗證失敗",
        trace_id,
        {"errors": errors},
    )


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    trace_id = extract_trace_id(request)
    log.error(
        "unexpected_error",
        trace_id=trace_id,
        exception_type=type(exc).__name__,
        exception_message=str(exc),
        exc_info=True,
    )
    return create_error_response(
        HTTP_INTERNAL_SERVER_ERROR, ErrorCodes.UNKNOWN_ERROR, "發生未知錯誤", trace_id
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, handle_application_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_generic_exception)
