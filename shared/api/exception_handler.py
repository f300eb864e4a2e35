"""DRF exception handler producing one stable error body.

Every error leaves the API as::

    {"error": {"code": "...", "message": "...", "details": {...}}}

Domain errors carry their own status and code. DRF and Django errors are
normalised into the same shape. Raw storage errors are logged and replaced
by a generic message.
"""

from __future__ import annotations

import logging
from typing import Any

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied  # type: ignore
from django.db import DatabaseError  # type: ignore
from django.http import Http404  # type: ignore
from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import DomainError, StorageError

logger = logging.getLogger(__name__)

STORAGE_ERROR_MESSAGE = "Хранилище данных временно недоступно. Повторите попытку позже."


def _error_body(code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": details or {}}}


def _describe_api_exception(exc: exceptions.APIException) -> tuple[str, str, Any]:
    if isinstance(exc, exceptions.ValidationError):
        return "validation_error", "Некорректные данные запроса.", exc.detail

    detail = exc.detail
    if isinstance(detail, (list, dict)):
        return exc.default_code, str(exc.default_detail), detail

    codes = exc.get_codes()
    code = codes if isinstance(codes, str) else exc.default_code
    details: dict[str, Any] = {}
    if isinstance(exc, exceptions.Throttled) and exc.wait is not None:
        details["retry_after"] = exc.wait
    return code, str(detail), details


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Map domain, DRF and storage errors to the unified error body."""

    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown"

    if isinstance(exc, DomainError):
        if isinstance(exc, StorageError):
            logger.error(f"Storage error in {view_name}: {exc.message}", exc_info=exc)
            return Response(
                _error_body(exc.code, STORAGE_ERROR_MESSAGE),
                status=exc.status_code,
            )
        return Response({"error": exc.to_dict()}, status=exc.status_code)

    if isinstance(exc, DatabaseError):
        logger.error(f"Unhandled database error in {view_name}: {exc}", exc_info=exc)
        return Response(
            _error_body(StorageError.default_code, STORAGE_ERROR_MESSAGE),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.APIException):
        code, message, details = _describe_api_exception(exc)
        response.data = _error_body(code, message, details)
    return response
