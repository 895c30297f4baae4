"""Single boundary between typed errors and HTTP responses.

Registered as DRF's ``EXCEPTION_HANDLER``.  Views and services never build
error responses themselves: they raise, and this handler maps

* ``DomainError`` subclasses to their ``status_code``,
* uniqueness ``IntegrityError``s to a field-specific 409 (others to 500),
* Pydantic validation errors (DTO construction) to 400,
* DRF's own exceptions (validation, auth, throttling) to the envelope,
* anything else to a logged 500 with a generic message.
"""

from __future__ import annotations

from typing import Any

import structlog
from django.db import IntegrityError
from pydantic import ValidationError as PydanticValidationError
from rest_framework.exceptions import NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from modules.core.exceptions import DomainError, Forbidden, Unauthenticated, Unexpected
from modules.core.integrity import translate_integrity_error
from modules.core.responses import envelope_status

logger = structlog.get_logger(__name__)

AUTHENTICATE_HEADER = 'Bearer realm="api"'


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    if isinstance(exc, IntegrityError):
        conflict = translate_integrity_error(exc)
        if conflict is None:
            logger.error("api.integrity_error", error=str(exc), exc_info=exc)
            return _build(Unexpected.default_message, 500)
        logger.warning("api.unique_violation", error=str(exc))
        exc = conflict

    if isinstance(exc, PydanticValidationError):
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Invalid input."
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        return _build(message, 400)

    if isinstance(exc, NotAuthenticated):
        exc = Unauthenticated()

    if isinstance(exc, DomainError):
        return _domain_response(exc)

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.exception("api.unexpected_error", error=str(exc))
        return _build(Unexpected.default_message, 500)

    detail = response.data
    response.data = {
        "status": envelope_status(response.status_code),
        "message": _first_message(detail),
    }
    if isinstance(detail, dict) and "detail" not in detail:
        response.data["data"] = {"errors": detail}
    logger.warning(
        "api.request_rejected",
        status_code=response.status_code,
        message=response.data["message"],
    )
    return response


def _domain_response(exc: DomainError) -> Response:
    log = logger.bind(error_type=type(exc).__name__, status_code=exc.status_code)
    if isinstance(exc, Forbidden) and exc.action:
        log = log.bind(action=exc.action, required_roles=list(exc.required_roles))
    if exc.status_code >= 500:
        log.error("api.operational_error", message=exc.message)
    else:
        log.warning("api.operational_error", message=exc.message)

    response = _build(exc.message, exc.status_code, exc.data)
    if isinstance(exc, Unauthenticated):
        response["WWW-Authenticate"] = AUTHENTICATE_HEADER
    return response


def _build(message: str, status_code: int, data: Any = None) -> Response:
    body: dict[str, Any] = {
        "status": envelope_status(status_code),
        "message": message,
    }
    if data is not None:
        body["data"] = data
    return Response(body, status=status_code)


def _first_message(detail: Any) -> str:
    """Flatten DRF's error detail into one human-readable sentence."""
    if isinstance(detail, dict):
        if "detail" in detail:
            return str(detail["detail"])
        for field, value in detail.items():
            message = _first_message(value)
            if field == "non_field_errors":
                return message
            return f"{field}: {message}"
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    return str(detail)
