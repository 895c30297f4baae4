"""Response envelope helpers.

Every endpoint answers with ``{"status", "message", "data"?}`` where
``status`` is ``success`` for 2xx, ``fail`` for 4xx and ``error`` for 5xx.
"""

from __future__ import annotations

from typing import Any

from rest_framework import status as http_status
from rest_framework.request import Request
from rest_framework.response import Response

_MISSING = object()


def envelope_status(status_code: int) -> str:
    if status_code < 400:
        return "success"
    if status_code < 500:
        return "fail"
    return "error"


def envelope(
    message: str,
    data: Any = _MISSING,
    status: int = http_status.HTTP_200_OK,
) -> Response:
    body: dict[str, Any] = {"status": envelope_status(status), "message": message}
    if data is not _MISSING:
        body["data"] = data
    return Response(body, status=status)


def client_ip(request: Request) -> str | None:
    """Best-effort origin address of the request."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")
