"""
exceptions.py (API)
===================

Обработчик исключений DRF: все ошибки API отдаются в едином виде

    {"error": "<сообщение>", "details": <детали, если есть>}

Ошибки БД логируются с трассировкой и отдаются клиенту как общий 500.
"""

from __future__ import annotations

import logging

from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions
from rest_framework.views import exception_handler

from eventcalendar.exceptions import CalendarError, DependencyError, NotFoundError

logger = logging.getLogger(__name__)


def _view_message(view, attr: str, default: str) -> str:
    serializer_class = getattr(view, "serializer_class", None)
    return getattr(serializer_class, attr, None) or default


def calendar_exception_handler(exc, context):
    """EXCEPTION_HANDLER для REST_FRAMEWORK (см. settings)."""
    view = context.get("view")

    if isinstance(exc, DatabaseError):
        logger.error("Storage failure in %s", type(view).__name__, exc_info=exc)
        exc = DependencyError()
    elif isinstance(exc, Http404):
        exc = NotFoundError(_view_message(view, "not_found_message", "Not found"))

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, CalendarError):
        body = {"error": str(exc.detail)}
        if exc.details:
            body["details"] = exc.details
    elif isinstance(exc, exceptions.ValidationError):
        body = {
            "error": _view_message(view, "invalid_message", "Invalid data"),
            "details": response.data,
        }
    else:
        body = {"error": str(getattr(exc, "detail", "Request failed"))}

    response.data = body
    return response
