"""
exceptions.py
=============

Таксономия ошибок календаря.

Все классы — наследники DRF `APIException`, поэтому их можно бросать как
из вьюх, так и из прикладных модулей (auth, utils): DRF сам превратит их
в ответ с нужным HTTP-статусом, а `api.exceptions.calendar_exception_handler`
приведёт тело к виду {"error": ..., "details": ...}.

- ValidationError     — 400, некорректное тело запроса (детали по полям);
- AuthenticationError — 401, неверный пароль (без подробностей);
- AuthorizationError  — 401, нет админ-сессии для изменяющего запроса;
- NotFoundError       — 404, цель изменения отсутствует;
- DependencyError     — 500, недоступно хранилище/сессии или нет настройки.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException


class CalendarError(APIException):
    """Базовая ошибка календаря."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Calendar error"
    default_code = "calendar_error"

    def __init__(self, detail=None, code=None, details=None):
        super().__init__(detail=detail, code=code)
        # Дополнительные сведения для клиента (например, ошибки по полям).
        self.details = details


class ValidationError(CalendarError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid data"
    default_code = "invalid"


class AuthenticationError(CalendarError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid admin password"
    default_code = "authentication_failed"


class AuthorizationError(CalendarError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Admin authentication required"
    default_code = "not_authorized"


class NotFoundError(CalendarError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
    default_code = "not_found"


class DependencyError(CalendarError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
    default_code = "dependency_error"


__all__ = [
    "CalendarError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "DependencyError",
]
