"""
permissions.py
==============

Права доступа для API: чтение открыто всем, изменения — только
администратору (админ-флаг сессии, см. eventcalendar.auth).
"""

from __future__ import annotations

import logging

from rest_framework import permissions
from rest_framework.request import Request

from eventcalendar.auth import get_admin_gate, session_backend
from eventcalendar.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


class IsCalendarAdminOrReadOnly(permissions.BasePermission):
    """
    Разрешение: GET/HEAD/OPTIONS — всем, остальное — админ-сессии.

    Отказ оформляется как AuthorizationError (401), а не стандартный
    для DRF 403: у API нет схемы аутентификации, есть только сессия.
    """

    def has_permission(self, request: Request, view) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True
        if get_admin_gate().authorize(session_backend(request)):
            return True
        logger.warning("Rejected %s %s: no admin session", request.method, request.path)
        raise AuthorizationError()
