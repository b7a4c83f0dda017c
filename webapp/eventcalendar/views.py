# webapp/eventcalendar/views.py
"""
Представления (views) приложения `eventcalendar` вне REST API.

- healthcheck — проверка живости
"""
from __future__ import annotations

from django.http import HttpResponse


def healthcheck(request) -> HttpResponse:
    """Простой healthcheck для аптайм-мониторинга."""
    return HttpResponse("Regional Events Calendar is running.")
