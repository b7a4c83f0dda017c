"""
middleware.py
=============

Журнал запросов к API: одна строка на запрос к /api

    POST /api/events/ 201 in 12ms :: {"id":"...","title":"Fair",...}

Строка обрезается до 80 символов.
"""

from __future__ import annotations

import logging
import time

logger = logging.getLogger(__name__)

MAX_LINE_LENGTH = 80


class ApiRequestLogMiddleware:
    """Логирует метод, путь, статус, длительность и начало JSON-ответа."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)

        if request.path.startswith("/api"):
            duration_ms = int((time.monotonic() - started) * 1000)
            line = f"{request.method} {request.path} {response.status_code} in {duration_ms}ms"
            content_type = response.get("Content-Type", "")
            if not response.streaming and content_type.startswith("application/json") and response.content:
                line += " :: " + response.content.decode("utf-8", errors="replace")
            if len(line) > MAX_LINE_LENGTH:
                line = line[:MAX_LINE_LENGTH - 1] + "…"
            logger.info("%s", line)

        return response
