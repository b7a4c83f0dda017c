"""
urls.py
=======

Корневой маршрутизатор Django-проекта **Regional Events Calendar**.

Структура маршрутов:
- / — healthcheck приложения календаря (`eventcalendar`);
- /api/ — REST API: события, локации, ссылки, админ-сессия, месячная сетка.
"""

from django.urls import path, include


urlpatterns = [
    # Основное приложение календаря (корневой маршрут)
    path("", include("eventcalendar.urls")),

    # DRF API
    path("api/", include("eventcalendar.api.urls")),
]
