"""
urls.py
=======

Маршруты приложения `eventcalendar` вне REST API.

Текущие маршруты:
- `/` — healthcheck: сервер Django запущен и приложение доступно.
"""
from django.urls import path
from . import views

urlpatterns = [
    path("", views.healthcheck, name="healthcheck"),
]
