"""
urls.py (API)
=============

Маршрутизация DRF-эндпоинтов.
"""

from __future__ import annotations

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    EventViewSet,
    LocationTagViewSet,
    ReferenceWebsiteViewSet,
    admin_login,
    admin_logout,
    admin_status,
    day_detail,
    last_updated,
    location_filter,
    month_grid,
    toggle_user_interest,
    user_interests,
)

router = DefaultRouter()
router.register(r"events", EventViewSet, basename="events")
router.register(r"location-tags", LocationTagViewSet, basename="location-tags")
router.register(r"reference-websites", ReferenceWebsiteViewSet, basename="reference-websites")

urlpatterns = [
    # Админ-сессия
    path("admin/login/", admin_login, name="admin-login"),
    path("admin/logout/", admin_logout, name="admin-logout"),
    path("admin/status/", admin_status, name="admin-status"),
    # Календарь
    path("calendar/last-updated/", last_updated, name="calendar-last-updated"),
    path("calendar/month/", month_grid, name="calendar-month"),
    path("calendar/filter/", location_filter, name="calendar-filter"),
    path("calendar/day/<str:day>/", day_detail, name="calendar-day"),
    # Отметки «интересно» (сессия посетителя)
    path("user-interests/", user_interests, name="user-interests"),
    path("user-interests/toggle/", toggle_user_interest, name="user-interests-toggle"),
    # CRUD-эндпоинты:
    path("", include(router.urls)),
]
