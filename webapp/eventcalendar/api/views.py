"""
views.py (API)
==============

DRF-представления:
- EventViewSet / LocationTagViewSet / ReferenceWebsiteViewSet — CRUD
  (чтение всем, изменения — админ-сессии);
- admin_login / admin_logout / admin_status — админ-сессия;
- last_updated — отметка последнего изменения календаря;
- month_grid — месячная сетка с фильтром локаций;
- location_filter — выбор фильтра, хранимый в сессии посетителя;
- day_detail — карточка дня (текст «поделиться», ссылка в Google Calendar);
- user_interests / toggle_user_interest — отметки «интересно».
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date as date_cls, datetime
from typing import Any, Dict, Optional

from django.db import transaction
from django.utils import timezone
from rest_framework import permissions, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.request import Request
from rest_framework.response import Response

from eventcalendar.auth import get_admin_gate, session_backend
from eventcalendar.calendar_engine import DayCell, MonthView, month_bounds, month_key, month_view, parse_month
from eventcalendar.day_detail import events_on, external_calendar_url, format_share_text
from eventcalendar.exceptions import NotFoundError, ValidationError
from eventcalendar.filters import apply_toggle, effective_tag_id, normalize_selection
from eventcalendar.models import Event, LocationTag, ReferenceWebsite
from eventcalendar.utils import (
    get_events_between_qs,
    get_events_on_qs,
    get_interests,
    get_known_tag_ids,
    get_last_updated,
    get_session_selection,
    get_tag_map,
    set_session_selection,
    toggle_interest,
    touch_last_updated,
)
from .permissions import IsCalendarAdminOrReadOnly
from .serializers import (
    EventSerializer,
    FilterToggleSerializer,
    InterestToggleSerializer,
    LocationTagSerializer,
    ReferenceWebsiteSerializer,
)

logger = logging.getLogger(__name__)

# Цвет рамки события без метки (или с удалённой меткой).
UNTAGGED_COLOR = "#e5e7eb"


# -------- CRUD записей календаря --------

class CalendarRecordViewSet(viewsets.ModelViewSet):
    """
    Общий CRUD для записей календаря.

    - PUT обновляет частично (как PATCH);
    - каждое успешное изменение в той же транзакции обновляет
      «последнее обновление» календаря;
    - удаление уже удалённой записи — 404.
    """

    permission_classes = [IsCalendarAdminOrReadOnly]
    pagination_class = None

    def update(self, request: Request, *args: Any, **kwargs: Any) -> Response:
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def perform_create(self, serializer) -> None:
        with transaction.atomic():
            instance = serializer.save()
            touch_last_updated()
        logger.info("%s created id=%s", type(instance).__name__, instance.pk)

    def perform_update(self, serializer) -> None:
        with transaction.atomic():
            instance = serializer.save()
            touch_last_updated()
        logger.info("%s updated id=%s", type(instance).__name__, instance.pk)

    def perform_destroy(self, instance) -> None:
        model = type(instance)
        with transaction.atomic():
            deleted, _ = model.objects.filter(pk=instance.pk).delete()
            if not deleted:
                raise NotFoundError(self.serializer_class.not_found_message)
            touch_last_updated()
        logger.info("%s deleted id=%s", model.__name__, instance.pk)


class LocationTagViewSet(CalendarRecordViewSet):
    """/api/location-tags/ — метки локаций."""

    queryset = LocationTag.objects.all()
    serializer_class = LocationTagSerializer


class EventViewSet(CalendarRecordViewSet):
    """
    /api/events/ — события.
    /api/events/date/<YYYY-MM-DD>/ — события на дату.
    """

    queryset = Event.objects.all()
    serializer_class = EventSerializer

    @action(detail=False, methods=["get"], url_path=r"date/(?P<day>[^/]+)")
    def by_date(self, request: Request, day: Optional[str] = None) -> Response:
        serializer = self.get_serializer(get_events_on_qs(day), many=True)
        return Response(serializer.data)


class ReferenceWebsiteViewSet(CalendarRecordViewSet):
    """/api/reference-websites/ — справочные ссылки."""

    queryset = ReferenceWebsite.objects.all()
    serializer_class = ReferenceWebsiteSerializer


# -------- Админ-сессия --------

@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def admin_login(request: Request) -> Response:
    """
    Вход администратора: {"password": "..."}.
    Ответ отдаётся только после того, как хранилище подтвердило запись сессии.
    """
    data = request.data if isinstance(request.data, Mapping) else {}
    get_admin_gate().authenticate(session_backend(request), data.get("password"))
    return Response({"success": True, "message": "Admin authenticated successfully", "isAdmin": True})


@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def admin_logout(request: Request) -> Response:
    """Выход: сессия уничтожается целиком. Повторный выход — тоже успех."""
    get_admin_gate().logout(session_backend(request))
    return Response({"success": True, "message": "Admin logged out successfully"})


@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def admin_status(request: Request) -> Response:
    """Нет сессии — просто isAdmin=false, не ошибка."""
    return Response({"isAdmin": get_admin_gate().authorize(session_backend(request))})


# -------- Календарь --------

@api_view(["GET"])
def last_updated(request: Request) -> Response:
    return Response({"lastUpdated": get_last_updated()})


def _parse_day(value: Optional[str], field: str) -> Optional[date_cls]:
    if not value:
        return None
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        parsed = None
    if parsed is None or parsed.isoformat() != value:
        raise ValidationError("Invalid calendar query", details={field: ["Expected YYYY-MM-DD."]})
    return parsed


def _cell_event_payload(event: Event, known: frozenset, tag_map: Dict[str, LocationTag]) -> Dict[str, Any]:
    tag_id = effective_tag_id(event, known)
    return {
        "id": event.id,
        "title": event.title,
        "locationTagId": tag_id,
        "color": tag_map[tag_id].color if tag_id else UNTAGGED_COLOR,
    }


def _cell_payload(cell: DayCell, known: frozenset, tag_map: Dict[str, LocationTag]) -> Dict[str, Any]:
    return {
        "date": cell.date.isoformat(),
        "day": cell.date.day,
        "isToday": cell.is_today,
        "isSelected": cell.is_selected,
        "eventCount": len(cell.events),
        "events": [_cell_event_payload(ev, known, tag_map) for ev in cell.visible_events],
        "hiddenCount": cell.overflow,
        "moreLabel": cell.more_label,
    }


def _month_payload(view: MonthView, selection, tag_map: Dict[str, LocationTag]) -> Dict[str, Any]:
    known = frozenset(tag_map)
    return {
        "month": month_key(view.month),
        "previousMonth": month_key(view.previous_month),
        "nextMonth": month_key(view.next_month),
        "firstDay": view.first.isoformat(),
        "lastDay": view.last.isoformat(),
        "leadingBlanks": view.leading_blanks,
        "selection": list(selection),
        "days": [_cell_payload(cell, known, tag_map) for cell in view.days],
    }


@api_view(["GET"])
def month_grid(request: Request) -> Response:
    """
    Месячная сетка.

    GET-параметры:
      - month: "YYYY-MM" (по умолчанию — текущий месяц);
      - selected: выбранный день "YYYY-MM-DD";
      - tags: id меток через запятую или "all"; без параметра берётся
        фильтр из сессии посетителя.
    """
    raw_month = request.query_params.get("month")
    anchor = parse_month(raw_month) if raw_month else timezone.localdate()
    if anchor is None:
        raise ValidationError("Invalid calendar query", details={"month": ["Expected YYYY-MM."]})
    selected = _parse_day(request.query_params.get("selected"), "selected")

    tag_map = get_tag_map()
    known = frozenset(tag_map)
    raw_tags = request.query_params.get("tags")
    if raw_tags is not None:
        selection = normalize_selection(raw_tags.split(","), known)
    else:
        selection = get_session_selection(request.session, known)

    first, last = month_bounds(anchor)
    view = month_view(
        anchor,
        list(get_events_between_qs(first, last)),
        selection,
        today=timezone.localdate(),
        selected=selected,
        known_tag_ids=known,
    )
    return Response(_month_payload(view, selection, tag_map))


@api_view(["GET", "POST"])
def location_filter(request: Request) -> Response:
    """
    Фильтр локаций посетителя.

    GET  — текущий выбор;
    POST — {"target": "<tagId>|all", "checked": bool}, ответ — новый выбор.
    """
    known = get_known_tag_ids()
    selection = get_session_selection(request.session, known)
    if request.method == "POST":
        serializer = FilterToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        selection = apply_toggle(
            selection,
            serializer.validated_data["target"],
            serializer.validated_data["checked"],
        )
        set_session_selection(request.session, selection)
        logger.info("filter: selection=%s", ",".join(selection))
    return Response({"selection": list(selection)})


@api_view(["GET"])
def day_detail(request: Request, day: str) -> Response:
    """Карточка дня: события с меткой, текстом «поделиться» и ссылкой в календарь."""
    tag_map = get_tag_map()
    known = frozenset(tag_map)
    tz = timezone.get_current_timezone()

    items = []
    for event in events_on(day, get_events_on_qs(day)):
        tag_id = effective_tag_id(event, known)
        payload = dict(EventSerializer(event).data)
        payload["locationTag"] = LocationTagSerializer(tag_map[tag_id]).data if tag_id else None
        payload["shareText"] = format_share_text(event)
        payload["calendarUrl"] = external_calendar_url(event, tz)
        items.append(payload)

    return Response({"date": day, "eventCount": len(items), "events": items})


# -------- «Интересно» --------

@api_view(["GET"])
def user_interests(request: Request) -> Response:
    return Response({"interests": get_interests(request.session)})


@api_view(["POST"])
def toggle_user_interest(request: Request) -> Response:
    """{"eventId": "..."} -> {"eventId", "isInterested"}."""
    serializer = InterestToggleSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    event_id = serializer.validated_data["eventId"]

    if not Event.objects.filter(pk=event_id).exists():
        raise NotFoundError("Event not found")

    is_interested = toggle_interest(request.session, event_id)
    return Response({"eventId": event_id, "isInterested": is_interested})
