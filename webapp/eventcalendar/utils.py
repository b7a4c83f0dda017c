"""
utils.py
========

Служебные функции календарного приложения.

Содержит три логические группы:

1) Хранилище (Event / LocationTag / CalendarMetadata):
   - выборки событий за месяц и на день;
   - множество существующих меток (для висячих ссылок);
   - отметка «последнее обновление».

2) Фильтр локаций посетителя — хранится в его сессии.

3) «Интересно» — отметки посетителя на событиях, тоже в сессии.

Эти утилиты используются REST-вьюхами (eventcalendar.api.views).
"""

from __future__ import annotations

import logging
from datetime import date as date_cls, datetime
from typing import Dict, FrozenSet, List, Optional

from django.contrib.sessions.backends.base import SessionBase
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from .filters import Selection, normalize_selection
from .models import CalendarMetadata, Event, LocationTag

logger = logging.getLogger(__name__)

FILTER_SESSION_KEY = "calendar_filter"
INTERESTS_SESSION_KEY = "interests"


# ---------------------------------------------------------------------------
# ХРАНИЛИЩЕ: выборки и отметка обновления
# ---------------------------------------------------------------------------

def get_events_between_qs(first: date_cls, last: date_cls) -> QuerySet[Event]:
    """
    События в интервале дат (включительно) в порядке хранилища.

    :param first: первый день
    :param last:  последний день
    """
    return Event.objects.filter(date__gte=first, date__lte=last)


def get_events_on_qs(day_text: str) -> QuerySet[Event]:
    """
    События на дату "YYYY-MM-DD".

    Строка, не являющаяся датой, не может совпасть ни с одним событием —
    возвращаем пустую выборку, а не ошибку.
    """
    try:
        day = datetime.strptime(day_text, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return Event.objects.none()
    # Точное совпадение строк: "2025-9-17" не равно "2025-09-17".
    if day.isoformat() != day_text:
        return Event.objects.none()
    return Event.objects.filter(date=day)


def get_known_tag_ids() -> FrozenSet[str]:
    """Идентификаторы существующих меток локаций."""
    return frozenset(LocationTag.objects.values_list("id", flat=True))


def get_tag_map() -> Dict[str, LocationTag]:
    """Метки локаций по id."""
    return {tag.id: tag for tag in LocationTag.objects.all()}


@transaction.atomic
def touch_last_updated() -> datetime:
    """
    Перезаписать отметку «последнее обновление» текущим временем.

    Вызывается в той же транзакции, что и изменение данных.
    """
    now = timezone.now()
    CalendarMetadata.objects.update_or_create(
        pk=CalendarMetadata.SINGLETON_PK,
        defaults={"last_updated": now},
    )
    logger.info("META: last_updated=%s", now.isoformat())
    return now


def get_last_updated() -> Optional[datetime]:
    """Текущее значение «последнего обновления» или None."""
    row = CalendarMetadata.objects.filter(pk=CalendarMetadata.SINGLETON_PK).first()
    return row.last_updated if row else None


# ---------------------------------------------------------------------------
# ФИЛЬТР ЛОКАЦИЙ (в сессии посетителя)
# ---------------------------------------------------------------------------

def get_session_selection(session: SessionBase, known_tag_ids: Optional[FrozenSet[str]] = None) -> Selection:
    """Текущий выбор фильтра из сессии (удалённые метки отбрасываются)."""
    return normalize_selection(session.get(FILTER_SESSION_KEY), known_tag_ids)


def set_session_selection(session: SessionBase, selection: Selection) -> None:
    session[FILTER_SESSION_KEY] = list(selection)


# ---------------------------------------------------------------------------
# «ИНТЕРЕСНО» (в сессии посетителя)
# ---------------------------------------------------------------------------

def get_interests(session: SessionBase) -> List[str]:
    """Id событий, отмеченных посетителем."""
    return list(session.get(INTERESTS_SESSION_KEY, []))


def toggle_interest(session: SessionBase, event_id: str) -> bool:
    """
    Переключить отметку «интересно» для события.

    :return: True — теперь отмечено, False — отметка снята
    """
    interests = get_interests(session)
    if event_id in interests:
        interests.remove(event_id)
        is_interested = False
    else:
        interests.append(event_id)
        is_interested = True
    session[INTERESTS_SESSION_KEY] = interests
    return is_interested


__all__ = [
    "FILTER_SESSION_KEY",
    "INTERESTS_SESSION_KEY",
    # Хранилище
    "get_events_between_qs",
    "get_events_on_qs",
    "get_known_tag_ids",
    "get_tag_map",
    "touch_last_updated",
    "get_last_updated",
    # Фильтр
    "get_session_selection",
    "set_session_selection",
    # Интересы
    "get_interests",
    "toggle_interest",
]
