"""
eventcalendar.day_detail
========================

Карточка дня: события на дату, текст «поделиться» и ссылка для
добавления в Google Calendar.

Ограничение: у событий нет времени, поэтому для внешнего календаря
подставляется окно 09:00–10:00 по местному времени. Это удобный экспорт
«на глазок», а не точное расписание.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timezone as dt_timezone, tzinfo
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple
from urllib.parse import urlencode

from .calendar_engine import date_key

logger = logging.getLogger(__name__)

SHARE_DATE_FORMAT = "%d.%m.%Y"
PLACEHOLDER_START = time(9, 0)
PLACEHOLDER_END = time(10, 0)
GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"

# Канал «поделиться»: (заголовок, текст) -> None; при неудаче бросает исключение.
ShareChannel = Callable[[str, str], None]


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


# ---------------------------------------------------------------------------
# События дня
# ---------------------------------------------------------------------------

def events_on(day: Any, events: Iterable[Any]) -> List[Any]:
    """
    События на дату: точное совпадение строк YYYY-MM-DD, порядок входа.

    :param day: date или строка "YYYY-MM-DD"
    :param events: объекты с атрибутом date
    """
    key = date_key(day)
    return [ev for ev in events if date_key(ev.date) == key]


# ---------------------------------------------------------------------------
# Поделиться
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ShareResult:
    """Итог попытки поделиться событием."""
    ok: bool
    text: str
    channel: Optional[str] = None
    message: Optional[str] = None


def format_share_text(event: Any) -> str:
    """
    Текст для отправки: название, дата, описание и ссылка (если есть).
    """
    lines = [
        f"🎉 {event.title}",
        f"📅 {_as_date(event.date).strftime(SHARE_DATE_FORMAT)}",
    ]
    if getattr(event, "description", None):
        lines.append(event.description)
    if getattr(event, "external_link", None):
        lines.append(f"🔗 {event.external_link}")
    return "\n".join(lines)


def share_event(event: Any, channels: Sequence[Tuple[str, ShareChannel]] = ()) -> ShareResult:
    """
    Поделиться событием через первый сработавший канал.

    Каналы перебираются по порядку (обычно системный «share», затем буфер
    обмена). Ошибка канала логируется и не выходит за пределы вызова;
    если не сработал ни один — возвращается ShareResult(ok=False) с
    сообщением для пользователя.
    """
    text = format_share_text(event)
    for name, send in channels:
        try:
            send(event.title, text)
        except Exception:
            logger.warning("share_event: channel %s failed for event=%s", name, getattr(event, "id", None),
                           exc_info=True)
            continue
        logger.info("share_event: event=%s shared via %s", getattr(event, "id", None), name)
        return ShareResult(ok=True, text=text, channel=name)
    return ShareResult(ok=False, text=text, message="Could not share the event")


# ---------------------------------------------------------------------------
# Внешний календарь
# ---------------------------------------------------------------------------

def placeholder_window(day: Any, tz: tzinfo = dt_timezone.utc) -> Tuple[datetime, datetime]:
    """Окно 09:00–10:00 местного времени на дату события, в UTC."""
    d = _as_date(day)
    start = datetime.combine(d, PLACEHOLDER_START, tzinfo=tz).astimezone(dt_timezone.utc)
    end = datetime.combine(d, PLACEHOLDER_END, tzinfo=tz).astimezone(dt_timezone.utc)
    return start, end


def external_calendar_url(event: Any, tz: tzinfo = dt_timezone.utc) -> str:
    """
    Ссылка «добавить в Google Calendar» с окном-заглушкой 09:00–10:00.

    :param event: событие (title, date, description, external_link)
    :param tz: местный часовой пояс календаря
    """
    start, end = placeholder_window(event.date, tz)
    stamp = "%Y%m%dT%H%M%SZ"
    params = {
        "action": "TEMPLATE",
        "text": event.title,
        "dates": f"{start.strftime(stamp)}/{end.strftime(stamp)}",
        "details": getattr(event, "description", None) or "",
        "location": getattr(event, "external_link", None) or "",
    }
    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params, safe='/')}"


__all__ = [
    "ShareChannel",
    "ShareResult",
    "events_on",
    "format_share_text",
    "share_event",
    "placeholder_window",
    "external_calendar_url",
]
