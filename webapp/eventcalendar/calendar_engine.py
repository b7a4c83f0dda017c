"""
eventcalendar.calendar_engine
=============================

Расчёт месячной сетки календаря.

Сетка месяца:
- неделя начинается с воскресенья;
- перед 1-м числом идут пустые ячейки (по числу дней недели до него);
- после последнего дня месяца пустых ячеек нет;
- в каждой ячейке — события этого дня (после фильтра) в порядке входной
  коллекции; показываются первые два, остальное — «+N more».

Навигация всегда нормализует якорь к 1-му числу, чтобы 31 января → февраль
не «перепрыгивал» в март.

Модуль без зависимостей от django: события — любые объекты с атрибутами
`date` (date или строка YYYY-MM-DD) и `location_tag_id`.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta
from enum import Enum
from typing import Any, Collection, Dict, Final, Iterable, List, Optional, Tuple

from .filters import DEFAULT_SELECTION, filter_events

MAX_VISIBLE_EVENTS: Final = 2


class Direction(str, Enum):
    """Направление навигации по месяцам."""
    PREVIOUS = "previous"
    NEXT = "next"


# ---------------------------------------------------------------------------
# Даты
# ---------------------------------------------------------------------------

def date_key(value: Any) -> str:
    """
    Сериализовать дату события в YYYY-MM-DD для точного сравнения строк.
    Строки возвращаются как есть: никакой конвертации часовых поясов.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def month_bounds(anchor: date) -> Tuple[date, date]:
    """Первый и последний день месяца, содержащего anchor."""
    days_in_month = calendar.monthrange(anchor.year, anchor.month)[1]
    return anchor.replace(day=1), anchor.replace(day=days_in_month)


def leading_blanks(first: date) -> int:
    """Число пустых ячеек перед 1-м числом (колонки с воскресенья)."""
    # date.weekday(): понедельник = 0 ... воскресенье = 6
    return (first.weekday() + 1) % 7


def has_neighbours(first: date) -> bool:
    """Есть ли у месяца представимые соседи (не январь 1 года и не декабрь 9999)."""
    if first.year == MINYEAR and first.month == 1:
        return False
    return not (first.year == MAXYEAR and first.month == 12)


def navigate(anchor: date, direction: Direction) -> date:
    """
    Сдвинуть якорь ровно на один месяц.

    :return: 1-е число соседнего месяца
    :raises ValueError: соседний месяц выходит за date.min / date.max
    """
    first = anchor.replace(day=1)
    if Direction(direction) is Direction.PREVIOUS:
        if first.year == MINYEAR and first.month == 1:
            raise ValueError(f"No month before {month_key(first)}")
        return (first - timedelta(days=1)).replace(day=1)
    if first.month == 12:
        if first.year == MAXYEAR:
            raise ValueError(f"No month after {month_key(first)}")
        return first.replace(year=first.year + 1, month=1)
    return first.replace(month=first.month + 1)


def parse_month(text: Optional[str]) -> Optional[date]:
    """
    Разобрать строку месяца "YYYY-MM" (или полную дату "YYYY-MM-DD").

    Месяцы без соседей (январь 1 года, декабрь 9999) не принимаются:
    для них нельзя построить навигацию.

    :return: 1-е число месяца или None при ошибке
    """
    s = (text or "").strip()
    for fmt in ("%Y-%m", "%Y-%m-%d"):
        try:
            first = datetime.strptime(s, fmt).date().replace(day=1)
        except ValueError:
            continue
        return first if has_neighbours(first) else None
    return None


def month_key(day: date) -> str:
    """Ключ месяца "YYYY-MM"."""
    return f"{day.year:04d}-{day.month:02d}"


# ---------------------------------------------------------------------------
# Сетка месяца
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DayCell:
    """Ячейка дня в месячной сетке."""
    date: date
    is_today: bool
    is_selected: bool
    events: Tuple[Any, ...] = ()

    @property
    def visible_events(self) -> Tuple[Any, ...]:
        return self.events[:MAX_VISIBLE_EVENTS]

    @property
    def overflow(self) -> int:
        return max(len(self.events) - MAX_VISIBLE_EVENTS, 0)

    @property
    def more_label(self) -> Optional[str]:
        return f"+{self.overflow} more" if self.overflow else None


@dataclass(frozen=True)
class MonthView:
    """Месячная сетка: пустые ячейки в начале и ячейки всех дней месяца."""
    month: date
    leading_blanks: int
    days: Tuple[DayCell, ...]

    @property
    def first(self) -> date:
        return self.days[0].date

    @property
    def last(self) -> date:
        return self.days[-1].date

    @property
    def previous_month(self) -> date:
        return navigate(self.month, Direction.PREVIOUS)

    @property
    def next_month(self) -> date:
        return navigate(self.month, Direction.NEXT)

    @property
    def cells(self) -> List[Optional[DayCell]]:
        """Плоский список для отрисовки: None на месте пустых ячеек."""
        return [None] * self.leading_blanks + list(self.days)


def month_view(
    anchor: date,
    events: Iterable[Any],
    active_filter: Iterable[str] = DEFAULT_SELECTION,
    *,
    today: Optional[date] = None,
    selected: Optional[date] = None,
    known_tag_ids: Optional[Collection[str]] = None,
) -> MonthView:
    """
    Построить сетку месяца, содержащего anchor.

    :param anchor: любая дата месяца
    :param events: события (порядок сохраняется внутри дня)
    :param active_filter: выбор меток (см. eventcalendar.filters)
    :param today: «сегодня» (по умолчанию date.today())
    :param selected: выбранный день, если есть
    :param known_tag_ids: id существующих меток для обработки висячих ссылок
    """
    today = today or date.today()
    first, last = month_bounds(anchor)

    by_day: Dict[str, List[Any]] = {}
    for ev in filter_events(events, active_filter, known_tag_ids):
        by_day.setdefault(date_key(ev.date), []).append(ev)

    days: List[DayCell] = []
    current = first
    while current <= last:
        days.append(
            DayCell(
                date=current,
                is_today=current == today,
                is_selected=selected is not None and current == selected,
                events=tuple(by_day.get(current.isoformat(), ())),
            )
        )
        current += timedelta(days=1)

    return MonthView(month=first, leading_blanks=leading_blanks(first), days=tuple(days))


__all__ = [
    "MAX_VISIBLE_EVENTS",
    "Direction",
    "DayCell",
    "MonthView",
    "date_key",
    "month_bounds",
    "leading_blanks",
    "navigate",
    "parse_month",
    "month_key",
    "month_view",
]
