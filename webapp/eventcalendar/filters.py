"""
eventcalendar.filters
=====================

Фильтр событий по меткам локаций.

Выбор (selection) — упорядоченный набор id меток либо особое значение "all":
    ("all",)                — показывать все события;
    ("tag-a", "tag-b")      — только события с этими метками.

Правила:
- выбор никогда не пуст: пустой результат сворачивается в ("all",);
- "all" и конкретные метки взаимоисключающие;
- висячая ссылка на удалённую метку считается «без метки».

Модуль без зависимостей от django — его используют и вьюхи, и тесты.
"""

from __future__ import annotations

from typing import Any, Collection, Final, Iterable, List, Optional, Tuple

ALL: Final = "all"

Selection = Tuple[str, ...]

DEFAULT_SELECTION: Final[Selection] = (ALL,)


# ---------------------------------------------------------------------------
# Редьюсер выбора
# ---------------------------------------------------------------------------

def apply_toggle(selection: Iterable[str], target: str, checked: bool) -> Selection:
    """
    Применить клик по чекбоксу фильтра.

    :param selection: текущий выбор
    :param target: id метки или "all"
    :param checked: новое состояние чекбокса
    :return: новый выбор (никогда не пустой)
    """
    specific: List[str] = [tag for tag in selection if tag != ALL]

    if target == ALL:
        if checked:
            return DEFAULT_SELECTION
        # Снятие "all" оставляет только конкретные метки (если они есть).
        return tuple(specific) or DEFAULT_SELECTION

    if checked:
        if target not in specific:
            specific.append(target)
    else:
        specific = [tag for tag in specific if tag != target]

    return tuple(specific) or DEFAULT_SELECTION


def normalize_selection(
    raw: Optional[Iterable[str]],
    known_tag_ids: Optional[Collection[str]] = None,
) -> Selection:
    """
    Привести внешний ввод (query-параметр, сессия) к корректному выбору.

    - пустые строки и дубли отбрасываются;
    - "all" вместе с метками даёт ("all",);
    - если задан known_tag_ids, неизвестные метки отбрасываются.
    """
    tags: List[str] = []
    for item in raw or ():
        tag = str(item).strip()
        if not tag or tag in tags:
            continue
        if tag == ALL:
            return DEFAULT_SELECTION
        if known_tag_ids is not None and tag not in known_tag_ids:
            continue
        tags.append(tag)
    return tuple(tags) or DEFAULT_SELECTION


# ---------------------------------------------------------------------------
# Фильтрация событий
# ---------------------------------------------------------------------------

def effective_tag_id(event: Any, known_tag_ids: Optional[Collection[str]] = None) -> Optional[str]:
    """
    Метка события с учётом висячих ссылок.

    :param event: объект с атрибутом location_tag_id
    :param known_tag_ids: id существующих меток (None — не проверять)
    :return: id метки или None, если метки нет или она удалена
    """
    tag_id = getattr(event, "location_tag_id", None) or None
    if tag_id is not None and known_tag_ids is not None and tag_id not in known_tag_ids:
        return None
    return tag_id


def filter_events(
    events: Iterable[Any],
    selection: Iterable[str],
    known_tag_ids: Optional[Collection[str]] = None,
) -> List[Any]:
    """
    Отфильтровать события по выбору, сохраняя исходный порядок.

    При "all" возвращаются все события; иначе — только те, чья (действующая)
    метка входит в выбор. События без метки в этом случае исключаются.
    """
    chosen = set(selection)
    if ALL in chosen or not chosen:
        return list(events)
    return [
        ev for ev in events
        if effective_tag_id(ev, known_tag_ids) in chosen
    ]


__all__ = [
    "ALL",
    "DEFAULT_SELECTION",
    "Selection",
    "apply_toggle",
    "normalize_selection",
    "effective_tag_id",
    "filter_events",
]
