from __future__ import annotations

import calendar
from datetime import date

import pytest

from conftest import ev
from eventcalendar.calendar_engine import (
    Direction,
    leading_blanks,
    month_bounds,
    month_key,
    month_view,
    navigate,
    parse_month,
)
from eventcalendar.filters import ALL


@pytest.mark.parametrize("year", [2024, 2025, 2026])
@pytest.mark.parametrize("month", range(1, 13))
def test_month_view_cell_counts(year, month):
    view = month_view(date(year, month, 15), [], today=date(2000, 1, 1))

    days_in_month = calendar.monthrange(year, month)[1]
    sunday_first_week = calendar.Calendar(calendar.SUNDAY).monthdayscalendar(year, month)[0]

    assert len(view.days) == days_in_month
    assert view.leading_blanks == sunday_first_week.count(0)
    # после последнего дня пустых ячеек нет
    assert view.cells[-1] is view.days[-1]
    assert len(view.cells) == view.leading_blanks + days_in_month


def test_leading_blanks_known_months():
    assert leading_blanks(date(2025, 9, 1)) == 1   # понедельник
    assert leading_blanks(date(2026, 2, 1)) == 0   # воскресенье
    assert leading_blanks(date(2025, 3, 1)) == 6   # суббота


def test_month_bounds_leap_february():
    assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(date(2025, 2, 10)) == (date(2025, 2, 1), date(2025, 2, 28))


def test_navigate_normalizes_to_first_of_month():
    assert navigate(date(2025, 1, 31), Direction.NEXT) == date(2025, 2, 1)
    assert navigate(date(2025, 3, 31), Direction.PREVIOUS) == date(2025, 2, 1)
    assert navigate(date(2025, 12, 5), Direction.NEXT) == date(2026, 1, 1)
    assert navigate(date(2026, 1, 5), "previous") == date(2025, 12, 1)


@pytest.mark.parametrize("anchor", [date(2025, 1, 31), date(2024, 2, 29), date(2025, 12, 31), date(2025, 7, 1)])
def test_navigate_next_then_previous_returns_to_month(anchor):
    back = navigate(navigate(anchor, Direction.NEXT), Direction.PREVIOUS)
    assert back == anchor.replace(day=1)


def test_cells_carry_today_selected_and_events_in_input_order():
    events = [
        ev("2025-09-17", "B"),
        ev("2025-09-10", "Other day"),
        ev("2025-09-17", "A"),
        ev("2025-10-17", "Next month"),
    ]
    view = month_view(
        date(2025, 9, 3),
        events,
        today=date(2025, 9, 10),
        selected=date(2025, 9, 17),
    )
    cells = {cell.date: cell for cell in view.days}

    assert [e.title for e in cells[date(2025, 9, 17)].events] == ["B", "A"]
    assert cells[date(2025, 9, 10)].is_today
    assert not cells[date(2025, 9, 17)].is_today
    assert cells[date(2025, 9, 17)].is_selected
    assert sum(cell.is_selected for cell in view.days) == 1
    assert all(e.title != "Next month" for cell in view.days for e in cell.events)


def test_more_than_two_events_are_truncated():
    events = [ev("2025-09-17", f"E{i}") for i in range(5)]
    cell = month_view(date(2025, 9, 1), events, today=date(2025, 1, 1)).days[16]

    assert [e.title for e in cell.visible_events] == ["E0", "E1"]
    assert cell.overflow == 3
    assert cell.more_label == "+3 more"


def test_two_events_have_no_more_label():
    events = [ev("2025-09-17"), ev("2025-09-17")]
    cell = month_view(date(2025, 9, 1), events, today=date(2025, 1, 1)).days[16]
    assert cell.overflow == 0
    assert cell.more_label is None


def test_month_view_applies_filter_and_dangling_tags():
    events = [
        ev("2025-09-17", "Park", tag="park"),
        ev("2025-09-17", "Gone", tag="deleted-tag"),
        ev("2025-09-17", "Untagged"),
    ]
    only_park = month_view(date(2025, 9, 1), events, ("park",), today=date(2025, 1, 1), known_tag_ids={"park"})
    everything = month_view(date(2025, 9, 1), events, (ALL,), today=date(2025, 1, 1), known_tag_ids={"park"})

    assert [e.title for e in only_park.days[16].events] == ["Park"]
    assert [e.title for e in everything.days[16].events] == ["Park", "Gone", "Untagged"]


def test_month_view_prev_next_helpers():
    view = month_view(date(2025, 1, 20), [], today=date(2025, 1, 1))
    assert view.month == date(2025, 1, 1)
    assert view.previous_month == date(2024, 12, 1)
    assert view.next_month == date(2025, 2, 1)
    assert (view.first, view.last) == (date(2025, 1, 1), date(2025, 1, 31))


def test_parse_month_and_month_key():
    assert parse_month("2025-09") == date(2025, 9, 1)
    assert parse_month("2025-09-17") == date(2025, 9, 1)
    assert parse_month("September") is None
    assert parse_month("0001-01") is None
    assert parse_month("9999-12") is None
    assert parse_month("0001-02") == date(1, 2, 1)
    assert parse_month(None) is None
    assert month_key(date(2025, 9, 17)) == "2025-09"


def test_navigate_stops_at_representable_range():
    assert navigate(date(1, 1, 15), Direction.NEXT) == date(1, 2, 1)
    assert navigate(date(9999, 12, 31), Direction.PREVIOUS) == date(9999, 11, 1)
    with pytest.raises(ValueError):
        navigate(date(1, 1, 15), Direction.PREVIOUS)
    with pytest.raises(ValueError):
        navigate(date(9999, 12, 1), Direction.NEXT)
