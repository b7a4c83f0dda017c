from __future__ import annotations

from datetime import date, timedelta, timezone
from urllib.parse import parse_qs, urlparse

from conftest import ev
from eventcalendar.day_detail import (
    events_on,
    external_calendar_url,
    format_share_text,
    placeholder_window,
    share_event,
)


def test_events_on_matches_exact_date_only():
    fair = ev("2025-09-17", "Fair")
    events = [fair, ev("2025-09-16"), ev("2025-09-18"), ev("2024-09-17")]

    assert events_on(date(2025, 9, 17), events) == [fair]
    assert events_on("2025-09-17", events) == [fair]
    assert events_on("2025-9-17", events) == []
    assert events_on(date(2025, 9, 16), [fair]) == []


def test_events_on_preserves_order():
    first, second = ev("2025-09-17", "first"), ev("2025-09-17", "second")
    assert events_on("2025-09-17", [first, ev("2025-09-01"), second]) == [first, second]


def test_share_text_includes_optional_parts():
    full = ev("2025-09-17", "Fair", description="Food and music", external_link="https://example.org/fair")
    bare = ev("2025-09-17", "Fair")

    assert format_share_text(full) == "🎉 Fair\n📅 17.09.2025\nFood and music\n🔗 https://example.org/fair"
    assert format_share_text(bare) == "🎉 Fair\n📅 17.09.2025"


def test_share_falls_back_to_next_channel():
    sent = []

    def platform(title, text):
        raise RuntimeError("share sheet cancelled")

    def clipboard(title, text):
        sent.append((title, text))

    result = share_event(ev("2025-09-17", "Fair"), [("platform", platform), ("clipboard", clipboard)])

    assert result.ok
    assert result.channel == "clipboard"
    assert sent == [("Fair", result.text)]


def test_share_failure_is_reported_not_raised():
    def broken(title, text):
        raise OSError("no clipboard")

    result = share_event(ev("2025-09-17", "Fair"), [("platform", broken), ("clipboard", broken)])

    assert not result.ok
    assert result.message
    assert result.text.startswith("🎉 Fair")


def test_placeholder_window_is_nine_to_ten_local():
    moscow = timezone(timedelta(hours=3))
    start, end = placeholder_window(date(2025, 9, 17), moscow)
    assert start.hour == 6 and end.hour == 7
    assert end - start == timedelta(hours=1)


def test_external_calendar_url():
    event = ev("2025-09-17", "Fair & Market", description="Details", external_link="https://example.org")
    url = external_calendar_url(event, timezone(timedelta(hours=3)))

    parsed = urlparse(url)
    query = parse_qs(parsed.query)
    assert parsed.netloc == "calendar.google.com"
    assert query["action"] == ["TEMPLATE"]
    assert query["text"] == ["Fair & Market"]
    assert query["dates"] == ["20250917T060000Z/20250917T070000Z"]
    assert query["details"] == ["Details"]
    assert query["location"] == ["https://example.org"]
