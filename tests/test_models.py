# tests/test_models.py
from __future__ import annotations

from datetime import date

import pytest

from eventcalendar.models import CalendarMetadata, Event, LocationTag, ReferenceWebsite
from eventcalendar.utils import (
    get_events_between_qs,
    get_events_on_qs,
    get_known_tag_ids,
    get_last_updated,
    touch_last_updated,
)


@pytest.mark.django_db
def test_records_get_opaque_string_ids():
    tag = LocationTag.objects.create(name="Park District", color="#22AA55")
    site = ReferenceWebsite.objects.create(title="City", url="https://example.org")
    event = Event.objects.create(title="Fair", date="2025-09-17", location_tag_id=tag.id)

    assert isinstance(tag.id, str) and len(tag.id) == 36
    assert len({tag.id, site.id, event.id}) == 3
    assert Event.objects.get(pk=event.id).location_tag_id == tag.id


@pytest.mark.django_db
def test_deleting_tag_keeps_events():
    tag = LocationTag.objects.create(name="Park District", color="#22AA55")
    event = Event.objects.create(title="Fair", date="2025-09-17", location_tag_id=tag.id)

    LocationTag.objects.filter(pk=tag.id).delete()

    event.refresh_from_db()
    assert event.location_tag_id == tag.id
    assert tag.id not in get_known_tag_ids()


@pytest.mark.django_db
def test_last_updated_is_a_single_overwritten_row():
    assert get_last_updated() is None

    first = touch_last_updated()
    second = touch_last_updated()

    assert CalendarMetadata.objects.count() == 1
    assert second >= first
    assert get_last_updated() == second


@pytest.mark.django_db
def test_month_and_day_queries():
    Event.objects.create(title="Aug", date="2025-08-31")
    Event.objects.create(title="Sep first", date="2025-09-01")
    Event.objects.create(title="Sep last", date="2025-09-30")
    Event.objects.create(title="Oct", date="2025-10-01")

    titles = [e.title for e in get_events_between_qs(date(2025, 9, 1), date(2025, 9, 30))]
    assert titles == ["Sep first", "Sep last"]
    assert [e.title for e in get_events_on_qs("2025-09-30")] == ["Sep last"]
    assert list(get_events_on_qs("2025-09-31")) == []
