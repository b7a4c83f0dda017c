# tests/conftest.py
from __future__ import annotations

import os
import sys
import types
import uuid
from datetime import date

import pytest

# --- Путь к Django-проекту и настройка DJANGO_SETTINGS_MODULE ---
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))  # корень репо
WEBAPP_DIR = os.path.join(REPO_ROOT, "webapp")
if WEBAPP_DIR not in sys.path:
    sys.path.insert(0, WEBAPP_DIR)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "calendarsite.settings_test")


# --- Простые события без БД (для чистых модулей движка) ---

def ev(date_value, title: str = "Event", tag: str | None = None, **extra):
    """Лёгкое событие: объект с атрибутами как у модели Event."""
    return types.SimpleNamespace(
        id=extra.pop("id", uuid.uuid4().hex),
        title=title,
        date=date.fromisoformat(date_value) if isinstance(date_value, str) else date_value,
        description=extra.pop("description", None),
        external_link=extra.pop("external_link", None),
        location_tag_id=tag,
    )


# --- Хранилище сессий в памяти (замена django.contrib.sessions для гейта) ---

class InMemorySessionStore:
    """
    SessionBackend для тестов гейта.

    durable — «диск» хранилища, общий для всех сессий;
    acknowledge=False имитирует запись, которую хранилище не подтвердило.
    """

    def __init__(self, durable: dict | None = None, acknowledge: bool = True):
        self.durable = durable if durable is not None else {}
        self.acknowledge = acknowledge
        self._key: str | None = None
        self._data: dict = {}

    @property
    def session_id(self):
        return self._key

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value

    def rotate(self):
        if self._key is not None:
            self.durable.pop(self._key, None)
        self._key = uuid.uuid4().hex

    def commit(self):
        if self._key is None:
            self._key = uuid.uuid4().hex
        if self.acknowledge:
            self.durable[self._key] = dict(self._data)

    def reload(self):
        return dict(self.durable.get(self._key, {}))

    def destroy(self):
        if self._key is not None:
            self.durable.pop(self._key, None)
        self._key = None
        self._data = {}


@pytest.fixture
def session_store():
    return InMemorySessionStore()


# --- Фабрики записей в БД ---

@pytest.fixture
def make_tag(db):
    from eventcalendar.models import LocationTag

    def _create(name: str = "Park District", color: str = "#3B82F6"):
        return LocationTag.objects.create(name=name, color=color)
    return _create


@pytest.fixture
def make_event(db):
    from eventcalendar.models import Event

    def _create(
        title: str = "Test",
        date: str = "2025-09-17",
        description: str | None = None,
        external_link: str | None = None,
        location_tag_id: str | None = None,
    ):
        return Event.objects.create(
            title=title,
            date=date,
            description=description,
            external_link=external_link,
            location_tag_id=location_tag_id,
        )
    return _create


# --- HTTP-клиент с админ-сессией ---

def post_json(client, url: str, payload):
    return client.post(url, payload, content_type="application/json")


def put_json(client, url: str, payload):
    return client.put(url, payload, content_type="application/json")


@pytest.fixture
def admin_client(client, db, settings):
    resp = post_json(client, "/api/admin/login/", {"password": settings.ADMIN_PASSWORD})
    assert resp.status_code == 200
    return client
