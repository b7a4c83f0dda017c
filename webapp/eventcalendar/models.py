"""
models.py
=========

ORM-модели приложения `eventcalendar`.

Содержит четыре сущности:

1. **LocationTag** — именованная цветная метка локации (фильтр и подсветка).
2. **Event** — событие календаря на одну дату (без времени и повторений).
   - Ссылается на LocationTag «мягко»: без внешнего ключа в БД (db_constraint=False),
     удаление метки не удаляет события. Висячие ссылки считаются «без метки».
3. **ReferenceWebsite** — список внешних ссылок, который ведёт администратор.
4. **CalendarMetadata** — одна строка с отметкой «последнее обновление»,
   перезаписывается при каждом успешном изменении данных.

Идентификаторы — непрозрачные строки (uuid4).
"""
from __future__ import annotations

import uuid

from django.core.validators import RegexValidator
from django.db import models


def new_id() -> str:
    """Новый непрозрачный идентификатор записи."""
    return str(uuid.uuid4())


HEX_COLOR_VALIDATOR = RegexValidator(
    regex=r"^#[0-9A-Fa-f]{6}$",
    message="Color must be a hex string like #3B82F6.",
)


# ---------------------------------------------------------------------------
# LocationTag: метки локаций
# ---------------------------------------------------------------------------

class LocationTag(models.Model):
    """
    Метка локации (например, «Park District»). Используется только для
    группировки и подсветки событий.
    """
    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    name = models.CharField("Название", max_length=255)
    color = models.CharField("Цвет", max_length=7, validators=[HEX_COLOR_VALIDATOR])

    class Meta:
        db_table = "location_tags"
        ordering = ["name", "id"]
        verbose_name = "Локация"
        verbose_name_plural = "Локации"

    def __str__(self) -> str:
        return f"{self.name} ({self.color})"


# ---------------------------------------------------------------------------
# Event: события календаря
# ---------------------------------------------------------------------------

class Event(models.Model):
    """
    Событие календаря на конкретную дату.

    Ссылка на LocationTag без ограничения в БД (db_constraint=False) и без
    каскада (DO_NOTHING): метка может быть удалена, а событие останется
    со «висячим» location_tag_id. Прикладной код читает только
    `location_tag_id` и проверяет его по списку существующих меток.
    """
    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    title = models.CharField("Название", max_length=255)
    date = models.DateField("Дата", db_index=True)
    description = models.TextField("Описание", blank=True, null=True)
    external_link = models.URLField("Ссылка", max_length=2048, blank=True, null=True)

    location_tag = models.ForeignKey(
        "eventcalendar.LocationTag",
        on_delete=models.DO_NOTHING,
        null=True,
        blank=True,
        db_constraint=False,
        db_column="location_tag_id",
        related_name="events",
        verbose_name="Локация",
    )

    created_at = models.DateTimeField("Создано", auto_now_add=True)

    class Meta:
        db_table = "events"
        ordering = ["date", "created_at", "id"]
        verbose_name = "Событие"
        verbose_name_plural = "События"

    def __str__(self) -> str:
        return f"{self.title} @ {self.date}"


# ---------------------------------------------------------------------------
# ReferenceWebsite: справочные ссылки
# ---------------------------------------------------------------------------

class ReferenceWebsite(models.Model):
    """Внешняя ссылка из списка администратора. С событиями не связана."""
    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    title = models.CharField("Название", max_length=255)
    url = models.URLField("URL", max_length=2048)

    class Meta:
        db_table = "reference_websites"
        ordering = ["title", "id"]
        verbose_name = "Ссылка"
        verbose_name_plural = "Ссылки"

    def __str__(self) -> str:
        return self.title


# ---------------------------------------------------------------------------
# CalendarMetadata: отметка последнего обновления
# ---------------------------------------------------------------------------

class CalendarMetadata(models.Model):
    """
    Отметка «последнее обновление календаря».

    Хранится одной строкой (pk=SINGLETON_PK) и перезаписывается, а не
    накапливается: клиенты читают ровно одно текущее значение.
    """
    SINGLETON_PK = 1

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_PK)
    last_updated = models.DateTimeField("Последнее обновление")

    class Meta:
        db_table = "calendar_metadata"
        verbose_name = "Метаданные календаря"
        verbose_name_plural = "Метаданные календаря"

    def __str__(self) -> str:
        return f"Обновлено {self.last_updated:%Y-%m-%d %H:%M}"
