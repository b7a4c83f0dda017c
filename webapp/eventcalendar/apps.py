"""
apps.py
=======

Конфигурация Django-приложения `eventcalendar`.

Приложение включает:
- модели событий (Event), локаций (LocationTag), ссылок (ReferenceWebsite)
  и отметки «последнее обновление» (CalendarMetadata);
- админ-гейт на сессиях и REST API;
- расчёт месячной сетки, фильтр по локациям и карточку дня.
"""

from django.apps import AppConfig


class EventcalendarConfig(AppConfig):
    """
    Конфигурация приложения регионального календаря событий.
    """
    default_auto_field = "django.db.models.BigAutoField"
    name = "eventcalendar"
    verbose_name = "Календарь событий"
