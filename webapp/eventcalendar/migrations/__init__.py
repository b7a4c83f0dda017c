"""
eventcalendar.migrations
========================

Миграции Django-приложения `eventcalendar`: таблицы событий, локаций,
справочных ссылок и метаданных календаря.
"""
