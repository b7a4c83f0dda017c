"""
serializers.py
==============

DRF-сериализаторы календаря.

Особенности:
- тела запросов проверяются строго: неизвестные поля — ошибка 400;
- поля в JSON — camelCase (externalLink, locationTagId);
- обновление идёт через UPDATE ... WHERE pk=... с проверкой числа строк:
  запись, удалённая параллельным запросом, даёт 404, а не «воскрешается».
"""

from __future__ import annotations

from typing import Any, Mapping

from rest_framework import serializers

from eventcalendar.exceptions import NotFoundError
from eventcalendar.filters import ALL
from eventcalendar.models import Event, LocationTag, ReferenceWebsite


class RejectUnknownFieldsMixin:
    """Запрет полей, которых нет в сериализаторе."""

    def to_internal_value(self, data: Any) -> Any:
        if isinstance(data, Mapping):
            unknown = sorted(set(data) - set(self.fields))
            if unknown:
                raise serializers.ValidationError({name: ["Unknown field."] for name in unknown})
        return super().to_internal_value(data)


class IsoDateField(serializers.DateField):
    """Дата строго в виде YYYY-MM-DD: "2025-9-7" не проходит."""

    def to_internal_value(self, value):
        parsed = super().to_internal_value(value)
        if isinstance(value, str) and parsed.isoformat() != value.strip():
            self.fail("invalid", format="YYYY-MM-DD")
        return parsed


class CalendarRecordSerializer(RejectUnknownFieldsMixin, serializers.ModelSerializer):
    """
    База для записей календаря (Event, LocationTag, ReferenceWebsite).
    """

    invalid_message = "Invalid data"
    not_found_message = "Not found"

    def update(self, instance, validated_data):
        model = type(instance)
        if validated_data:
            updated = model.objects.filter(pk=instance.pk).update(**validated_data)
            if not updated:
                raise NotFoundError(self.not_found_message)
        try:
            instance.refresh_from_db()
        except model.DoesNotExist:
            raise NotFoundError(self.not_found_message)
        return instance


class LocationTagSerializer(CalendarRecordSerializer):
    """Метка локации."""

    invalid_message = "Invalid location tag data"
    not_found_message = "Location tag not found"

    class Meta:
        model = LocationTag
        fields = ["id", "name", "color"]
        read_only_fields = ["id"]


class EventSerializer(CalendarRecordSerializer):
    """
    Событие календаря.

    Важно:
    - date принимается только как YYYY-MM-DD;
    - locationTagId при записи должен ссылаться на существующую метку;
      "" и null означают «без метки».
    """

    invalid_message = "Invalid event data"
    not_found_message = "Event not found"

    date = IsoDateField(input_formats=["%Y-%m-%d"], format="%Y-%m-%d")
    externalLink = serializers.URLField(
        source="external_link",
        required=False,
        allow_null=True,
        allow_blank=True,
        max_length=2048,
    )
    locationTagId = serializers.CharField(
        source="location_tag_id",
        required=False,
        allow_null=True,
        allow_blank=True,
        max_length=36,
    )

    class Meta:
        model = Event
        fields = ["id", "title", "date", "description", "externalLink", "locationTagId"]
        read_only_fields = ["id"]

    def validate_externalLink(self, value):
        return value or None

    def validate_locationTagId(self, value):
        if not value:
            return None
        if not LocationTag.objects.filter(pk=value).exists():
            raise serializers.ValidationError("Unknown location tag.")
        return value


class ReferenceWebsiteSerializer(CalendarRecordSerializer):
    """Справочная ссылка."""

    invalid_message = "Invalid website data"
    not_found_message = "Reference website not found"

    class Meta:
        model = ReferenceWebsite
        fields = ["id", "title", "url"]
        read_only_fields = ["id"]


# ---------------------------------------------------------------------------
# Тела служебных запросов
# ---------------------------------------------------------------------------

class FilterToggleSerializer(RejectUnknownFieldsMixin, serializers.Serializer):
    """Клик по чекбоксу фильтра: {"target": "<tagId>|all", "checked": true}."""

    target = serializers.CharField(max_length=36)
    checked = serializers.BooleanField()

    def validate_target(self, value):
        if value != ALL and not LocationTag.objects.filter(pk=value).exists():
            raise serializers.ValidationError("Unknown location tag.")
        return value


class InterestToggleSerializer(RejectUnknownFieldsMixin, serializers.Serializer):
    """Отметка «интересно»: {"eventId": "<id>"}."""

    eventId = serializers.CharField(max_length=36)
