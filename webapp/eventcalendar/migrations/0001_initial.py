import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import eventcalendar.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CalendarMetadata",
            fields=[
                ("id", models.PositiveSmallIntegerField(default=1, primary_key=True, serialize=False)),
                ("last_updated", models.DateTimeField(verbose_name="Последнее обновление")),
            ],
            options={
                "verbose_name": "Метаданные календаря",
                "verbose_name_plural": "Метаданные календаря",
                "db_table": "calendar_metadata",
            },
        ),
        migrations.CreateModel(
            name="LocationTag",
            fields=[
                ("id", models.CharField(default=eventcalendar.models.new_id, editable=False, max_length=36, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255, verbose_name="Название")),
                ("color", models.CharField(max_length=7, validators=[django.core.validators.RegexValidator(message="Color must be a hex string like #3B82F6.", regex="^#[0-9A-Fa-f]{6}$")], verbose_name="Цвет")),
            ],
            options={
                "verbose_name": "Локация",
                "verbose_name_plural": "Локации",
                "db_table": "location_tags",
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="ReferenceWebsite",
            fields=[
                ("id", models.CharField(default=eventcalendar.models.new_id, editable=False, max_length=36, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255, verbose_name="Название")),
                ("url", models.URLField(max_length=2048, verbose_name="URL")),
            ],
            options={
                "verbose_name": "Ссылка",
                "verbose_name_plural": "Ссылки",
                "db_table": "reference_websites",
                "ordering": ["title", "id"],
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.CharField(default=eventcalendar.models.new_id, editable=False, max_length=36, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255, verbose_name="Название")),
                ("date", models.DateField(db_index=True, verbose_name="Дата")),
                ("description", models.TextField(blank=True, null=True, verbose_name="Описание")),
                ("external_link", models.URLField(blank=True, max_length=2048, null=True, verbose_name="Ссылка")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Создано")),
                ("location_tag", models.ForeignKey(blank=True, db_column="location_tag_id", db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name="events", to="eventcalendar.locationtag", verbose_name="Локация")),
            ],
            options={
                "verbose_name": "Событие",
                "verbose_name_plural": "События",
                "db_table": "events",
                "ordering": ["date", "created_at", "id"],
            },
        ),
    ]
