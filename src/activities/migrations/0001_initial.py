import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Activity",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("date", models.DateField(db_index=True, verbose_name="date")),
                (
                    "category",
                    models.CharField(
                        choices=[("sales", "Sales"), ("presales", "Presales")],
                        max_length=20,
                        verbose_name="category",
                    ),
                ),
                (
                    "activity_type",
                    models.CharField(
                        choices=[
                            ("visit", "Visit"),
                            ("call", "Call"),
                            ("email", "Email"),
                            ("meeting", "Meeting"),
                            ("other", "Other"),
                            ("sick", "Sick leave"),
                            ("permission", "Permission"),
                            ("time_off", "Time off"),
                            ("wfh", "Work from home"),
                        ],
                        max_length=20,
                        verbose_name="type",
                    ),
                ),
                ("person_name", models.CharField(max_length=200, verbose_name="person name")),
                ("customer_name", models.CharField(max_length=200, verbose_name="customer")),
                ("project", models.CharField(blank=True, max_length=200, null=True, verbose_name="project")),
                ("opportunity", models.CharField(blank=True, max_length=200, null=True, verbose_name="opportunity")),
                ("notes", models.TextField(blank=True, max_length=1000, null=True, verbose_name="notes")),
                ("collaboration", models.JSONField(blank=True, null=True, verbose_name="collaboration")),
                ("latitude", models.FloatField(blank=True, null=True)),
                ("longitude", models.FloatField(blank=True, null=True)),
                ("location_name", models.CharField(blank=True, max_length=500, null=True, verbose_name="location")),
                ("reminder_at", models.DateTimeField(blank=True, null=True, verbose_name="reminder")),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activities",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "activity",
                "verbose_name_plural": "activities",
                "ordering": ["-date", "-created_at"],
            },
        ),
    ]
