import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("notifications", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="BonusTierAward",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("year", models.PositiveIntegerField(verbose_name="year")),
                (
                    "tier_min_percentage",
                    models.DecimalField(decimal_places=2, max_digits=6, verbose_name="tier floor (%)"),
                ),
                ("tier_label", models.CharField(max_length=50, verbose_name="tier")),
                (
                    "achievement_percentage",
                    models.DecimalField(decimal_places=2, max_digits=9, verbose_name="achievement (%)"),
                ),
                (
                    "notification",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="notifications.notification",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bonus_tier_awards",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "bonus tier award",
                "verbose_name_plural": "bonus tier awards",
                "ordering": ["-year", "-tier_min_percentage"],
            },
        ),
        migrations.AddConstraint(
            model_name="bonustieraward",
            constraint=models.UniqueConstraint(
                fields=("user", "year", "tier_min_percentage"),
                name="uniq_bonus_tier_award",
            ),
        ),
    ]
