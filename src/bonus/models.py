"""Models for the bonus module."""
from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class BonusTierAward(TimeStampedModel):
    """A bonus tier a user reached in a year; at most one row per tier."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bonus_tier_awards",
    )
    year = models.PositiveIntegerField("year")
    tier_min_percentage = models.DecimalField("tier floor (%)", max_digits=6, decimal_places=2)
    tier_label = models.CharField("tier", max_length=50)
    achievement_percentage = models.DecimalField("achievement (%)", max_digits=9, decimal_places=2)
    notification = models.ForeignKey(
        "notifications.Notification",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        ordering = ["-year", "-tier_min_percentage"]
        verbose_name = "bonus tier award"
        verbose_name_plural = "bonus tier awards"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "year", "tier_min_percentage"],
                name="uniq_bonus_tier_award",
            ),
        ]

    def __str__(self):
        return f"{self.user} {self.year} {self.tier_label}"
