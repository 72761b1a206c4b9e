"""Daily field activities logged by sales and presales staff."""
from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class Activity(TimeStampedModel):
    """One logged customer visit, call, meeting or absence."""

    class Category(models.TextChoices):
        SALES = "sales", "Sales"
        PRESALES = "presales", "Presales"

    class ActivityType(models.TextChoices):
        VISIT = "visit", "Visit"
        CALL = "call", "Call"
        EMAIL = "email", "Email"
        MEETING = "meeting", "Meeting"
        OTHER = "other", "Other"
        SICK = "sick", "Sick leave"
        PERMISSION = "permission", "Permission"
        TIME_OFF = "time_off", "Time off"
        WFH = "wfh", "Work from home"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="activities",
    )
    date = models.DateField("date", db_index=True)
    category = models.CharField("category", max_length=20, choices=Category.choices)
    activity_type = models.CharField("type", max_length=20, choices=ActivityType.choices)
    person_name = models.CharField("person name", max_length=200)
    customer_name = models.CharField("customer", max_length=200)
    project = models.CharField("project", max_length=200, blank=True, null=True)
    opportunity = models.CharField("opportunity", max_length=200, blank=True, null=True)
    notes = models.TextField("notes", max_length=1000, blank=True, null=True)
    # {"division": "presales"|"other", "personId": ..., "personName": ...}
    collaboration = models.JSONField("collaboration", blank=True, null=True)
    latitude = models.FloatField(blank=True, null=True)
    longitude = models.FloatField(blank=True, null=True)
    location_name = models.CharField("location", max_length=500, blank=True, null=True)
    reminder_at = models.DateTimeField("reminder", blank=True, null=True)

    class Meta:
        ordering = ["-date", "-created_at"]
        verbose_name = "activity"
        verbose_name_plural = "activities"

    def __str__(self):
        return f"{self.date} {self.get_activity_type_display()} - {self.customer_name}"
