"""Activity logging and collaborator availability."""
from __future__ import annotations

import logging
from datetime import date as date_type
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from accounts.models import Profile
from activities.models import Activity
from notifications.services import notify

logger = logging.getLogger("salestrack")


def collaborator_ids(collaboration) -> set[str]:
    """Profile ids booked by a ``collaboration`` payload (main person and extra collaborators)."""
    if not isinstance(collaboration, dict):
        return set()
    ids = set()
    if collaboration.get("personId"):
        ids.add(str(collaboration["personId"]))
    for collaborator in collaboration.get("collaborators") or []:
        if isinstance(collaborator, dict) and collaborator.get("personId"):
            ids.add(str(collaborator["personId"]))
    return ids


def collaborator_bookings(person_id, on: Optional[date_type] = None) -> list[Activity]:
    """Activities of the whole team that book ``person_id``, optionally on one day."""
    person_id = str(person_id)
    qs = Activity.objects.filter(collaboration__isnull=False).select_related("user")
    if on is not None:
        qs = qs.filter(date=on)
    return [activity for activity in qs if person_id in collaborator_ids(activity.collaboration)]


def collaborator_booked_on(person_id, on: date_type) -> bool:
    return bool(collaborator_bookings(person_id, on))


def booked_dates(person_id, year: Optional[int] = None, month: Optional[int] = None) -> list[date_type]:
    """Distinct days on which ``person_id`` is booked, oldest first."""
    dates = {
        activity.date
        for activity in collaborator_bookings(person_id)
        if (year is None or activity.date.year == year) and (month is None or activity.date.month == month)
    }
    return sorted(dates)


def _default_category(profile: Optional[Profile]) -> str:
    if profile and profile.division == Profile.Division.PRESALES:
        return Activity.Category.PRESALES
    return Activity.Category.SALES


@transaction.atomic
def create_activity(user, **data) -> Activity:
    """Log an activity for ``user`` and notify every collaborator it books.

    ``person_name`` and ``category`` default to the author's profile. Booking
    someone who is already booked that day is allowed; callers check
    availability with :func:`collaborator_booked_on` first.
    """
    profile = getattr(user, "profile", None)
    if not data.get("person_name"):
        data["person_name"] = profile.name if profile else user.email
    if not data.get("category"):
        data["category"] = _default_category(profile)

    activity = Activity.objects.create(user=user, **data)
    notify_collaborators(activity)
    logger.info("Activity %s logged by %s", activity.pk, user.pk)
    return activity


def notify_collaborators(activity: Activity) -> int:
    """Send one notification per booked collaborator who has an account; return the count."""
    ids = collaborator_ids(activity.collaboration)
    if not ids:
        return 0

    valid_ids = []
    for person_id in ids:
        try:
            valid_ids.append(Profile._meta.pk.to_python(person_id))
        except ValidationError:
            # Free-text collaborators outside the team carry no profile id.
            logger.debug("Collaborator id %r is not a profile id", person_id)

    label = activity.get_activity_type_display()
    sent = 0
    for profile in Profile.objects.filter(pk__in=valid_ids).select_related("user"):
        if profile.user_id == activity.user_id:
            continue
        notify(
            profile.user,
            f"Collaboration: {label}",
            f"{activity.person_name} added you as a collaborator for {label.lower()} "
            f"with {activity.customer_name} on {activity.date:%d %B %Y}.",
            activity=activity,
        )
        sent += 1
    return sent
