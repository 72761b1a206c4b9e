"""Notification helpers used by the other apps."""
from __future__ import annotations

import logging

from notifications.models import Notification

logger = logging.getLogger("salestrack")


def notify(user, title: str, message: str, activity=None) -> Notification:
    notification = Notification.objects.create(
        user=user,
        title=title,
        message=message,
        activity=activity,
    )
    logger.debug("Notification %s stored for %s", notification.pk, user)
    return notification


def mark_read(notification: Notification) -> Notification:
    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=["is_read", "updated_at"])
    return notification


def mark_all_read(user) -> int:
    """Mark every unread notification of ``user`` as read; return the count."""
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)


def unread_count(user) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()
