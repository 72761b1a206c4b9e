"""Celery tasks for the bonus module."""
from __future__ import annotations

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=30)
def track_bonus_achievement(self, *, user_id: str, year: int):
    """Recompute the yearly achievement of a user and record any new tier."""
    from django.contrib.auth import get_user_model

    from bonus.services import track_tier_achievement
    from sales.services import yearly_margin_achievement

    user = get_user_model().objects.filter(pk=user_id).first()
    if user is None:
        # Account deleted between the sale and the task.
        logger.debug("track_bonus_achievement: user %s no longer exists", user_id)
        return None
    try:
        achievement = yearly_margin_achievement(user, year).achievement_percentage
        award = track_tier_achievement(user, achievement, year)
    except Exception as exc:
        logger.exception("track_bonus_achievement failed: %s", exc)
        raise self.retry(exc=exc)
    return str(award.pk) if award else None


@shared_task
def track_all_bonus_achievements(year: int | None = None):
    """Nightly pass recording tiers for every user with a yearly target."""
    from django.utils import timezone

    from sales.models import SalesTarget

    year = year or timezone.localdate().year
    user_ids = (
        SalesTarget.objects.filter(period_type=SalesTarget.PeriodType.YEARLY, period_year=year)
        .values_list("user_id", flat=True)
        .distinct()
    )
    count = 0
    for user_id in user_ids:
        track_bonus_achievement.delay(user_id=str(user_id), year=year)
        count += 1
    logger.info("track_all_bonus_achievements: queued %s user(s) for %s", count, year)
    return count
