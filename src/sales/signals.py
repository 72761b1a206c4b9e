"""Signals: re-check bonus tier achievement when sales records change."""
from __future__ import annotations

import logging

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


def _queue_tracking(*, user_id, year: int) -> None:
    def _dispatch() -> None:
        try:
            from bonus.tasks import track_bonus_achievement

            track_bonus_achievement.delay(user_id=str(user_id), year=year)
        except Exception as exc:
            # Never let bonus tracking break the sale itself.
            logger.warning("bonus tracking dispatch failed: %s", exc, exc_info=True)

    # Run after commit so the task sees the saved record.
    transaction.on_commit(_dispatch)


@receiver(post_save, sender="sales.SalesRecord")
def on_sales_record_saved(sender, instance, **kwargs):
    _queue_tracking(user_id=instance.user_id, year=instance.closing_date.year)


@receiver(post_save, sender="sales.SalesTarget")
def on_sales_target_saved(sender, instance, **kwargs):
    if instance.period_type != "yearly":
        return
    _queue_tracking(user_id=instance.user_id, year=instance.period_year)


@receiver(post_delete, sender="sales.SalesRecord")
def on_sales_record_deleted(sender, instance, **kwargs):
    _queue_tracking(user_id=instance.user_id, year=instance.closing_date.year)
