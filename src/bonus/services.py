"""Bonus summaries, yearly history and tier-crossing notifications."""
from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Optional

from django.db import IntegrityError, transaction

from bonus.models import BonusTierAward
from bonus.tiers import calculate_bonus, get_bonus_tier, qualifies_for_bonus
from notifications.services import notify
from sales.services import active_years, yearly_margin_achievement

logger = logging.getLogger("salestrack")

# Achievements outside this range come from broken data (tiny or missing targets).
MAX_TRACKED_ACHIEVEMENT = 200


def bonus_summary(user, year: int) -> dict:
    """Yearly margin, target, achievement and the bonus breakdown."""
    margin_total, target_amount, achievement = yearly_margin_achievement(user, year)
    calculation = calculate_bonus(achievement, margin_total)
    return {
        "year": year,
        "margin_total": margin_total,
        "target_amount": target_amount,
        "calculation": calculation,
    }


def bonus_history(user) -> list[dict]:
    """Per-year bonus summaries, newest first, qualifying years only."""
    history = []
    for year in active_years(user):
        summary = bonus_summary(user, year)
        if qualifies_for_bonus(summary["calculation"].achievement_percentage):
            history.append(summary)
    return history


def _is_trackable(achievement_percentage) -> bool:
    if not isinstance(achievement_percentage, (int, float, Decimal)):
        return False
    if isinstance(achievement_percentage, bool):
        return False
    value = float(achievement_percentage)
    if math.isnan(value) or math.isinf(value):
        return False
    return 0 <= value <= MAX_TRACKED_ACHIEVEMENT


def track_tier_achievement(user, achievement_percentage, year: int) -> Optional[BonusTierAward]:
    """Record a newly reached tier and notify the user once.

    Returns the new award, or None when nothing changed: invalid input,
    below the first tier, or a tier at or below one already awarded this year.
    """
    if not _is_trackable(achievement_percentage):
        return None
    achievement = float(achievement_percentage)
    if not qualifies_for_bonus(achievement):
        return None

    tier = get_bonus_tier(achievement)
    if tier is None:
        return None

    tier_floor = Decimal(str(tier.min_percentage))
    already_higher = BonusTierAward.objects.filter(
        user=user,
        year=year,
        tier_min_percentage__gte=tier_floor,
    ).exists()
    if already_higher:
        return None

    rate = f"{tier.bonus_rate * 100:.1f}"
    try:
        with transaction.atomic():
            award = BonusTierAward.objects.create(
                user=user,
                year=year,
                tier_min_percentage=tier_floor,
                tier_label=tier.label,
                achievement_percentage=Decimal(str(round(achievement, 2))),
            )
            award.notification = notify(
                user,
                title="Bonus achievement - new tier!",
                message=(
                    f"Congratulations! You reached tier {tier.label} "
                    f"({achievement:.1f}%) and earn a {rate}% bonus "
                    f"on your {year} margin."
                ),
            )
            award.save(update_fields=["notification", "updated_at"])
    except IntegrityError:
        # A concurrent tracker stored the same tier first.
        logger.debug("Tier %s already awarded to %s for %s", tier.label, user, year)
        return None

    logger.info("Bonus tier %s reached by %s for %s (%.1f%%)", tier.label, user, year, achievement)
    return award
