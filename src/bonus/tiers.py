"""Bonus tier policy table and the pure bonus calculation.

Tiers are data: adding a tier means adding a row to ``BONUS_TIERS``, the
lookup never changes. Nothing in this module touches the database, so it is
safe to call from anywhere, any number of times.

The published ranges (40-49.9%, 50-74.9%, ...) are labels. Matching uses
``[min_percentage, next.min_percentage)``, so a value such as 49.95% sits in
the 40-49.9% tier instead of falling between two published ranges.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

MIN_QUALIFYING_PERCENTAGE = 40


@dataclass(frozen=True)
class BonusTier:
    min_percentage: float
    max_percentage: float
    bonus_rate: Decimal
    label: str
    color: str = ""


# Ordered by min_percentage; each tier ends where the next one starts.
BONUS_TIERS: tuple[BonusTier, ...] = (
    BonusTier(40, 49.9, Decimal("0.03"), "40-49.9%", "yellow"),
    BonusTier(50, 74.9, Decimal("0.05"), "50-74.9%", "orange"),
    BonusTier(75, 89.9, Decimal("0.075"), "75-89.9%", "blue"),
    BonusTier(90, math.inf, Decimal("0.10"), "90-100%+", "green"),
)


@dataclass(frozen=True)
class BonusCalculation:
    bonus_amount: Decimal
    current_tier: Optional[BonusTier]
    next_tier: Optional[BonusTier]
    progress_to_next_tier: float
    achievement_percentage: float


def _as_percentage(value) -> Optional[float]:
    """``value`` as a float, or None when it is not a real number."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    try:
        return float(value)
    except (InvalidOperation, ValueError):
        return None


def _as_margin(value) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0")


def _tier_index(achievement_percentage, tiers=BONUS_TIERS) -> int:
    """Index of the tier containing the percentage, or -1.

    A tier covers ``[min_percentage, next.min_percentage)``; the last tier is
    unbounded. NaN never matches because every comparison with it is False,
    and neither does anything that is not a number.
    """
    achievement_percentage = _as_percentage(achievement_percentage)
    if achievement_percentage is None:
        return -1
    for index, tier in enumerate(tiers):
        upper = tiers[index + 1].min_percentage if index + 1 < len(tiers) else math.inf
        if tier.min_percentage <= achievement_percentage < upper:
            return index
    return -1


def get_bonus_tier(achievement_percentage) -> Optional[BonusTier]:
    """Return the tier reached at ``achievement_percentage`` (None below 40%)."""
    index = _tier_index(achievement_percentage)
    return BONUS_TIERS[index] if index >= 0 else None


def qualifies_for_bonus(achievement_percentage) -> bool:
    value = _as_percentage(achievement_percentage)
    return value is not None and value >= MIN_QUALIFYING_PERCENTAGE


def calculate_bonus(achievement_percentage, total_margin) -> BonusCalculation:
    """Bonus breakdown for an achievement percentage and a margin amount.

    Inputs are used as given. Anything that matches no tier (below 40%,
    negative, NaN, None or not a number) yields a zero bonus and no tier. A
    margin that is not a number counts as zero. This function never raises.
    """
    index = _tier_index(achievement_percentage)
    if index < 0:
        return BonusCalculation(
            bonus_amount=Decimal("0"),
            current_tier=None,
            next_tier=None,
            progress_to_next_tier=0.0,
            achievement_percentage=achievement_percentage,
        )

    current_tier = BONUS_TIERS[index]
    next_tier = BONUS_TIERS[index + 1] if index + 1 < len(BONUS_TIERS) else None

    bonus_amount = _as_margin(total_margin) * current_tier.bonus_rate

    if next_tier is None:
        progress = 100.0
    else:
        span = next_tier.min_percentage - current_tier.min_percentage
        progress = (float(achievement_percentage) - current_tier.min_percentage) / span * 100
        progress = min(progress, 100.0)

    return BonusCalculation(
        bonus_amount=bonus_amount,
        current_tier=current_tier,
        next_tier=next_tier,
        progress_to_next_tier=progress,
        achievement_percentage=achievement_percentage,
    )
