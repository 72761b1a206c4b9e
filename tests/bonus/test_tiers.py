"""Bonus tier table and pure bonus calculation."""
import math
from decimal import Decimal

import pytest

from bonus.tiers import (
    BONUS_TIERS,
    MIN_QUALIFYING_PERCENTAGE,
    calculate_bonus,
    get_bonus_tier,
    qualifies_for_bonus,
)

SAMPLE_PERCENTAGES = [
    -10, 0, 10, 39.9, 39.99, 40, 42.5, 49.9, 49.95, 50, 60, 74.9, 74.95, 75, 80,
    89.9, 89.99, 90, 95, 100, 150, 1000,
]


def test_tiers_are_ordered_and_contiguous():
    floors = [tier.min_percentage for tier in BONUS_TIERS]
    assert floors == sorted(floors)
    assert floors[0] == MIN_QUALIFYING_PERCENTAGE
    assert math.isinf(BONUS_TIERS[-1].max_percentage)


@pytest.mark.parametrize("percentage", [-50, 0, 20, 39.99])
@pytest.mark.parametrize("margin", [0, 1000, Decimal("1234567.89")])
def test_below_forty_percent_earns_nothing(percentage, margin):
    result = calculate_bonus(percentage, margin)

    assert result.current_tier is None
    assert result.next_tier is None
    assert result.bonus_amount == 0
    assert result.progress_to_next_tier == 0


@pytest.mark.parametrize("percentage", [40, 41, 45.5, 49.9])
def test_first_tier_pays_three_percent(percentage):
    result = calculate_bonus(percentage, 1000)

    assert result.current_tier.label == "40-49.9%"
    assert result.bonus_amount == Decimal("30")
    assert result.next_tier.label == "50-74.9%"


@pytest.mark.parametrize("percentage", [90, 99.9, 100, 140, 1000])
def test_top_tier_has_no_next_tier(percentage):
    result = calculate_bonus(percentage, 1000)

    assert result.current_tier.label == "90-100%+"
    assert result.next_tier is None
    assert result.progress_to_next_tier == 100
    assert result.bonus_amount == Decimal("100")


def test_tier_boundaries():
    assert calculate_bonus(49.9, 1000).bonus_amount == 30
    assert calculate_bonus(50, 1000).bonus_amount == 50
    assert calculate_bonus(74.9, 1000).bonus_amount == 50
    assert calculate_bonus(75, 1000).bonus_amount == 75
    assert calculate_bonus(89.9, 1000).bonus_amount == 75
    assert calculate_bonus(90, 1000).bonus_amount == 100


def test_values_between_published_ranges_stay_in_lower_tier():
    assert get_bonus_tier(49.95).label == "40-49.9%"
    assert get_bonus_tier(74.95).label == "50-74.9%"
    assert get_bonus_tier(89.95).label == "75-89.9%"


@pytest.mark.parametrize("margin", [Decimal("0"), Decimal("1000"), Decimal("987654.32")])
def test_bonus_is_monotonic_in_achievement(margin):
    amounts = [calculate_bonus(p, margin).bonus_amount for p in sorted(SAMPLE_PERCENTAGES)]
    assert amounts == sorted(amounts)


@pytest.mark.parametrize("percentage", SAMPLE_PERCENTAGES)
def test_lookup_agrees_with_calculation(percentage):
    assert calculate_bonus(percentage, 500).current_tier == get_bonus_tier(percentage)


@pytest.mark.parametrize("percentage", SAMPLE_PERCENTAGES)
def test_qualification_threshold(percentage):
    assert qualifies_for_bonus(percentage) == (percentage >= 40)


def test_progress_interpolates_within_tier():
    assert calculate_bonus(40, 1000).progress_to_next_tier == pytest.approx(0)
    assert calculate_bonus(45, 1000).progress_to_next_tier == pytest.approx(50)
    assert calculate_bonus(62.5, 1000).progress_to_next_tier == pytest.approx(50)
    assert calculate_bonus(82.5, 1000).progress_to_next_tier == pytest.approx(50)


def test_bonus_amount_is_exact_decimal():
    result = calculate_bonus(80, Decimal("1234.56"))
    assert result.bonus_amount == Decimal("1234.56") * Decimal("0.075")


def test_nan_matches_no_tier():
    result = calculate_bonus(float("nan"), 1000)
    assert result.current_tier is None
    assert result.bonus_amount == 0
    assert get_bonus_tier(float("nan")) is None


def test_negative_margin_is_used_as_given():
    assert calculate_bonus(95, -1000).bonus_amount == Decimal("-100")


@pytest.mark.parametrize("percentage", [None, "abc", "60", True, [], object()])
def test_non_numeric_achievement_matches_no_tier(percentage):
    result = calculate_bonus(percentage, 1000)

    assert result.current_tier is None
    assert result.next_tier is None
    assert result.bonus_amount == 0
    assert result.progress_to_next_tier == 0
    assert get_bonus_tier(percentage) is None
    assert qualifies_for_bonus(percentage) is False


@pytest.mark.parametrize("margin", [None, "abc", object()])
def test_non_numeric_margin_counts_as_zero(margin):
    result = calculate_bonus(60, margin)

    assert result.current_tier.label == "50-74.9%"
    assert result.bonus_amount == 0


def test_decimal_achievement_is_accepted():
    result = calculate_bonus(Decimal("80"), Decimal("1000"))

    assert result.current_tier.label == "75-89.9%"
    assert result.progress_to_next_tier == pytest.approx(33.333, rel=1e-3)
