"""Business-logic / service functions for the sales app."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import NamedTuple, Optional

from django.db.models import Sum

from sales.models import SalesRecord, SalesTarget

logger = logging.getLogger("salestrack")

ZERO = Decimal("0.00")


class MarginAchievement(NamedTuple):
    margin_total: Decimal
    target_amount: Decimal
    achievement_percentage: float


def _quarter_months(quarter: int) -> tuple[int, int]:
    first = (quarter - 1) * 3 + 1
    return first, first + 2


def _records_for_period(user, year: int, month: Optional[int] = None, quarter: Optional[int] = None):
    qs = SalesRecord.objects.filter(user=user, closing_date__year=year)
    if month is not None:
        qs = qs.filter(closing_date__month=month)
    elif quarter is not None:
        first, last = _quarter_months(quarter)
        qs = qs.filter(closing_date__month__gte=first, closing_date__month__lte=last)
    return qs


def period_totals(user, year: int, month: Optional[int] = None, quarter: Optional[int] = None) -> dict:
    """Sum revenue and margin of ``user`` over a month, a quarter or a year."""
    agg = _records_for_period(user, year, month=month, quarter=quarter).aggregate(
        total=Sum("total_amount"),
        margin=Sum("margin_amount"),
    )
    return {
        "total_amount": agg["total"] or ZERO,
        "margin_amount": agg["margin"] or ZERO,
    }


def get_target(user, period_type: str, year: int, month: Optional[int] = None,
               quarter: Optional[int] = None) -> Optional[SalesTarget]:
    return SalesTarget.objects.filter(
        user=user,
        period_type=period_type,
        period_year=year,
        period_month=month if period_type == SalesTarget.PeriodType.MONTHLY else None,
        period_quarter=quarter if period_type == SalesTarget.PeriodType.QUARTERLY else None,
    ).first()


def _capped_achievement(total: Decimal, target: Optional[SalesTarget]) -> float:
    if target is None or target.target_amount <= 0:
        return 0.0
    return min(float(total / target.target_amount * 100), 100.0)


def sales_summary(user, year: int, month: int) -> dict:
    """Totals, targets and achievement for the month, its quarter and the year.

    Dashboard achievements are capped at 100%.
    """
    quarter = (month - 1) // 3 + 1
    monthly_total = period_totals(user, year, month=month)["total_amount"]
    quarterly_total = period_totals(user, year, quarter=quarter)["total_amount"]
    yearly_total = period_totals(user, year)["total_amount"]

    monthly_target = get_target(user, SalesTarget.PeriodType.MONTHLY, year, month=month)
    quarterly_target = get_target(user, SalesTarget.PeriodType.QUARTERLY, year, quarter=quarter)
    yearly_target = get_target(user, SalesTarget.PeriodType.YEARLY, year)

    return {
        "year": year,
        "month": month,
        "quarter": quarter,
        "total_sales": yearly_total,
        "monthly_total": monthly_total,
        "quarterly_total": quarterly_total,
        "monthly_target": monthly_target.target_amount if monthly_target else ZERO,
        "quarterly_target": quarterly_target.target_amount if quarterly_target else ZERO,
        "yearly_target": yearly_target.target_amount if yearly_target else ZERO,
        "monthly_achievement": _capped_achievement(monthly_total, monthly_target),
        "quarterly_achievement": _capped_achievement(quarterly_total, quarterly_target),
        "yearly_achievement": _capped_achievement(yearly_total, yearly_target),
    }


def yearly_margin_achievement(user, year: int) -> MarginAchievement:
    """Margin earned in ``year`` against the yearly target, uncapped."""
    margin_total = period_totals(user, year)["margin_amount"]
    target = get_target(user, SalesTarget.PeriodType.YEARLY, year)
    target_amount = target.target_amount if target else ZERO
    if target_amount > 0:
        achievement = float(margin_total / target_amount * 100)
    else:
        achievement = 0.0
    return MarginAchievement(margin_total, target_amount, achievement)


def active_years(user) -> list[int]:
    """Years in which ``user`` has a yearly target or at least one sale, newest first."""
    target_years = set(
        SalesTarget.objects.filter(user=user, period_type=SalesTarget.PeriodType.YEARLY)
        .values_list("period_year", flat=True)
    )
    record_years = {d.year for d in SalesRecord.objects.filter(user=user).dates("closing_date", "year")}
    return sorted(target_years | record_years, reverse=True)


def upsert_target(
    user,
    period_type: str,
    period_year: int,
    target_amount: Decimal,
    period_month: Optional[int] = None,
    period_quarter: Optional[int] = None,
) -> tuple[SalesTarget, bool]:
    """Create the target for a period, or update its amount if it exists."""
    if period_type == SalesTarget.PeriodType.MONTHLY and not period_month:
        raise ValueError("A monthly target needs a month.")
    if period_type == SalesTarget.PeriodType.QUARTERLY and not period_quarter:
        raise ValueError("A quarterly target needs a quarter.")
    if target_amount is None or target_amount < 0:
        raise ValueError("The target amount must be zero or positive.")

    target, created = SalesTarget.objects.update_or_create(
        user=user,
        period_type=period_type,
        period_year=period_year,
        period_month=period_month if period_type == SalesTarget.PeriodType.MONTHLY else None,
        period_quarter=period_quarter if period_type == SalesTarget.PeriodType.QUARTERLY else None,
        defaults={"target_amount": target_amount},
    )
    logger.info(
        "Sales target %s %s for %s (%s %s)",
        target.pk, "created" if created else "updated", user, period_type, period_year,
    )
    return target, created
