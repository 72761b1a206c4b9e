"""Models for the sales app."""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q

from core.models import TimeStampedModel


# ---------------------------------------------------------------------------
# SalesRecord
# ---------------------------------------------------------------------------

class SalesRecord(TimeStampedModel):
    """A closed deal logged by a sales user; margin feeds the bonus engine."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sales_records",
    )
    customer_name = models.CharField("customer", max_length=200)
    product_name = models.CharField("product", max_length=200)
    quantity = models.PositiveIntegerField("quantity", default=1)
    unit_price = models.DecimalField(
        "unit price",
        max_digits=16,
        decimal_places=2,
    )
    cost_price = models.DecimalField(
        "unit cost",
        max_digits=16,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    other_expense = models.DecimalField(
        "other expense",
        max_digits=16,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    closing_date = models.DateField("closing date", db_index=True)
    notes = models.TextField("notes", blank=True, null=True)

    # ------------------------------------------------------------------
    # Derived amounts (computed on save)
    # ------------------------------------------------------------------
    total_amount = models.DecimalField(
        "total",
        max_digits=18,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    margin_amount = models.DecimalField(
        "margin",
        max_digits=18,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    margin_percentage = models.DecimalField(
        "margin %",
        max_digits=9,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        verbose_name = "sales record"
        verbose_name_plural = "sales records"
        ordering = ["-closing_date", "-created_at"]
        indexes = [
            models.Index(fields=["user", "closing_date"], name="sales_rec_user_date_idx"),
        ]

    def __str__(self):
        return f"{self.customer_name} / {self.product_name} x{self.quantity}"

    def save(self, *args, **kwargs):
        """Derive total, margin and margin percentage before saving."""
        self.recalculate_amounts()
        super().save(*args, **kwargs)

    def recalculate_amounts(self):
        self.total_amount = self.unit_price * self.quantity
        self.margin_amount = (
            self.total_amount
            - self.cost_price * self.quantity
            - (self.other_expense or Decimal("0.00"))
        )
        if self.total_amount > 0:
            self.margin_percentage = (
                self.margin_amount / self.total_amount * Decimal("100")
            ).quantize(Decimal("0.01"))
        else:
            self.margin_percentage = Decimal("0.00")


# ---------------------------------------------------------------------------
# SalesTarget
# ---------------------------------------------------------------------------

class SalesTarget(TimeStampedModel):
    """Revenue/margin target for one user and one period."""

    class PeriodType(models.TextChoices):
        MONTHLY = "monthly", "Monthly"
        QUARTERLY = "quarterly", "Quarterly"
        YEARLY = "yearly", "Yearly"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sales_targets",
    )
    period_type = models.CharField(
        "period type",
        max_length=20,
        choices=PeriodType.choices,
    )
    period_year = models.PositiveIntegerField("year", db_index=True)
    period_month = models.PositiveSmallIntegerField(
        "month",
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(12)],
    )
    period_quarter = models.PositiveSmallIntegerField(
        "quarter",
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(4)],
    )
    target_amount = models.DecimalField(
        "target amount",
        max_digits=18,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        verbose_name = "sales target"
        verbose_name_plural = "sales targets"
        ordering = ["-period_year", "period_type"]
        constraints = [
            # period_month/period_quarter are NULL for the other period types,
            # so each period type gets its own partial constraint.
            models.UniqueConstraint(
                fields=["user", "period_year", "period_month"],
                condition=Q(period_type="monthly"),
                name="uniq_sales_target_monthly",
            ),
            models.UniqueConstraint(
                fields=["user", "period_year", "period_quarter"],
                condition=Q(period_type="quarterly"),
                name="uniq_sales_target_quarterly",
            ),
            models.UniqueConstraint(
                fields=["user", "period_year"],
                condition=Q(period_type="yearly"),
                name="uniq_sales_target_yearly",
            ),
        ]

    def __str__(self):
        if self.period_type == self.PeriodType.MONTHLY:
            return f"{self.user} {self.period_year}-{self.period_month:02d}"
        if self.period_type == self.PeriodType.QUARTERLY:
            return f"{self.user} {self.period_year} Q{self.period_quarter}"
        return f"{self.user} {self.period_year}"
