import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="SalesRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("customer_name", models.CharField(max_length=200, verbose_name="customer")),
                ("product_name", models.CharField(max_length=200, verbose_name="product")),
                ("quantity", models.PositiveIntegerField(default=1, verbose_name="quantity")),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=16, verbose_name="unit price")),
                (
                    "cost_price",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16, verbose_name="unit cost"),
                ),
                (
                    "other_expense",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=16, verbose_name="other expense"
                    ),
                ),
                ("closing_date", models.DateField(db_index=True, verbose_name="closing date")),
                ("notes", models.TextField(blank=True, null=True, verbose_name="notes")),
                (
                    "total_amount",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18, verbose_name="total"),
                ),
                (
                    "margin_amount",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18, verbose_name="margin"),
                ),
                (
                    "margin_percentage",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=9, verbose_name="margin %"),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sales_records",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "sales record",
                "verbose_name_plural": "sales records",
                "ordering": ["-closing_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["user", "closing_date"], name="sales_rec_user_date_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SalesTarget",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "period_type",
                    models.CharField(
                        choices=[("monthly", "Monthly"), ("quarterly", "Quarterly"), ("yearly", "Yearly")],
                        max_length=20,
                        verbose_name="period type",
                    ),
                ),
                ("period_year", models.PositiveIntegerField(db_index=True, verbose_name="year")),
                (
                    "period_month",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ],
                        verbose_name="month",
                    ),
                ),
                (
                    "period_quarter",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(4),
                        ],
                        verbose_name="quarter",
                    ),
                ),
                (
                    "target_amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=18, verbose_name="target amount"
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sales_targets",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "sales target",
                "verbose_name_plural": "sales targets",
                "ordering": ["-period_year", "period_type"],
            },
        ),
        migrations.AddConstraint(
            model_name="salestarget",
            constraint=models.UniqueConstraint(
                condition=models.Q(("period_type", "monthly")),
                fields=("user", "period_year", "period_month"),
                name="uniq_sales_target_monthly",
            ),
        ),
        migrations.AddConstraint(
            model_name="salestarget",
            constraint=models.UniqueConstraint(
                condition=models.Q(("period_type", "quarterly")),
                fields=("user", "period_year", "period_quarter"),
                name="uniq_sales_target_quarterly",
            ),
        ),
        migrations.AddConstraint(
            model_name="salestarget",
            constraint=models.UniqueConstraint(
                condition=models.Q(("period_type", "yearly")),
                fields=("user", "period_year"),
                name="uniq_sales_target_yearly",
            ),
        ),
    ]
