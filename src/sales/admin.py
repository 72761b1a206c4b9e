from django.contrib import admin

from .models import SalesRecord, SalesTarget


@admin.register(SalesRecord)
class SalesRecordAdmin(admin.ModelAdmin):
    list_display = (
        "closing_date",
        "user",
        "customer_name",
        "product_name",
        "quantity",
        "total_amount",
        "margin_amount",
    )
    list_filter = ("closing_date",)
    search_fields = ("customer_name", "product_name", "user__email")
    readonly_fields = ("total_amount", "margin_amount", "margin_percentage")
    date_hierarchy = "closing_date"


@admin.register(SalesTarget)
class SalesTargetAdmin(admin.ModelAdmin):
    list_display = ("user", "period_type", "period_year", "period_month", "period_quarter", "target_amount")
    list_filter = ("period_type", "period_year")
    search_fields = ("user__email",)
