from django.contrib import admin

from .models import BonusTierAward


@admin.register(BonusTierAward)
class BonusTierAwardAdmin(admin.ModelAdmin):
    list_display = ("user", "year", "tier_label", "achievement_percentage", "created_at")
    list_filter = ("year", "tier_label")
    search_fields = ("user__email",)
    readonly_fields = ("notification",)
