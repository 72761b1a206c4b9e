from django.contrib import admin

from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("date", "user", "category", "activity_type", "customer_name")
    list_filter = ("category", "activity_type")
    search_fields = ("customer_name", "person_name", "user__email")
    date_hierarchy = "date"
