from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import PendingManagerRequest, Profile, User, UserRole


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    extra = 0


class UserRoleInline(admin.TabularInline):
    model = UserRole
    can_delete = False
    extra = 0


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin configuration for the authentication identity."""

    list_display = (
        "email",
        "profile_name",
        "profile_division",
        "is_active",
        "is_staff",
        "date_joined",
    )
    list_filter = ("is_active", "is_staff", "is_superuser", "profile__division")
    search_fields = ("email", "profile__name")
    ordering = ("email",)
    inlines = (ProfileInline, UserRoleInline)
    actions = ("activate_users", "deactivate_users")

    fieldsets = (
        (None, {"fields": ("email", "password", "email_confirmed_at")}),
        (
            "Permissions",
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2"),
            },
        ),
    )
    readonly_fields = ("date_joined", "last_login")

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("profile")

    @admin.display(description="Name")
    def profile_name(self, obj):
        profile = getattr(obj, "profile", None)
        return profile.name if profile else ""

    @admin.display(description="Division")
    def profile_division(self, obj):
        return obj.division or ""

    @admin.action(description="Activate selected users")
    def activate_users(self, request, queryset):
        queryset.update(is_active=True)

    @admin.action(description="Deactivate selected users")
    def deactivate_users(self, request, queryset):
        queryset.update(is_active=False)


@admin.register(PendingManagerRequest)
class PendingManagerRequestAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "status", "reviewed_by", "reviewed_at", "created_at")
    list_filter = ("status",)
    search_fields = ("name", "email")
