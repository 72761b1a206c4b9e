"""Custom DRF permissions for the sales tracker API."""
from rest_framework.permissions import SAFE_METHODS, BasePermission


def _is_manager(user) -> bool:
    return bool(user and user.is_authenticated and getattr(user, "is_manager", False))


class IsManager(BasePermission):
    """Allow access to users whose profile division is ``manager``."""

    message = "Only managers can perform this action."

    def has_permission(self, request, view):
        return _is_manager(request.user)


class IsSuperadmin(BasePermission):
    """Allow access to users holding the ``superadmin`` role record."""

    message = "Only superadmins can perform this action."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_superadmin)


class HasProfile(BasePermission):
    """Require a completed profile (sign-up finished)."""

    message = "Complete your profile first."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, "profile", None))


class IsOwnerOrManagerReadOnly(BasePermission):
    """Owners have full access; managers may read records of the whole team."""

    def has_object_permission(self, request, view, obj):
        if obj.user_id == request.user.pk:
            return True
        return request.method in SAFE_METHODS and _is_manager(request.user)
