"""Account administration, profile completion and manager requests."""

from __future__ import annotations

import logging
import re
from typing import NamedTuple, Optional

from django.db import transaction
from django.utils import timezone

from accounts.directory import AccountDirectory, get_directory
from accounts.exceptions import BadRequest, Forbidden, Unauthorized
from accounts.models import PendingManagerRequest, Profile, UserRole
from notifications.services import notify

logger = logging.getLogger("salestrack")

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
EMAIL_MAX_LENGTH = 255


class CascadeStep(NamedTuple):
    table: str
    column: str


# Children first, then the profile. The identity is removed after all of these
# so an interrupted cascade never leaves a login without a profile.
ACCOUNT_CASCADE = (
    CascadeStep("user_roles", "user_id"),
    CascadeStep("activities", "user_id"),
    CascadeStep("sales_records", "user_id"),
    CascadeStep("sales_targets", "user_id"),
    CascadeStep("messages", "sender_id"),
    CascadeStep("notifications", "user_id"),
    CascadeStep("message_reads", "user_id"),
    CascadeStep("profiles", "user_id"),
)


# ---------------------------------------------------------------------------
# Manager-only administration
# ---------------------------------------------------------------------------

def _require_manager(directory: AccountDirectory, authorization: Optional[str], denied: str) -> str:
    """Resolve the caller and check the manager division; return the caller id."""
    if not authorization:
        raise Unauthorized("No authorization header")

    caller_id = directory.resolve_caller(authorization)
    if not caller_id:
        raise Unauthorized("Unauthorized")

    profile = directory.get_row("profiles", caller_id)
    if not profile or profile.get("division") != Profile.Division.MANAGER:
        logger.warning("Account administration denied for %s: not a manager", caller_id)
        raise Forbidden(denied)
    return caller_id


def delete_account(
    authorization: Optional[str],
    target_user_id: Optional[str],
    *,
    directory: Optional[AccountDirectory] = None,
) -> dict:
    """Delete ``target_user_id`` and every record it owns.

    Every check runs before the first mutation. Rows are removed in
    ``ACCOUNT_CASCADE`` order, then the authentication identity. A step that
    raises aborts the cascade and propagates; the directory's ``atomic()``
    decides whether the earlier steps are rolled back.
    """
    directory = directory or get_directory()
    caller_id = _require_manager(directory, authorization, "Only managers can delete users")

    if not target_user_id:
        raise BadRequest("Missing targetUserId")
    target_user_id = str(target_user_id)
    if target_user_id == str(caller_id):
        raise BadRequest("Cannot delete your own account")

    target_role = directory.get_row("user_roles", target_user_id)
    if target_role and target_role.get("role") == UserRole.Role.SUPERADMIN:
        logger.warning("Manager %s tried to delete superadmin %s", caller_id, target_user_id)
        raise Forbidden("Cannot delete superadmin accounts")

    with directory.atomic():
        for step in ACCOUNT_CASCADE:
            deleted = directory.delete_rows(step.table, step.column, target_user_id)
            logger.debug("Cascade %s: %s row(s) removed for %s", step.table, deleted, target_user_id)
        directory.delete_identity(target_user_id)

    logger.info("Account %s deleted by manager %s", target_user_id, caller_id)
    return {"deleted": True}


def update_account_email(
    authorization: Optional[str],
    target_user_id: Optional[str],
    new_email: Optional[str],
    *,
    directory: Optional[AccountDirectory] = None,
) -> dict:
    """Change the login email of ``target_user_id`` and mark it confirmed.

    Unlike :func:`delete_account` there is no self/superadmin restriction.
    """
    directory = directory or get_directory()
    caller_id = _require_manager(directory, authorization, "Only managers can update user emails")

    if not target_user_id or not new_email:
        raise BadRequest("Missing targetUserId or newEmail")
    if not isinstance(new_email, str) or not EMAIL_RE.match(new_email) or len(new_email) > EMAIL_MAX_LENGTH:
        raise BadRequest("Invalid email format")

    user = directory.update_identity_email(str(target_user_id), new_email)
    logger.info("Email of account %s updated by manager %s", target_user_id, caller_id)
    return user


# ---------------------------------------------------------------------------
# Profile completion
# ---------------------------------------------------------------------------

def complete_profile(user, name: str, division: str, jabatan: Optional[str] = None):
    """Finish sign-up: create the profile, or a manager request for managers.

    Returns the new ``Profile`` or ``PendingManagerRequest``.
    """
    name = (name or "").strip()
    jabatan = (jabatan or "").strip() or None
    if not name:
        raise ValueError("Name is required.")
    if division not in Profile.Division.values:
        raise ValueError(f"Unknown division '{division}'.")
    if Profile.objects.filter(user=user).exists():
        raise ValueError("This account already has a profile.")

    if division == Profile.Division.MANAGER:
        return request_manager_access(user, name=name, jabatan=jabatan)

    with transaction.atomic():
        profile = Profile.objects.create(user=user, name=name, jabatan=jabatan, division=division)
        UserRole.objects.get_or_create(user=user, defaults={"role": UserRole.Role.USER})
    logger.info("Profile completed for %s (%s)", user, division)
    return profile


def update_profile(profile: Profile, *, name: Optional[str] = None, jabatan: Optional[str] = None) -> Profile:
    """Self-service profile edit. The division is not editable here."""
    update_fields = ["updated_at"]
    if name is not None:
        name = name.strip()
        if not name:
            raise ValueError("Name is required.")
        profile.name = name
        update_fields.append("name")
    if jabatan is not None:
        profile.jabatan = jabatan.strip() or None
        update_fields.append("jabatan")
    profile.save(update_fields=update_fields)
    return profile


# ---------------------------------------------------------------------------
# Manager requests
# ---------------------------------------------------------------------------

def request_manager_access(user, *, name: str, jabatan: Optional[str] = None) -> PendingManagerRequest:
    if PendingManagerRequest.objects.filter(user=user, status=PendingManagerRequest.Status.PENDING).exists():
        raise ValueError("A manager request is already pending for this account.")

    with transaction.atomic():
        request = PendingManagerRequest.objects.create(
            user=user,
            name=name,
            jabatan=jabatan,
            email=user.email,
        )
        for role in UserRole.objects.filter(role=UserRole.Role.SUPERADMIN).select_related("user"):
            notify(
                role.user,
                title="Manager registration request",
                message=f"{name} asked to be registered as a Manager. Email: {user.email}",
            )
    logger.info("Manager request %s created for %s", request.pk, user)
    return request


def _close_request(request: PendingManagerRequest, reviewer, status: str) -> None:
    if request.status != PendingManagerRequest.Status.PENDING:
        raise ValueError("This request has already been reviewed.")
    request.status = status
    request.reviewed_by = reviewer
    request.reviewed_at = timezone.now()
    request.save(update_fields=["status", "reviewed_by", "reviewed_at", "updated_at"])


@transaction.atomic
def approve_manager_request(request: PendingManagerRequest, reviewer) -> Profile:
    """Approve a pending request: the requester gets a manager profile."""
    _close_request(request, reviewer, PendingManagerRequest.Status.APPROVED)
    profile, _ = Profile.objects.update_or_create(
        user=request.user,
        defaults={
            "name": request.name,
            "jabatan": request.jabatan,
            "division": Profile.Division.MANAGER,
        },
    )
    UserRole.objects.get_or_create(user=request.user, defaults={"role": UserRole.Role.USER})
    notify(
        request.user,
        title="Request approved",
        message="Your Manager registration request was approved. Please sign in again.",
    )
    logger.info("Manager request %s approved by %s", request.pk, reviewer)
    return profile


@transaction.atomic
def reject_manager_request(request: PendingManagerRequest, reviewer) -> PendingManagerRequest:
    _close_request(request, reviewer, PendingManagerRequest.Status.REJECTED)
    notify(
        request.user,
        title="Request rejected",
        message="Your Manager registration request was rejected. Contact an administrator for details.",
    )
    logger.info("Manager request %s rejected by %s", request.pk, reviewer)
    return request
