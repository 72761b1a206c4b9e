"""Identity and record-store access for account administration.

The administration services only need a handful of operations from the
outside world: resolve a bearer token to a caller, read one row keyed by a
user id, delete rows keyed by a user id, and delete or update an
authentication identity. ``AccountDirectory`` names those operations;
``DjangoAccountDirectory`` implements them with simplejwt and the ORM.
"""
from __future__ import annotations

import contextlib
import logging
import uuid
from typing import Optional

from django.apps import apps
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone
from django.utils.module_loading import import_string
from rest_framework import HTTP_HEADER_ENCODING
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError

from accounts.exceptions import IdentityServiceError

logger = logging.getLogger("salestrack")

# Record collections owned by an account, by table name.
TABLES = {
    "user_roles": "accounts.UserRole",
    "profiles": "accounts.Profile",
    "activities": "activities.Activity",
    "sales_records": "sales.SalesRecord",
    "sales_targets": "sales.SalesTarget",
    "messages": "chat.Message",
    "notifications": "notifications.Notification",
    "message_reads": "chat.MessageRead",
}


class AccountDirectory:
    """Operations the account administration services depend on."""

    def resolve_caller(self, authorization: str) -> Optional[str]:
        """Return the id of the user owning the bearer token, or None."""
        raise NotImplementedError

    def get_row(self, table: str, user_id: str, column: str = "user_id") -> Optional[dict]:
        raise NotImplementedError

    def delete_rows(self, table: str, column: str, user_id: str) -> int:
        """Delete every row whose ``column`` equals ``user_id``; absent rows are not an error."""
        raise NotImplementedError

    def delete_identity(self, user_id: str) -> None:
        raise NotImplementedError

    def update_identity_email(self, user_id: str, email: str) -> dict:
        raise NotImplementedError

    def atomic(self):
        """Context manager grouping a cascade; a no-op unless the store supports transactions."""
        return contextlib.nullcontext()


def _as_uuid(value) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


class DjangoAccountDirectory(AccountDirectory):
    """Directory backed by simplejwt access tokens and the Django ORM."""

    def __init__(self):
        self.authentication = JWTAuthentication()

    def _model(self, table: str):
        try:
            return apps.get_model(TABLES[table])
        except KeyError:
            raise ValueError(f"Unknown table '{table}'.") from None

    def resolve_caller(self, authorization: str) -> Optional[str]:
        header = authorization.encode(HTTP_HEADER_ENCODING)
        try:
            raw_token = self.authentication.get_raw_token(header)
            if raw_token is None:
                return None
            validated_token = self.authentication.get_validated_token(raw_token)
            user = self.authentication.get_user(validated_token)
        except (InvalidToken, TokenError, AuthenticationFailed) as exc:
            logger.debug("Bearer token rejected: %s", exc)
            return None
        if not user.is_active:
            return None
        return str(user.pk)

    def get_row(self, table: str, user_id: str, column: str = "user_id") -> Optional[dict]:
        model = self._model(table)
        key = _as_uuid(user_id)
        if key is None:
            return None
        return model.objects.filter(**{column: key}).values().first()

    def delete_rows(self, table: str, column: str, user_id: str) -> int:
        model = self._model(table)
        key = _as_uuid(user_id)
        if key is None:
            return 0
        deleted, _ = model.objects.filter(**{column: key}).delete()
        return deleted

    def delete_identity(self, user_id: str) -> None:
        user = self._get_identity(user_id)
        user.delete()

    def update_identity_email(self, user_id: str, email: str) -> dict:
        User = get_user_model()
        user = self._get_identity(user_id)
        email = User.objects.normalize_email(email)
        if User.objects.filter(email__iexact=email).exclude(pk=user.pk).exists():
            raise IdentityServiceError("A user with this email address already exists.")
        user.email = email
        user.email_confirmed_at = timezone.now()
        user.save(update_fields=["email", "email_confirmed_at"])
        return {"id": str(user.pk), "email": user.email}

    def atomic(self):
        return transaction.atomic()

    def _get_identity(self, user_id: str):
        key = _as_uuid(user_id)
        user = get_user_model().objects.filter(pk=key).first() if key else None
        if user is None:
            raise IdentityServiceError("User not found")
        return user


def get_directory() -> AccountDirectory:
    """Instantiate the directory configured in ``ACCOUNT_DIRECTORY_CLASS``."""
    path = getattr(
        settings,
        "ACCOUNT_DIRECTORY_CLASS",
        "accounts.directory.DjangoAccountDirectory",
    )
    return import_string(path)()
