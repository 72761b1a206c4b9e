import uuid

from django.conf import settings
from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel


class UserManager(BaseUserManager):
    """Custom manager for the User model that uses email as the unique identifier."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("An email address is required.")
        email = self.normalize_email(email)
        extra_fields.setdefault("is_active", True)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Authentication identity.

    Everything a person sees in the application (name, division, job title)
    lives on :class:`Profile`; this model only carries what the identity
    service needs to authenticate the account.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        "email address",
        unique=True,
        max_length=255,
        error_messages={
            "unique": "A user with this email address already exists.",
        },
    )
    email_confirmed_at = models.DateTimeField("email confirmed at", null=True, blank=True)
    is_active = models.BooleanField("active", default=True, db_index=True)
    is_staff = models.BooleanField("staff status", default=False)
    date_joined = models.DateTimeField("date joined", default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["email"]

    def __str__(self):
        return self.email

    # ------------------------------------------------------------------
    # Profile/role helpers
    # ------------------------------------------------------------------

    @property
    def division(self):
        profile = getattr(self, "profile", None)
        return profile.division if profile else None

    @property
    def is_manager(self):
        return self.division == Profile.Division.MANAGER

    @property
    def is_superadmin(self):
        app_role = getattr(self, "app_role", None)
        return bool(app_role and app_role.role == UserRole.Role.SUPERADMIN)


class Profile(TimeStampedModel):
    """Profile completed by the user right after sign-up."""

    class Division(models.TextChoices):
        SALES = "sales", "Sales"
        PRESALES = "presales", "Presales"
        MANAGER = "manager", "Manager"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    name = models.CharField("name", max_length=200)
    jabatan = models.CharField("job title", max_length=100, blank=True, null=True)
    division = models.CharField(
        "division",
        max_length=20,
        choices=Division.choices,
        db_index=True,
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "profile"
        verbose_name_plural = "profiles"

    def __str__(self):
        return f"{self.name} ({self.get_division_display()})"


class UserRole(models.Model):
    """Application role, kept apart from the user-editable profile."""

    class Role(models.TextChoices):
        USER = "user", "User"
        ADMIN = "admin", "Admin"
        SUPERADMIN = "superadmin", "Superadmin"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="app_role",
    )
    role = models.CharField(
        "role",
        max_length=20,
        choices=Role.choices,
        default=Role.USER,
        db_index=True,
    )

    class Meta:
        verbose_name = "user role"
        verbose_name_plural = "user roles"

    def __str__(self):
        return f"{self.user} -> {self.role}"


class PendingManagerRequest(TimeStampedModel):
    """Sign-up request for the manager division, reviewed by a superadmin."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="manager_requests",
    )
    name = models.CharField("name", max_length=200)
    jabatan = models.CharField("job title", max_length=100, blank=True, null=True)
    email = models.EmailField("email", max_length=255)
    status = models.CharField(
        "status",
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_manager_requests",
    )
    reviewed_at = models.DateTimeField("reviewed at", null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "manager request"
        verbose_name_plural = "manager requests"

    def __str__(self):
        return f"{self.name} <{self.email}> [{self.status}]"
