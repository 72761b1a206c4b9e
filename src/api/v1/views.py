"""API views for profiles, activities, sales, targets and notifications."""
from __future__ import annotations

import uuid

from django.utils import timezone
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts import services as account_services
from accounts.models import PendingManagerRequest, Profile
from activities import services as activity_services
from activities.models import Activity
from api.v1.pagination import StandardResultsSetPagination
from api.v1.permissions import HasProfile, IsOwnerOrManagerReadOnly, IsSuperadmin
from api.v1.serializers import (
    ActivitySerializer,
    CollaboratorAvailabilitySerializer,
    NotificationSerializer,
    PendingManagerRequestSerializer,
    ProfileCompleteSerializer,
    ProfileSerializer,
    SalesRecordSerializer,
    SalesSummarySerializer,
    SalesTargetSerializer,
)
from notifications import services as notification_services
from notifications.models import Notification
from sales import services as sales_services
from sales.models import SalesRecord, SalesTarget


def _int_param(request, name, default):
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: "Must be an integer."})


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class MyProfileAPIView(APIView):
    """Own profile: read it, complete it after sign-up, edit name/job title."""

    permission_classes = [permissions.IsAuthenticated]

    def _get_profile(self, request):
        profile = Profile.objects.filter(user=request.user).select_related("user").first()
        if profile is None:
            raise NotFound("Profile not completed.")
        return profile

    def get(self, request):
        return Response(ProfileSerializer(self._get_profile(request)).data)

    def post(self, request):
        serializer = ProfileCompleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = account_services.complete_profile(request.user, **serializer.validated_data)
        except ValueError as exc:
            raise ValidationError({"detail": str(exc)})

        if isinstance(result, PendingManagerRequest):
            return Response(
                {"pending_request": PendingManagerRequestSerializer(result).data},
                status=status.HTTP_202_ACCEPTED,
            )
        return Response(ProfileSerializer(result).data, status=status.HTTP_201_CREATED)

    def patch(self, request):
        profile = self._get_profile(request)
        serializer = ProfileSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            account_services.update_profile(
                profile,
                name=serializer.validated_data.get("name"),
                jabatan=serializer.validated_data.get("jabatan"),
            )
        except ValueError as exc:
            raise ValidationError({"detail": str(exc)})
        return Response(ProfileSerializer(profile).data)


class ProfileViewSet(viewsets.ReadOnlyModelViewSet):
    """Team directory."""

    serializer_class = ProfileSerializer
    permission_classes = [permissions.IsAuthenticated, HasProfile]
    pagination_class = StandardResultsSetPagination
    queryset = Profile.objects.select_related("user", "user__app_role")
    filterset_fields = ["division"]
    search_fields = ["name", "jabatan", "user__email"]
    ordering_fields = ["name", "created_at"]


class PendingManagerRequestViewSet(viewsets.ReadOnlyModelViewSet):
    """Manager registration requests, reviewed by superadmins."""

    serializer_class = PendingManagerRequestSerializer
    permission_classes = [permissions.IsAuthenticated, IsSuperadmin]
    queryset = PendingManagerRequest.objects.select_related("user")
    filterset_fields = ["status"]

    def _review(self, request, service):
        manager_request = self.get_object()
        try:
            service(manager_request, request.user)
        except ValueError as exc:
            raise ValidationError({"detail": str(exc)})
        manager_request.refresh_from_db()
        return Response(self.get_serializer(manager_request).data)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        return self._review(request, account_services.approve_manager_request)

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        return self._review(request, account_services.reject_manager_request)


# ---------------------------------------------------------------------------
# Sales records & targets
# ---------------------------------------------------------------------------

class _OwnedRecordViewSet(viewsets.ModelViewSet):
    """Own records for everyone, the whole team for managers (read-only)."""

    permission_classes = [permissions.IsAuthenticated, HasProfile, IsOwnerOrManagerReadOnly]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        qs = super().get_queryset().select_related("user")
        user = self.request.user
        if user.is_manager and self.action in ("list", "retrieve"):
            user_id = self.request.query_params.get("user")
            if not user_id:
                return qs
            try:
                return qs.filter(user_id=uuid.UUID(user_id))
            except ValueError:
                raise ValidationError({"user": "Must be a valid UUID."})
        return qs.filter(user=user)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)


class SalesRecordViewSet(_OwnedRecordViewSet):
    serializer_class = SalesRecordSerializer
    queryset = SalesRecord.objects.all()
    filterset_fields = ["closing_date"]
    search_fields = ["customer_name", "product_name"]
    ordering_fields = ["closing_date", "total_amount", "margin_amount"]


class SalesTargetViewSet(_OwnedRecordViewSet):
    serializer_class = SalesTargetSerializer
    queryset = SalesTarget.objects.all()
    filterset_fields = ["period_type", "period_year"]
    ordering_fields = ["period_year", "period_type"]

    def create(self, request, *args, **kwargs):
        """Save the target of a period; an existing one is updated in place."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            target, created = sales_services.upsert_target(
                request.user,
                period_type=data["period_type"],
                period_year=data["period_year"],
                target_amount=data.get("target_amount"),
                period_month=data.get("period_month"),
                period_quarter=data.get("period_quarter"),
            )
        except ValueError as exc:
            raise ValidationError({"detail": str(exc)})
        return Response(
            self.get_serializer(target).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class ActivityViewSet(_OwnedRecordViewSet):
    serializer_class = ActivitySerializer
    queryset = Activity.objects.all()
    filterset_fields = ["date", "category", "activity_type"]
    search_fields = ["customer_name", "person_name", "project", "opportunity"]
    ordering_fields = ["date", "created_at"]

    def perform_create(self, serializer):
        serializer.instance = activity_services.create_activity(self.request.user, **serializer.validated_data)

    @action(detail=False, methods=["get"])
    def availability(self, request):
        """Whether a collaborator is booked on ``?date=``, or the days booked in ``?year=`` / ``?month=``."""
        params = CollaboratorAvailabilitySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        person_id = params.validated_data["person"]
        on = params.validated_data.get("date")
        if on is not None:
            bookings = activity_services.collaborator_bookings(person_id, on)
            return Response({
                "person": str(person_id),
                "date": on.isoformat(),
                "booked": bool(bookings),
                "activities": [str(activity.pk) for activity in bookings],
            })
        dates = activity_services.booked_dates(
            person_id,
            year=params.validated_data.get("year"),
            month=params.validated_data.get("month"),
        )
        return Response({
            "person": str(person_id),
            "booked_dates": [day.isoformat() for day in dates],
        })


class SalesSummaryAPIView(APIView):
    """Monthly/quarterly/yearly totals against targets."""

    permission_classes = [permissions.IsAuthenticated, HasProfile]

    def get(self, request):
        today = timezone.localdate()
        year = _int_param(request, "year", today.year)
        month = _int_param(request, "month", today.month)
        if not 1 <= month <= 12:
            raise ValidationError({"month": "Must be between 1 and 12."})
        summary = sales_services.sales_summary(request.user, year, month)
        return Response(SalesSummarySerializer(summary).data)


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class NotificationViewSet(mixins.ListModelMixin, mixins.DestroyModelMixin, viewsets.GenericViewSet):
    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = StandardResultsSetPagination
    filterset_fields = ["is_read"]

    def get_queryset(self):
        return Notification.objects.filter(user=self.request.user)

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        response["X-Unread-Count"] = str(notification_services.unread_count(request.user))
        return response

    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        notification = notification_services.mark_read(self.get_object())
        return Response(self.get_serializer(notification).data)

    @action(detail=False, methods=["post"], url_path="read-all")
    def read_all(self, request):
        updated = notification_services.mark_all_read(request.user)
        return Response({"updated": updated})
