"""Serializers for the sales tracker API v1."""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from accounts.models import PendingManagerRequest, Profile
from activities.models import Activity
from notifications.models import Notification
from sales.models import SalesRecord, SalesTarget

User = get_user_model()


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

class ProfileSerializer(serializers.ModelSerializer):
    """Profile as seen by its owner and teammates."""

    email = serializers.EmailField(source="user.email", read_only=True)
    user_id = serializers.UUIDField(read_only=True)
    is_superadmin = serializers.BooleanField(source="user.is_superadmin", read_only=True)

    class Meta:
        model = Profile
        fields = [
            "id", "user_id", "email", "name", "jabatan", "division",
            "is_superadmin", "created_at", "updated_at",
        ]
        # Division changes go through manager requests only.
        read_only_fields = ["id", "user_id", "division", "created_at", "updated_at"]


class ProfileCompleteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    division = serializers.ChoiceField(choices=Profile.Division.choices)
    jabatan = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)


class PendingManagerRequestSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)
    reviewed_by = serializers.UUIDField(source="reviewed_by_id", read_only=True)

    class Meta:
        model = PendingManagerRequest
        fields = [
            "id", "user_id", "name", "jabatan", "email", "status",
            "reviewed_by", "reviewed_at", "created_at",
        ]
        read_only_fields = fields


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------

class SalesRecordSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = SalesRecord
        fields = [
            "id", "user_id", "customer_name", "product_name", "quantity",
            "unit_price", "cost_price", "other_expense", "closing_date", "notes",
            "total_amount", "margin_amount", "margin_percentage",
            "created_at", "updated_at",
        ]
        read_only_fields = [
            "id", "user_id", "total_amount", "margin_amount", "margin_percentage",
            "created_at", "updated_at",
        ]

    def validate_unit_price(self, value):
        if value < 0:
            raise serializers.ValidationError("The unit price cannot be negative.")
        return value

    def validate_cost_price(self, value):
        if value < 0:
            raise serializers.ValidationError("The unit cost cannot be negative.")
        return value


class SalesTargetSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = SalesTarget
        fields = [
            "id", "user_id", "period_type", "period_year", "period_month",
            "period_quarter", "target_amount", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "user_id", "created_at", "updated_at"]
        # Uniqueness is handled by the upsert in the view.
        validators = []

    def validate(self, attrs):
        period_type = attrs.get("period_type", getattr(self.instance, "period_type", None))
        month = attrs.get("period_month", getattr(self.instance, "period_month", None))
        quarter = attrs.get("period_quarter", getattr(self.instance, "period_quarter", None))
        if period_type == SalesTarget.PeriodType.MONTHLY and not month:
            raise serializers.ValidationError({"period_month": "A monthly target needs a month."})
        if period_type == SalesTarget.PeriodType.QUARTERLY and not quarter:
            raise serializers.ValidationError({"period_quarter": "A quarterly target needs a quarter."})
        return attrs


class SalesSummarySerializer(serializers.Serializer):
    year = serializers.IntegerField()
    month = serializers.IntegerField()
    quarter = serializers.IntegerField()
    total_sales = serializers.DecimalField(max_digits=18, decimal_places=2)
    monthly_total = serializers.DecimalField(max_digits=18, decimal_places=2)
    quarterly_total = serializers.DecimalField(max_digits=18, decimal_places=2)
    monthly_target = serializers.DecimalField(max_digits=18, decimal_places=2)
    quarterly_target = serializers.DecimalField(max_digits=18, decimal_places=2)
    yearly_target = serializers.DecimalField(max_digits=18, decimal_places=2)
    monthly_achievement = serializers.FloatField()
    quarterly_achievement = serializers.FloatField()
    yearly_achievement = serializers.FloatField()


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class NotificationSerializer(serializers.ModelSerializer):
    activity_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Notification
        fields = ["id", "title", "message", "is_read", "activity_id", "created_at"]
        read_only_fields = fields


# ---------------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------------

class CollaboratorSerializer(serializers.Serializer):
    personId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    personName = serializers.CharField(max_length=200, required=False, allow_blank=True)
    division = serializers.ChoiceField(choices=["presales", "other"], default="other")


class CollaborationSerializer(CollaboratorSerializer):
    collaborators = CollaboratorSerializer(many=True, required=False)


class ActivitySerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)
    person_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=Activity.Category.choices, required=False)
    collaboration = serializers.JSONField(required=False, allow_null=True)

    class Meta:
        model = Activity
        fields = [
            "id", "user_id", "date", "category", "activity_type", "person_name",
            "customer_name", "project", "opportunity", "notes", "collaboration",
            "latitude", "longitude", "location_name", "reminder_at",
            "created_at", "updated_at",
        ]
        read_only_fields = ["id", "user_id", "created_at", "updated_at"]

    def validate_collaboration(self, value):
        if value is None:
            return None
        serializer = CollaborationSerializer(data=value)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        if "collaborators" in data:
            data["collaborators"] = [dict(item) for item in data["collaborators"]]
        return data

    def validate_latitude(self, value):
        if value is not None and not -90 <= value <= 90:
            raise serializers.ValidationError("Latitude must be between -90 and 90.")
        return value

    def validate_longitude(self, value):
        if value is not None and not -180 <= value <= 180:
            raise serializers.ValidationError("Longitude must be between -180 and 180.")
        return value


class CollaboratorAvailabilitySerializer(serializers.Serializer):
    person = serializers.UUIDField()
    date = serializers.DateField(required=False)
    year = serializers.IntegerField(required=False, min_value=1)
    month = serializers.IntegerField(required=False, min_value=1, max_value=12)
