"""API views for the bonus module."""
from __future__ import annotations

import uuid

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework import permissions
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.generics import ListAPIView
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.permissions import HasProfile
from bonus.bonus_serializers import (
    BonusSummarySerializer,
    BonusTierAwardSerializer,
    BonusTierSerializer,
)
from bonus.models import BonusTierAward
from bonus.services import bonus_history, bonus_summary
from bonus.tiers import BONUS_TIERS


def _subject(request):
    """The user whose bonus is requested: self, or ``?user=`` for managers."""
    user_id = request.query_params.get("user")
    if not user_id or str(user_id) == str(request.user.pk):
        return request.user
    if not request.user.is_manager:
        raise PermissionDenied("Only managers can view the bonus of other users.")
    try:
        key = uuid.UUID(str(user_id))
    except ValueError:
        raise ValidationError({"user": "Must be a valid UUID."})
    subject = get_user_model().objects.filter(pk=key).first()
    if subject is None:
        raise NotFound("User not found.")
    return subject


class BonusTierListAPIView(APIView):
    """The bonus tier table, lowest tier first."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(BonusTierSerializer(BONUS_TIERS, many=True).data)


class BonusSummaryAPIView(APIView):
    """Yearly margin against the yearly target, with the bonus earned."""

    permission_classes = [permissions.IsAuthenticated, HasProfile]

    def get(self, request):
        raw_year = request.query_params.get("year")
        try:
            year = int(raw_year) if raw_year else timezone.localdate().year
        except ValueError:
            raise ValidationError({"year": "Must be an integer."})
        summary = bonus_summary(_subject(request), year)
        return Response(BonusSummarySerializer(summary).data)


class BonusHistoryAPIView(APIView):
    """Bonus per year for every year where the user qualified."""

    permission_classes = [permissions.IsAuthenticated, HasProfile]

    def get(self, request):
        history = bonus_history(_subject(request))
        return Response(BonusSummarySerializer(history, many=True).data)


class BonusTierAwardListAPIView(ListAPIView):
    """Tiers the current user has reached, newest year first."""

    serializer_class = BonusTierAwardSerializer
    permission_classes = [permissions.IsAuthenticated, HasProfile]
    filterset_fields = ["year"]

    def get_queryset(self):
        return BonusTierAward.objects.filter(user=self.request.user)
