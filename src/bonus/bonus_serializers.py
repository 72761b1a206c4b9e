"""DRF Serializers for the bonus module."""
from __future__ import annotations

import math

from rest_framework import serializers

from bonus.models import BonusTierAward


class BonusTierSerializer(serializers.Serializer):
    min_percentage = serializers.FloatField()
    max_percentage = serializers.SerializerMethodField()
    bonus_rate = serializers.DecimalField(max_digits=6, decimal_places=4)
    label = serializers.CharField()
    color = serializers.CharField()

    def get_max_percentage(self, tier):
        # The top tier has no ceiling; JSON has no infinity.
        return None if math.isinf(tier.max_percentage) else tier.max_percentage


class BonusCalculationSerializer(serializers.Serializer):
    bonus_amount = serializers.DecimalField(max_digits=18, decimal_places=2)
    current_tier = BonusTierSerializer(allow_null=True)
    next_tier = BonusTierSerializer(allow_null=True)
    progress_to_next_tier = serializers.FloatField()
    achievement_percentage = serializers.FloatField()


class BonusSummarySerializer(serializers.Serializer):
    year = serializers.IntegerField()
    margin_total = serializers.DecimalField(max_digits=18, decimal_places=2)
    target_amount = serializers.DecimalField(max_digits=18, decimal_places=2)
    calculation = BonusCalculationSerializer()


class BonusTierAwardSerializer(serializers.ModelSerializer):
    class Meta:
        model = BonusTierAward
        fields = [
            "id", "year", "tier_label", "tier_min_percentage",
            "achievement_percentage", "created_at",
        ]
        read_only_fields = fields
