"""
Serializers for the integrations app.

Expose Slack channel and HubSpot company references.  External ids are
unique; duplicates are rejected with a readable message rather than the
model's generic "already exists" text.
"""
from __future__ import annotations

from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from .models import HubspotCompany, SlackChannel


def _mapping_count(obj) -> int:
    annotated = getattr(obj, "mapping_count", None)
    if annotated is not None:
        return annotated
    return obj.mappings.count()


class SlackChannelSerializer(serializers.ModelSerializer):
    channel_id = serializers.CharField(
        max_length=64,
        validators=[UniqueValidator(queryset=SlackChannel.objects.all(), message="Channel ID already exists")],
        error_messages={"required": "channel_id is required", "blank": "channel_id is required"},
    )
    mapping_count = serializers.SerializerMethodField()

    class Meta:
        model = SlackChannel
        fields = ["id", "channel_id", "name", "mapping_count", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def get_mapping_count(self, obj) -> int:
        return _mapping_count(obj)


class HubspotCompanySerializer(serializers.ModelSerializer):
    company_id = serializers.CharField(
        max_length=64,
        validators=[UniqueValidator(queryset=HubspotCompany.objects.all(), message="Company ID already exists")],
        error_messages={"required": "company_id is required", "blank": "company_id is required"},
    )
    mapping_count = serializers.SerializerMethodField()

    class Meta:
        model = HubspotCompany
        fields = ["id", "company_id", "name", "mapping_count", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def get_mapping_count(self, obj) -> int:
        return _mapping_count(obj)


class SyncReportSerializer(serializers.Serializer):
    """Outcome of a bulk upsert from a provider."""

    created = serializers.IntegerField()
    updated = serializers.IntegerField()
    errors = serializers.ListField(child=serializers.CharField())
