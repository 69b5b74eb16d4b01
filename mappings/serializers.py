"""
Serializers for the mappings app.

``MappingSerializer`` accepts ``channel_ids`` (SlackChannel primary keys)
and ``company_id`` (HubSpot external id, or the local primary key) on
write and returns the resolved channel and company objects on read.
"""
from __future__ import annotations

from django.db import transaction
from rest_framework import serializers

from integrations.models import HubspotCompany, SlackChannel

from .models import Cadence, CronLog, CronLogMapping, Mapping, MappingSlackChannel


class ChannelSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = SlackChannel
        fields = ["id", "channel_id", "name"]


class CompanySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = HubspotCompany
        fields = ["id", "company_id", "name"]


class MappingSerializer(serializers.ModelSerializer):
    channel_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        write_only=True,
        allow_empty=False,
        error_messages={
            "required": "At least one Slack channel is required",
            "empty": "At least one Slack channel is required",
        },
    )
    company_id = serializers.CharField(
        write_only=True,
        error_messages={"required": "company_id is required", "blank": "company_id is required"},
    )
    cadence = serializers.ChoiceField(choices=Cadence.choices, default=Cadence.DAILY)
    slack_channels = ChannelSummarySerializer(many=True, read_only=True)
    hubspot_company = CompanySummarySerializer(read_only=True)

    class Meta:
        model = Mapping
        fields = [
            "id",
            "title",
            "cadence",
            "channel_ids",
            "company_id",
            "slack_channels",
            "hubspot_company",
            "last_synced_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "last_synced_at", "created_at", "updated_at"]

    def validate_channel_ids(self, value):
        ids = list(dict.fromkeys(value))
        channels = {c.pk: c for c in SlackChannel.objects.filter(pk__in=ids)}
        missing = [str(pk) for pk in ids if pk not in channels]
        if missing:
            raise serializers.ValidationError(f"Slack channel(s) not found: {', '.join(missing)}")
        return [channels[pk] for pk in ids]

    def validate_company_id(self, value):
        value = value.strip()
        company = HubspotCompany.objects.filter(company_id=value).first()
        if company is None and value.isdigit():
            company = HubspotCompany.objects.filter(pk=int(value)).first()
        if company is None:
            raise serializers.ValidationError("HubSpot company not found")
        return company

    def _set_channels(self, mapping, channels):
        MappingSlackChannel.objects.filter(mapping=mapping).delete()
        MappingSlackChannel.objects.bulk_create(
            [MappingSlackChannel(mapping=mapping, slack_channel=channel) for channel in channels]
        )

    def create(self, validated_data):
        channels = validated_data.pop("channel_ids")
        validated_data["hubspot_company"] = validated_data.pop("company_id")
        with transaction.atomic():
            mapping = Mapping.objects.create(**validated_data)
            self._set_channels(mapping, channels)
        return mapping

    def update(self, instance, validated_data):
        channels = validated_data.pop("channel_ids", None)
        if "company_id" in validated_data:
            validated_data["hubspot_company"] = validated_data.pop("company_id")
        with transaction.atomic():
            instance = super().update(instance, validated_data)
            if channels is not None:
                self._set_channels(instance, channels)
        return instance


class CronLogMappingSerializer(serializers.ModelSerializer):
    mapping_title = serializers.CharField(source="mapping.title", read_only=True, allow_null=True)
    company_name = serializers.CharField(source="mapping.hubspot_company.name", read_only=True, allow_null=True)

    class Meta:
        model = CronLogMapping
        fields = ["id", "mapping", "mapping_title", "company_name", "status", "error_message", "created_at"]


class CronLogSerializer(serializers.ModelSerializer):
    mappings = CronLogMappingSerializer(many=True, read_only=True)

    class Meta:
        model = CronLog
        fields = [
            "id",
            "started_at",
            "completed_at",
            "status",
            "cadences",
            "day_of_week",
            "day_of_month",
            "last_day_of_month",
            "mappings_found",
            "mappings_executed",
            "mappings_failed",
            "error_message",
            "mappings",
        ]


class ManualSyncSerializer(serializers.Serializer):
    mapping_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    test = serializers.BooleanField(required=False, default=False)


class SyncResultSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    channel_id = serializers.CharField()
    status = serializers.CharField()
    summary = serializers.CharField(required=False)
    destination = serializers.DictField(required=False)
    error = serializers.CharField(required=False)


class SyncResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    results = SyncResultSerializer(many=True)
    cadence = serializers.DictField(required=False)
