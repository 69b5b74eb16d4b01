from rest_framework import serializers

from .models import FireHookLog, MeetingNote


class FireHookLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = FireHookLog
        fields = [
            "id",
            "date",
            "event_type",
            "meeting_id",
            "client_reference_id",
            "payload",
            "processed",
            "is_authentic",
            "computed_signature",
            "received_signature",
            "error_message",
        ]
        read_only_fields = fields


class MeetingNoteSerializer(serializers.ModelSerializer):
    class Meta:
        model = MeetingNote
        fields = [
            "id",
            "meeting_id",
            "title",
            "notes",
            "transcript_url",
            "summary",
            "participants",
            "duration",
            "meeting_date",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProcessResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    meeting_note = serializers.DictField()
