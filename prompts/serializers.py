from __future__ import annotations

from django.db import transaction
from rest_framework import serializers

from .models import Prompt


class PromptSerializer(serializers.ModelSerializer):
    """Saving a prompt with ``is_active=True`` deactivates every other prompt."""

    class Meta:
        model = Prompt
        fields = ["id", "name", "content", "is_active", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "name": {"error_messages": {"required": "Name and content are required", "blank": "Name and content are required"}},
            "content": {"error_messages": {"required": "Name and content are required", "blank": "Name and content are required"}},
        }

    def create(self, validated_data):
        with transaction.atomic():
            if validated_data.get("is_active"):
                Prompt.objects.filter(is_active=True).update(is_active=False)
            return super().create(validated_data)

    def update(self, instance, validated_data):
        with transaction.atomic():
            if validated_data.get("is_active"):
                Prompt.objects.filter(is_active=True).exclude(pk=instance.pk).update(is_active=False)
            return super().update(instance, validated_data)
