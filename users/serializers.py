"""
Serializers for the users app.

``UserSerializer`` is the admin-facing representation: the password is
write-only and always stored hashed, ``is_admin`` maps onto Django's
``is_staff`` and ``slack_id`` lives on the related profile.
"""
from django.contrib.auth.models import User
from django.db import transaction
from rest_framework import serializers

from .models import UserProfile


class UserSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(
        error_messages={"required": "email is required", "blank": "email is required"},
    )
    password = serializers.CharField(write_only=True, required=False, min_length=8, style={"input_type": "password"})
    slack_id = serializers.CharField(
        source="profile.slack_id", required=False, allow_null=True, allow_blank=True, max_length=64
    )
    is_admin = serializers.BooleanField(source="is_staff", required=False)
    created_at = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "password", "first_name", "last_name", "slack_id", "is_admin", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_email(self, value):
        value = value.strip().lower()
        qs = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Email already exists")
        return value

    def validate_slack_id(self, value):
        value = (value or "").strip() or None
        if value:
            qs = UserProfile.objects.filter(slack_id=value)
            if self.instance is not None:
                qs = qs.exclude(user=self.instance)
            if qs.exists():
                raise serializers.ValidationError("Slack ID already exists")
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get("password"):
            raise serializers.ValidationError({"password": "password is required"})
        return attrs

    def create(self, validated_data):
        profile_data = validated_data.pop("profile", {})
        password = validated_data.pop("password")
        with transaction.atomic():
            user = User(username=validated_data["email"], **validated_data)
            user.set_password(password)
            user.save()
            if "slack_id" in profile_data:
                user.profile.slack_id = profile_data["slack_id"]
                user.profile.save(update_fields=["slack_id", "updated_at"])
        return user

    def update(self, instance, validated_data):
        profile_data = validated_data.pop("profile", {})
        password = validated_data.pop("password", None)
        with transaction.atomic():
            for attr, value in validated_data.items():
                setattr(instance, attr, value)
            if "email" in validated_data:
                instance.username = validated_data["email"]
            if password:
                instance.set_password(password)
            instance.save()
            if "slack_id" in profile_data:
                instance.profile.slack_id = profile_data["slack_id"]
                instance.profile.save(update_fields=["slack_id", "updated_at"])
        return instance


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(style={"input_type": "password"})
