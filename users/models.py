"""
Models for the users app.

Admins are Django ``auth.User`` rows.  A ``UserProfile`` links each user
to their Slack member id so message authors and ``<@U…>`` mentions can
be rendered with real names in summaries.  The profile is created
automatically via signals when a new user instance is saved.
"""
from django.contrib.auth.models import User
from django.db import models


class UserProfile(models.Model):
    """Extension of Django's built-in User model."""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    slack_id = models.CharField(
        max_length=64,
        unique=True,
        null=True,
        blank=True,
        help_text="Slack member id, e.g. U01234567.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Profile of {self.user.get_username()}"

    @property
    def display_name(self) -> str:
        full = self.user.get_full_name().strip()
        return full or self.user.email or self.user.get_username()
