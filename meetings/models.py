"""
Database models for the meetings app.

``FireHookLog`` records every Fireflies webhook delivery, authentic or
not, together with the signatures compared.  ``MeetingNote`` holds the
transcript metadata fetched when an admin processes a logged delivery;
there is at most one note per Fireflies meeting id.
"""
from django.db import models


class FireHookLog(models.Model):
    date = models.DateTimeField(auto_now_add=True)
    event_type = models.CharField(max_length=128, blank=True, null=True)
    meeting_id = models.CharField(max_length=128, blank=True, null=True, db_index=True)
    client_reference_id = models.CharField(max_length=255, blank=True, null=True)
    payload = models.JSONField(default=dict, blank=True)
    processed = models.BooleanField(default=False)
    # None when no webhook secret is configured.
    is_authentic = models.BooleanField(null=True, blank=True)
    computed_signature = models.CharField(max_length=128, blank=True, null=True)
    received_signature = models.CharField(max_length=255, blank=True, null=True)
    error_message = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self) -> str:
        return f"FireHookLog({self.pk}, {self.event_type}, {self.meeting_id})"


class MeetingNote(models.Model):
    meeting_id = models.CharField(max_length=128, unique=True)
    title = models.CharField(max_length=500, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    transcript_url = models.URLField(max_length=1000, blank=True, null=True)
    summary = models.TextField(blank=True, null=True)
    participants = models.JSONField(default=list, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text="Minutes, rounded.")
    meeting_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-meeting_date", "-created_at", "-id"]

    def __str__(self) -> str:
        return self.title or self.meeting_id
