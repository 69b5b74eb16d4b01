"""
Database models for the mappings app.

A ``Mapping`` binds one or more Slack channels to a single HubSpot
company with a sync cadence.  ``CronLog`` and ``CronLogMapping`` are the
audit trail of scheduled sync runs: one row per run and one child row
per mapping processed in that run.
"""
from __future__ import annotations

from django.db import models

from integrations.models import HubspotCompany, SlackChannel


class Cadence(models.TextChoices):
    DAILY = "daily", "Daily"
    WEEKLY = "weekly", "Weekly"
    MONTHLY = "monthly", "Monthly"


# Days of history each cadence looks back over.
LOOKBACK_DAYS = {
    Cadence.DAILY: 1,
    Cadence.WEEKLY: 7,
    Cadence.MONTHLY: 30,
}


class Mapping(models.Model):
    title = models.CharField(max_length=255, blank=True, null=True)
    cadence = models.CharField(max_length=16, choices=Cadence.choices, default=Cadence.DAILY)
    hubspot_company = models.ForeignKey(
        HubspotCompany,
        on_delete=models.PROTECT,
        related_name="mappings",
    )
    slack_channels = models.ManyToManyField(
        SlackChannel,
        through="MappingSlackChannel",
        related_name="mappings",
    )
    last_synced_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["cadence"], name="mappings_ma_cadence_5c1d0e_idx"),
        ]

    def __str__(self) -> str:
        return f"Mapping({self.pk}, {self.title or self.hubspot_company_id}, {self.cadence})"

    @property
    def lookback_days(self) -> int:
        return LOOKBACK_DAYS.get(self.cadence, 1)


class MappingSlackChannel(models.Model):
    mapping = models.ForeignKey(Mapping, on_delete=models.CASCADE, related_name="channel_links")
    slack_channel = models.ForeignKey(SlackChannel, on_delete=models.PROTECT, related_name="mapping_links")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("mapping", "slack_channel")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"MappingSlackChannel({self.mapping_id}, {self.slack_channel_id})"


class CronLog(models.Model):
    """One scheduled sync run."""

    STATUS_RUNNING = "running"
    STATUS_COMPLETED = "completed"
    STATUS_FAILED = "failed"
    STATUS_CHOICES = [
        (STATUS_RUNNING, "Running"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_FAILED, "Failed"),
    ]

    started_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_RUNNING)
    cadences = models.JSONField(default=list, blank=True)
    day_of_week = models.PositiveSmallIntegerField(null=True, blank=True, help_text="0 = Sunday ... 6 = Saturday")
    day_of_month = models.PositiveSmallIntegerField(null=True, blank=True)
    last_day_of_month = models.PositiveSmallIntegerField(null=True, blank=True)
    mappings_found = models.PositiveIntegerField(default=0)
    mappings_executed = models.PositiveIntegerField(default=0)
    mappings_failed = models.PositiveIntegerField(default=0)
    error_message = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ["-started_at", "-id"]
        indexes = [
            models.Index(fields=["status", "started_at"], name="mappings_cr_status_8a2f41_idx"),
        ]

    def __str__(self) -> str:
        return f"CronLog({self.pk}, {self.status})"


class CronLogMapping(models.Model):
    """Outcome of one mapping within a scheduled run."""

    STATUS_SUCCESS = "success"
    STATUS_FAILED = "failed"
    STATUS_SKIPPED = "skipped"
    STATUS_CHOICES = [
        (STATUS_SUCCESS, "Success"),
        (STATUS_FAILED, "Failed"),
        (STATUS_SKIPPED, "Skipped"),
    ]

    cron_log = models.ForeignKey(CronLog, on_delete=models.CASCADE, related_name="mappings")
    mapping = models.ForeignKey(Mapping, on_delete=models.CASCADE, related_name="cron_log_entries")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES)
    error_message = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"CronLogMapping({self.cron_log_id}, {self.mapping_id}, {self.status})"
