"""
Database models for the integrations app.

Local references to records that live in external systems: Slack
channels and HubSpot companies.  Each row stores the provider's own
identifier (globally unique) plus a cached display name refreshed by
the bulk sync endpoints.  Mappings link the two together and protect
referenced rows from deletion.
"""
from __future__ import annotations

from django.db import models


class SlackChannel(models.Model):
    """A Slack channel that can be attached to one or more mappings."""

    channel_id = models.CharField(max_length=64, unique=True, help_text="Slack channel id, e.g. C01234567.")
    name = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"SlackChannel({self.channel_id}, {self.name or '-'})"

    @property
    def label(self) -> str:
        """Channel name as shown in Slack (``#general``), or the raw id."""
        if not self.name:
            return self.channel_id
        return self.name if self.name.startswith("#") else f"#{self.name}"


class HubspotCompany(models.Model):
    """A HubSpot company that receives summary notes."""

    company_id = models.CharField(max_length=64, unique=True, help_text="HubSpot company record id.")
    name = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "HubSpot companies"

    def __str__(self) -> str:
        return f"HubspotCompany({self.company_id}, {self.name or '-'})"
