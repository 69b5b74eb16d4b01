"""
Django admin configuration for the integrations app.

Registers SlackChannel and HubspotCompany with search on both the
external id and the cached name.
"""
from django.contrib import admin
from .models import HubspotCompany, SlackChannel


@admin.register(SlackChannel)
class SlackChannelAdmin(admin.ModelAdmin):
    list_display = (
        "channel_id",
        "name",
        "created_at",
    )
    search_fields = ("channel_id", "name")
    ordering = ("-created_at",)


@admin.register(HubspotCompany)
class HubspotCompanyAdmin(admin.ModelAdmin):
    list_display = (
        "company_id",
        "name",
        "created_at",
    )
    search_fields = ("company_id", "name")
    ordering = ("-created_at",)
