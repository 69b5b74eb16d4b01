"""
Django admin configuration for the mappings app.

Mappings edit their channels inline; cron logs are read-only history
with their per-mapping outcomes shown underneath.
"""
from django.contrib import admin

from .models import CronLog, CronLogMapping, Mapping, MappingSlackChannel


class MappingSlackChannelInline(admin.TabularInline):
    model = MappingSlackChannel
    extra = 1
    autocomplete_fields = ("slack_channel",)


@admin.register(Mapping)
class MappingAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "hubspot_company", "cadence", "last_synced_at")
    list_filter = ("cadence",)
    search_fields = ("title", "hubspot_company__name", "hubspot_company__company_id")
    autocomplete_fields = ("hubspot_company",)
    inlines = [MappingSlackChannelInline]


class CronLogMappingInline(admin.TabularInline):
    model = CronLogMapping
    extra = 0
    can_delete = False
    readonly_fields = ("mapping", "status", "error_message", "created_at")


@admin.register(CronLog)
class CronLogAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "started_at",
        "status",
        "mappings_found",
        "mappings_executed",
        "mappings_failed",
    )
    list_filter = ("status",)
    readonly_fields = [f.name for f in CronLog._meta.fields]
    inlines = [CronLogMappingInline]
