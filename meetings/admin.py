from django.contrib import admin

from .models import FireHookLog, MeetingNote


@admin.register(FireHookLog)
class FireHookLogAdmin(admin.ModelAdmin):
    list_display = ("id", "date", "event_type", "meeting_id", "is_authentic", "processed")
    list_filter = ("processed", "is_authentic", "event_type")
    search_fields = ("meeting_id", "client_reference_id")
    readonly_fields = ("date", "payload", "computed_signature", "received_signature")


@admin.register(MeetingNote)
class MeetingNoteAdmin(admin.ModelAdmin):
    list_display = ("meeting_id", "title", "meeting_date", "duration")
    search_fields = ("meeting_id", "title", "summary")
