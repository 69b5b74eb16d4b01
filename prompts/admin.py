from django.contrib import admin

from .models import Prompt


@admin.register(Prompt)
class PromptAdmin(admin.ModelAdmin):
    list_display = ("name", "is_active", "updated_at")
    list_filter = ("is_active",)
    search_fields = ("name", "content")
    actions = ["make_active"]

    @admin.action(description="Activate selected prompt")
    def make_active(self, request, queryset):
        prompt = queryset.first()
        if prompt is not None:
            prompt.activate()
