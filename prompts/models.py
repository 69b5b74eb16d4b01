"""
Database models for the prompts app.

A prompt is a reusable system instruction for the summarizer.  At most
one prompt is active at a time; the active prompt's content is sent
with every summary request during a sync run.
"""
from __future__ import annotations

from django.db import models, transaction


class PromptQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True).order_by("-updated_at").first()


class Prompt(models.Model):
    name = models.CharField(max_length=255)
    content = models.TextField()
    is_active = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PromptQuerySet.as_manager()

    class Meta:
        ordering = ["-is_active", "-created_at", "-id"]

    def __str__(self) -> str:
        return f"Prompt({self.name}{', active' if self.is_active else ''})"

    def activate(self) -> None:
        """Make this the only active prompt."""
        with transaction.atomic():
            Prompt.objects.filter(is_active=True).exclude(pk=self.pk).update(is_active=False)
            self.is_active = True
            self.save(update_fields=["is_active", "updated_at"])
