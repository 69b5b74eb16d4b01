"""
URL configuration for the meetings app.

``firespot/`` is the public Fireflies webhook; the log and note
resources are admin-only.  Include this module under ``/api/``.
"""
from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import FireHookLogViewSet, FirespotWebhookView, MeetingNoteViewSet

router = DefaultRouter()
router.register(r"fire-hook-logs", FireHookLogViewSet, basename="fire-hook-log")
router.register(r"meeting-notes", MeetingNoteViewSet, basename="meeting-note")

urlpatterns = [
    path("firespot/", FirespotWebhookView.as_view(), name="firespot-webhook"),
    *router.urls,
]
