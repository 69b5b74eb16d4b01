"""
URL configuration for the mappings app.

Include this module under ``/api/`` at the project level.
"""
from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import CronLogViewSet, MappingViewSet, SyncView

router = DefaultRouter()
router.register(r"mappings", MappingViewSet, basename="mapping")
router.register(r"cron-logs", CronLogViewSet, basename="cron-log")

urlpatterns = [
    path("sync/", SyncView.as_view(), name="sync"),
    *router.urls,
]
