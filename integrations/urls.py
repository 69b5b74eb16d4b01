"""
URL configuration for the integrations app.

Provides CRUD routes for Slack channel and HubSpot company references
and their provider ``sync`` actions.  Include this module under
``/api/`` at the project level.
"""
from rest_framework.routers import DefaultRouter

from .views import HubspotCompanyViewSet, SlackChannelViewSet

router = DefaultRouter()
router.register(r"slack-channels", SlackChannelViewSet, basename="slack-channel")
router.register(r"hubspot-companies", HubspotCompanyViewSet, basename="hubspot-company")

urlpatterns = [
    *router.urls,
]
