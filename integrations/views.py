"""
Views for the integrations app.

CRUD endpoints for Slack channel and HubSpot company references plus a
``sync`` action on each that imports the full list from the provider.
Deleting a reference that a mapping still uses is refused with the
number of mappings that hold it.
"""
from __future__ import annotations

import logging

from django.core.exceptions import ImproperlyConfigured
from django.db.models import Count
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from . import clients
from .exceptions import IntegrationError
from .models import HubspotCompany, SlackChannel
from .serializers import HubspotCompanySerializer, SlackChannelSerializer, SyncReportSerializer
from .services import import_hubspot_companies, import_slack_channels

logger = logging.getLogger(__name__)


def integration_error_response(exc: IntegrationError) -> Response:
    return Response(exc.as_response_data(), status=exc.status_code)


class ReferenceViewSet(viewsets.ModelViewSet):
    """Shared behaviour for external-reference resources."""

    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]
    noun = "record"

    def get_queryset(self):
        return super().get_queryset().annotate(mapping_count=Count("mappings", distinct=True))

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        in_use = instance.mappings.count()
        if in_use > 0:
            return Response(
                {
                    "error": f"Cannot delete {self.noun}. It is used in {in_use} mapping(s). "
                    "Please remove the mappings first."
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        instance.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    def run_import(self, importer, client_factory):
        try:
            report = importer(client_factory())
        except IntegrationError as exc:
            logger.error("%s import failed: %s", self.noun, exc.message)
            return integration_error_response(exc)
        except ImproperlyConfigured as exc:
            return Response({"error": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"message": "Sync completed", "results": report})


class SlackChannelViewSet(ReferenceViewSet):
    queryset = SlackChannel.objects.all()
    serializer_class = SlackChannelSerializer
    noun = "channel"

    @extend_schema(request=None, responses=SyncReportSerializer)
    @action(detail=False, methods=["post"])
    def sync(self, request):
        """Import every channel visible to the Slack bot."""
        return self.run_import(import_slack_channels, clients.get_slack_client)


class HubspotCompanyViewSet(ReferenceViewSet):
    queryset = HubspotCompany.objects.all()
    serializer_class = HubspotCompanySerializer
    noun = "company"

    @extend_schema(request=None, responses=SyncReportSerializer)
    @action(detail=False, methods=["post"])
    def sync(self, request):
        """Import every company from HubSpot."""
        return self.run_import(import_hubspot_companies, clients.get_hubspot_client)
