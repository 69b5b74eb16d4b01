"""
Views for the mappings app.

- ``MappingViewSet``: CRUD for channel -> company mappings.
- ``SyncView``: GET runs the scheduled (cadence-filtered) sync and may be
  guarded with ``CRON_SECRET``; POST runs a manual sync for a signed-in
  admin, optionally scoped to one mapping and optionally as a preview.
- ``CronLogViewSet``: paginated, read-only audit of scheduled runs.
"""
from __future__ import annotations

import hmac
import logging

from django.conf import settings
from django.db.models import Prefetch
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status, views, viewsets
from rest_framework.response import Response

from common.pagination import AuditLogPagination

from .models import CronLog, CronLogMapping, Mapping
from .serializers import CronLogSerializer, ManualSyncSerializer, MappingSerializer, SyncResponseSerializer
from .services import run_sync

logger = logging.getLogger(__name__)


class MappingViewSet(viewsets.ModelViewSet):
    serializer_class = MappingSerializer
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ["cadence", "hubspot_company"]

    def get_queryset(self):
        return Mapping.objects.select_related("hubspot_company").prefetch_related("slack_channels")


def _cron_authorized(request) -> bool:
    secret = getattr(settings, "CRON_SECRET", "")
    if not secret:
        return True
    supplied = request.headers.get("Authorization", "")
    return hmac.compare_digest(supplied.encode(), f"Bearer {secret}".encode())


class SyncView(views.APIView):
    """Scheduled (GET) and manual (POST) sync trigger."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    @extend_schema(request=None, responses=SyncResponseSerializer)
    def get(self, request, *args, **kwargs):
        if not _cron_authorized(request):
            logger.warning("Rejected scheduled sync with a bad cron secret")
            return Response({"error": "Unauthorized"}, status=status.HTTP_401_UNAUTHORIZED)
        return self._run(scheduled=True)

    @extend_schema(request=ManualSyncSerializer, responses=SyncResponseSerializer)
    def post(self, request, *args, **kwargs):
        params = ManualSyncSerializer(data=request.data)
        params.is_valid(raise_exception=True)
        return self._run(
            mapping_id=params.validated_data.get("mapping_id"),
            test_mode=params.validated_data.get("test", False),
        )

    def _run(self, **kwargs):
        try:
            outcome = run_sync(**kwargs)
        except Exception:
            logger.exception("Sync request failed")
            return Response({"error": "Internal Server Error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(outcome.as_dict())


class CronLogViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = CronLogSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = AuditLogPagination

    def get_queryset(self):
        children = CronLogMapping.objects.select_related("mapping__hubspot_company")
        return CronLog.objects.prefetch_related(Prefetch("mappings", queryset=children))
