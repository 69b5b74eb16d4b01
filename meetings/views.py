"""
Views for the meetings app.

``FirespotWebhookView`` is the public Fireflies endpoint: every delivery
is logged, and deliveries whose signature does not verify are answered
with 401.  Admins browse the log, trigger processing of a delivery and
read the resulting meeting notes.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status, views, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from common.pagination import AuditLogPagination
from integrations import clients
from integrations.exceptions import IntegrationError

from .models import FireHookLog, MeetingNote
from .serializers import FireHookLogSerializer, MeetingNoteSerializer, ProcessResultSerializer
from .services import TranscriptNotFound, mark_failed, process_log, record_delivery
from .webhooks import SIGNATURE_HEADER

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class FirespotWebhookView(views.APIView):
    """Fireflies "transcription completed" webhook."""

    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(request=None, responses=None)
    def post(self, request, *args, **kwargs):
        body = request.body
        signature = request.headers.get(SIGNATURE_HEADER)
        log = record_delivery(body, signature, settings.FIREFLIES_WEBHOOK_SECRET)
        if log.is_authentic is False:
            logger.warning("Rejected Fireflies webhook %s: bad signature", log.pk)
            return Response({"error": "Invalid signature"}, status=status.HTTP_401_UNAUTHORIZED)
        return Response({"status": "OK"}, status=status.HTTP_200_OK)


class FireHookLogViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = FireHookLog.objects.all()
    serializer_class = FireHookLogSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = AuditLogPagination
    filterset_fields = ["processed", "is_authentic", "event_type"]

    @extend_schema(request=None, responses=ProcessResultSerializer)
    @action(detail=True, methods=["post"])
    def process(self, request, pk=None):
        """Fetch the meeting transcript from Fireflies and store it as a MeetingNote."""
        if not str(pk).isdigit():
            return Response({"error": "Invalid log ID"}, status=status.HTTP_400_BAD_REQUEST)
        log = self.get_object()
        if log.processed:
            return Response({"error": "Log has already been processed"}, status=status.HTTP_400_BAD_REQUEST)
        if not log.meeting_id:
            return Response({"error": "No meeting ID in fire hook log"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            fireflies = clients.get_fireflies_client()
        except ImproperlyConfigured as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            note = process_log(log, fireflies)
        except TranscriptNotFound as exc:
            mark_failed(log, str(exc))
            return Response({"error": "Meeting not found in Fireflies API"}, status=status.HTTP_404_NOT_FOUND)
        except IntegrationError as exc:
            logger.error("Fireflies fetch for log %s failed: %s", log.pk, exc.message)
            mark_failed(log, f"Fireflies API error: {exc.message}")
            return Response(
                {"error": "Failed to fetch meeting from Fireflies API", "details": exc.message},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except Exception as exc:
            logger.exception("Processing fire hook log %s failed", log.pk)
            mark_failed(log, str(exc))
            return Response(
                {"error": "Failed to process fire hook log", "details": str(exc)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {
                "success": True,
                "meeting_note": {"id": note.pk, "meeting_id": note.meeting_id, "title": note.title},
            }
        )


class MeetingNoteViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = MeetingNote.objects.all()
    serializer_class = MeetingNoteSerializer
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ["meeting_id"]
