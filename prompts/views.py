"""
Views for the prompts app.

Standard CRUD for summarizer prompts plus an ``activate`` action.  The
active prompt cannot be deleted; activate another one first.
"""
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import Prompt
from .serializers import PromptSerializer


class PromptViewSet(viewsets.ModelViewSet):
    queryset = Prompt.objects.all()
    serializer_class = PromptSerializer
    permission_classes = [permissions.IsAuthenticated]

    def destroy(self, request, *args, **kwargs):
        prompt = self.get_object()
        if prompt.is_active:
            return Response(
                {"error": "Cannot delete the active prompt. Please activate another prompt first."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        prompt.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses=PromptSerializer)
    @action(detail=True, methods=["post"])
    def activate(self, request, pk=None):
        prompt = self.get_object()
        prompt.activate()
        return Response(self.get_serializer(prompt).data)
