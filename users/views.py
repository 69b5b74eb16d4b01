"""
Views for the users app.

- Session auth helpers (CSRF cookie, login, logout, me).  Only staff
  users may sign in to the admin API.
- ``UserViewSet``: CRUD for admin users plus a ``sync`` action that
  imports workspace members from Slack.
"""
import logging

from django.contrib.auth import login as django_login, logout as django_logout
from django.contrib.auth.models import User
from django.core.exceptions import ImproperlyConfigured
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import ensure_csrf_cookie
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from integrations import clients
from integrations.exceptions import IntegrationError
from integrations.serializers import SyncReportSerializer
from integrations.views import integration_error_response

from .serializers import LoginSerializer, UserSerializer
from .services import import_slack_users

logger = logging.getLogger(__name__)


class SessionLoginView(APIView):
    """
    Session-based login. Expects JSON: {"email": "...", "password": "..."}
    On success, creates a Django session (cookie-based).
    """
    permission_classes = []  # allow unauthenticated
    authentication_classes = []

    @extend_schema(request=LoginSerializer, responses=UserSerializer)
    @method_decorator(ensure_csrf_cookie)
    def post(self, request):
        data = request.data or {}
        email = (data.get("email") or "").strip().lower()
        password = data.get("password") or ""
        if not email or not password:
            return Response({"error": "email and password are required"}, status=status.HTTP_400_BAD_REQUEST)
        user = User.objects.filter(email__iexact=email).select_related("profile").first()
        if user is None or not user.is_active or not user.check_password(password):
            return Response({"error": "Invalid credentials"}, status=status.HTTP_401_UNAUTHORIZED)
        if not user.is_staff:
            logger.warning("Non-admin login attempt for %s", email)
            return Response({"error": "Admin access required"}, status=status.HTTP_403_FORBIDDEN)

        django_login(request, user)
        request.session.cycle_key()
        return Response({"detail": "logged_in", "user": UserSerializer(user).data}, status=status.HTTP_200_OK)


class SessionLogoutView(APIView):
    """Session-based logout. Destroys the user's session cookie."""
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(request=None, responses=None)
    def post(self, request):
        django_logout(request)
        return Response({"detail": "logged_out"}, status=status.HTTP_200_OK)


class SessionMeView(APIView):
    """Return the current session-authenticated user (401 if not logged in)."""
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(responses=UserSerializer)
    def get(self, request):
        return Response(UserSerializer(request.user).data, status=status.HTTP_200_OK)


class CSRFCookieView(APIView):
    """
    GET to set the CSRF cookie. Call this before POST /auth/login from a browser.
    """
    permission_classes = []
    authentication_classes = []

    @extend_schema(responses=None)
    @method_decorator(ensure_csrf_cookie)
    def get(self, request):
        return Response({"detail": "CSRF cookie set"}, status=status.HTTP_200_OK)


class UserViewSet(viewsets.ModelViewSet):
    """
    Admin user management.  Passwords are never returned; users cannot
    delete their own account.
    """
    queryset = User.objects.select_related("profile").order_by("id")
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        if user.pk == request.user.pk:
            return Response({"error": "Cannot delete your own account"}, status=status.HTTP_400_BAD_REQUEST)
        user.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses=SyncReportSerializer)
    @action(detail=False, methods=["post"])
    def sync(self, request):
        """Import workspace members from Slack."""
        try:
            report = import_slack_users(clients.get_slack_client())
        except IntegrationError as exc:
            logger.error("Slack user import failed: %s", exc.message)
            return integration_error_response(exc)
        except ImproperlyConfigured as exc:
            return Response({"error": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"message": "Sync completed", "results": report})
