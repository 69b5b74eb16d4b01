"""
Authentication and user management endpoints for the users app.

Session helpers live under ``auth/`` and the admin user resource under
``users/``.  Include this module under ``/api/`` at the project level.
"""
from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import CSRFCookieView, SessionLoginView, SessionLogoutView, SessionMeView, UserViewSet

router = DefaultRouter()
router.register(r"users", UserViewSet, basename="user")

urlpatterns = [
    # Session auth helpers
    path("auth/csrf/", CSRFCookieView.as_view(), name="session_csrf"),
    path("auth/login/", SessionLoginView.as_view(), name="session_login"),
    path("auth/logout/", SessionLogoutView.as_view(), name="session_logout"),
    path("auth/me/", SessionMeView.as_view(), name="session_me"),
    *router.urls,
]
