"""
URL configuration for the Slack to HubSpot sync backend.
All API endpoints are registered under the `/api/` prefix; each app
ships its own DRF router.  Session auth endpoints live under `/api/auth/`.
"""

from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),

    path("api/", RedirectView.as_view(pattern_name="swagger-ui", permanent=False)),

    #  Swagger/Redoc
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),

    path("api/", include("users.urls")),
    path("api/", include("integrations.urls")),
    path("api/", include("prompts.urls")),
    path("api/", include("mappings.urls")),
    path("api/", include("meetings.urls")),
]
