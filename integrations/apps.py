from django.apps import AppConfig


class IntegrationsConfig(AppConfig):
    """Slack and HubSpot references plus the provider adapters."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "integrations"
    verbose_name = "Integrations"
