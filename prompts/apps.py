from django.apps import AppConfig


class PromptsConfig(AppConfig):
    """Configuration for the prompts app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "prompts"
