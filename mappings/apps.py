from django.apps import AppConfig


class MappingsConfig(AppConfig):
    """Configuration for the mappings app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "mappings"
