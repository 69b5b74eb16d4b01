from django.apps import AppConfig


class CommonConfig(AppConfig):
    """Shared authentication and pagination helpers."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "common"
