"""Point-of-sale application configuration."""

from django.apps import AppConfig


class PosConfig(AppConfig):
    """Configuration for the pos app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "pos"
    verbose_name = "Point of sale"
