"""
Feature flags app configuration.
"""

from django.apps import AppConfig


class FeatureFlagsConfig(AppConfig):
    """Configuration for the feature flags app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.feature_flags"
    verbose_name = "Feature Flags"

    def ready(self):
        """
        Import signal handlers when the app is ready.
        """
        import apps.feature_flags.signals  # noqa: F401
