"""
Version token for the flag configuration.
"""

from django.db.models import Max

from .models import FeatureFlag, FeatureFlagOverride


class VersionOracle:
    """
    Derives a version from the most recent ``updated_at`` across flags and
    overrides, as whole unix seconds.

    Any insert or update advances the token. It is advisory: clients compare
    it to decide whether to refetch, nothing is locked on it. Two changes
    inside one second share a version, so anything that must tell them apart
    uses :meth:`latest_change` instead.
    """

    def __init__(self, using="default"):
        self.using = using

    def latest_change(self):
        """Most recent ``updated_at`` at full precision, or None with no rows."""
        latest_flag = FeatureFlag.objects.using(self.using).aggregate(
            latest=Max("updated_at")
        )["latest"]
        latest_override = FeatureFlagOverride.objects.using(self.using).aggregate(
            latest=Max("updated_at")
        )["latest"]

        candidates = [ts for ts in (latest_flag, latest_override) if ts is not None]
        return max(candidates) if candidates else None

    @staticmethod
    def to_version(latest_change) -> int:
        return int(latest_change.timestamp()) if latest_change else 0

    def current_version(self) -> int:
        return self.to_version(self.latest_change())
