"""
Tests for the flag configuration version token.
"""

from datetime import datetime, timedelta, timezone

import pytest

from apps.feature_flags.constants import ScopeType
from apps.feature_flags.models import FeatureFlag, FeatureFlagOverride
from apps.feature_flags.version import VersionOracle


@pytest.mark.django_db
class TestVersionOracle:
    def test_empty_tables_give_zero(self):
        assert VersionOracle().current_version() == 0

    def test_latest_timestamp_across_both_tables(self, location):
        flag = FeatureFlag.objects.create(key="usesLoyalty")
        override = FeatureFlagOverride.objects.create(
            flag=flag, scope_type=ScopeType.LOCATION, scope_id=str(location.pk), value=True
        )

        flag_time = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
        override_time = flag_time + timedelta(hours=2)
        FeatureFlag.objects.filter(pk=flag.pk).update(updated_at=flag_time)
        FeatureFlagOverride.objects.filter(pk=override.pk).update(updated_at=override_time)

        assert VersionOracle().current_version() == int(override_time.timestamp())

        later_flag_time = override_time + timedelta(seconds=30)
        FeatureFlag.objects.filter(pk=flag.pk).update(updated_at=later_flag_time)

        assert VersionOracle().current_version() == int(later_flag_time.timestamp())

    def test_new_override_never_lowers_version(self, location):
        flag = FeatureFlag.objects.create(key="usesLoyalty")
        FeatureFlag.objects.filter(pk=flag.pk).update(
            updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc)
        )
        before = VersionOracle().current_version()

        FeatureFlagOverride.objects.create(
            flag=flag, scope_type=ScopeType.LOCATION, scope_id=str(location.pk), value=True
        )

        assert VersionOracle().current_version() > before

    def test_deleting_override_advances_version(self, location):
        flag = FeatureFlag.objects.create(key="usesLoyalty")
        override = FeatureFlagOverride.objects.create(
            flag=flag, scope_type=ScopeType.LOCATION, scope_id=str(location.pk), value=True
        )
        past = datetime(2024, 1, 1, tzinfo=timezone.utc)
        FeatureFlag.objects.filter(pk=flag.pk).update(updated_at=past)
        FeatureFlagOverride.objects.filter(pk=override.pk).update(updated_at=past)
        before = VersionOracle().current_version()

        FeatureFlagOverride.objects.get(pk=override.pk).delete()

        assert VersionOracle().current_version() > before

    def test_latest_change_keeps_sub_second_precision(self, location):
        flag = FeatureFlag.objects.create(key="usesLoyalty")
        override = FeatureFlagOverride.objects.create(
            flag=flag, scope_type=ScopeType.LOCATION, scope_id=str(location.pk), value=True
        )
        flag_time = datetime(2024, 6, 1, 12, 0, 0, 100000, tzinfo=timezone.utc)
        override_time = flag_time.replace(microsecond=900000)
        FeatureFlag.objects.filter(pk=flag.pk).update(updated_at=flag_time)
        FeatureFlagOverride.objects.filter(pk=override.pk).update(updated_at=override_time)

        oracle = VersionOracle()

        assert oracle.latest_change() == override_time
        assert oracle.current_version() == int(flag_time.timestamp())

    def test_latest_change_is_none_without_rows(self):
        assert VersionOracle().latest_change() is None
