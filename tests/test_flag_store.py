"""
Tests for FlagStore reads.
"""

from django.db import DatabaseError

import pytest

from apps.feature_flags.constants import FlagStatus, ScopeType
from apps.feature_flags.context import ResolutionContext
from apps.feature_flags.exceptions import FlagStoreError
from apps.feature_flags.models import FeatureFlag, FeatureFlagOverride
from apps.feature_flags.store import FlagStore


@pytest.mark.django_db
class TestFlagStoreFetch:
    """Test which rows the store returns for a context."""

    def test_only_active_flags_ordered_by_key(self):
        FeatureFlag.objects.create(key="usesTipping", default_value=True)
        FeatureFlag.objects.create(key="usesLoyalty")
        FeatureFlag.objects.create(key="usesLottery", status=FlagStatus.INACTIVE)

        entries = FlagStore().fetch(ResolutionContext(business_type="RETAIL"))

        assert [flag.key for flag, _ in entries] == ["usesLoyalty", "usesTipping"]

    def test_definitions_carry_normalized_verticals(self):
        FeatureFlag.objects.create(key="usesAppointments", target_verticals=["salon", "HYBRID"])

        [(flag, overrides)] = FlagStore().fetch(ResolutionContext(business_type="SALON"))

        assert flag.target_verticals == ("SALON", "HYBRID")
        assert flag.default_value is False
        assert overrides == []

    def test_only_overrides_for_context_scopes(self, station, location, franchisor):
        flag = FeatureFlag.objects.create(key="usesLoyalty")
        FeatureFlagOverride.objects.create(
            flag=flag, scope_type=ScopeType.FRANCHISOR, scope_id=str(franchisor.pk), value=True
        )
        FeatureFlagOverride.objects.create(
            flag=flag, scope_type=ScopeType.STATION, scope_id=str(station.pk), value=False
        )
        FeatureFlagOverride.objects.create(
            flag=flag,
            scope_type=ScopeType.STATION,
            scope_id="00000000-0000-0000-0000-000000000001",
            value=True,
        )

        [(_, overrides)] = FlagStore().fetch(ResolutionContext.for_location(location))

        assert [(o.scope_type, o.scope_id) for o in overrides] == [
            (ScopeType.FRANCHISOR, str(franchisor.pk))
        ]

        [(_, overrides)] = FlagStore().fetch(ResolutionContext.for_station(station))

        assert [(o.scope_type, o.value) for o in overrides] == [
            (ScopeType.FRANCHISOR, True),
            (ScopeType.STATION, False),
        ]

    def test_context_without_ids_fetches_no_overrides(self, franchisor):
        flag = FeatureFlag.objects.create(key="usesLoyalty")
        FeatureFlagOverride.objects.create(
            flag=flag, scope_type=ScopeType.FRANCHISOR, scope_id=str(franchisor.pk), value=True
        )

        [(_, overrides)] = FlagStore().fetch(ResolutionContext(business_type="SALON"))

        assert overrides == []


@pytest.mark.django_db
class TestFlagStoreFailures:
    """Test that store failures surface instead of producing defaults."""

    def test_malformed_target_verticals(self):
        FeatureFlag.objects.create(key="usesLoyalty", target_verticals="SALON")

        with pytest.raises(FlagStoreError):
            FlagStore().fetch(ResolutionContext(business_type="SALON"))

    def test_database_error_propagates(self, monkeypatch):
        monkeypatch.setattr(FeatureFlag._meta, "db_table", "feature_flags_missing")

        with pytest.raises(DatabaseError):
            FlagStore().fetch(ResolutionContext(business_type="SALON"))
