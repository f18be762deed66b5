"""
Tests for the feature flag management commands.
"""

import json
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError

import pytest

from apps.feature_flags.constants import FlagStatus, ScopeType
from apps.feature_flags.management.commands.setup_feature_flags import DEFAULT_FLAGS
from apps.feature_flags.models import FeatureFlag, FeatureFlagOverride


@pytest.mark.django_db
class TestSetupFeatureFlags:
    def test_creates_default_flags(self):
        out = StringIO()

        call_command("setup_feature_flags", stdout=out)

        assert FeatureFlag.objects.count() == len(DEFAULT_FLAGS)
        assert FeatureFlag.objects.get(key="usesAppointments").target_verticals == [
            "HYBRID",
            "SALON",
        ]
        assert "Created flag: usesLoyalty" in out.getvalue()

    def test_is_idempotent_and_keeps_operator_choices(self):
        call_command("setup_feature_flags", stdout=StringIO())
        FeatureFlag.objects.filter(key="usesLoyalty").update(
            default_value=True, status=FlagStatus.INACTIVE
        )

        out = StringIO()
        call_command("setup_feature_flags", stdout=out)

        loyalty = FeatureFlag.objects.get(key="usesLoyalty")
        assert FeatureFlag.objects.count() == len(DEFAULT_FLAGS)
        assert loyalty.default_value is True
        assert loyalty.status == FlagStatus.INACTIVE
        assert "0 created" in out.getvalue()


@pytest.mark.django_db
class TestResolveFeatureFlags:
    def test_prints_envelope_for_station(self, station):
        flag = FeatureFlag.objects.create(key="usesLoyalty")
        FeatureFlagOverride.objects.create(
            flag=flag, scope_type=ScopeType.STATION, scope_id=str(station.pk), value=True
        )
        out = StringIO()

        call_command("resolve_feature_flags", station=str(station.pk), stdout=out)

        envelope = json.loads(out.getvalue())
        assert envelope["featureFlags"] == {"usesLoyalty": True}
        assert envelope["featureFlagsMeta"]["ttlSeconds"] == 3600

    def test_hand_built_context(self):
        FeatureFlag.objects.create(key="usesLottery", target_verticals=["RETAIL"])
        out = StringIO()

        call_command("resolve_feature_flags", business_type="salon", stdout=out)

        assert json.loads(out.getvalue())["featureFlags"] == {}

    def test_unknown_location(self):
        with pytest.raises(CommandError):
            call_command(
                "resolve_feature_flags",
                location="00000000-0000-0000-0000-000000000000",
                stdout=StringIO(),
            )

    def test_requires_a_context(self):
        with pytest.raises(CommandError):
            call_command("resolve_feature_flags", stdout=StringIO())
