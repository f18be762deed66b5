"""
Tests for the tenant hierarchy models and access rules.
"""

from types import SimpleNamespace

import pytest

from apps.core.models import Franchise, Franchisor, Location, User
from apps.core.permissions import HasHierarchyAccess
from apps.feature_flags.context import ResolutionContext


@pytest.mark.django_db
class TestHierarchyModels:
    def test_slug_generated_and_unique(self):
        first = Franchisor.objects.create(name="Glow Nails")
        second = Franchisor.objects.create(name="Glow Nails")

        assert first.slug == "glow-nails"
        assert second.slug.startswith("glow-nails-")

    def test_unset_business_type_is_retail(self, franchise):
        location = Location.objects.create(franchise=franchise, name="Kiosk")

        assert location.business_type is None
        assert location.effective_business_type == Location.RETAIL

    def test_station_context_walks_up_the_hierarchy(
        self, station, location, franchise, franchisor
    ):
        context = ResolutionContext.for_station(station)

        assert context.business_type == "SALON"
        assert context.station_id == str(station.pk)
        assert context.location_id == str(location.pk)
        assert context.franchise_id == str(franchise.pk)
        assert context.franchisor_id == str(franchisor.pk)


@pytest.mark.django_db
class TestUserAnchoring:
    def test_employee_inherits_ancestors(self, employee, location):
        assert employee.franchise_id == location.franchise_id
        assert employee.franchisor_id == location.franchise.franchisor_id

    def test_platform_admin_has_no_anchor(self, platform_admin):
        assert platform_admin.franchisor_id is None
        assert platform_admin.location_id is None

    def test_non_admin_requires_franchisor(self, db):
        with pytest.raises(ValueError):
            User.objects.create_user(username="orphan", password="testpass123")


@pytest.mark.django_db
class TestLocationAccess:
    def test_employee_limited_to_own_location(self, employee, location, franchise):
        sibling = Location.objects.create(franchise=franchise, name="Uptown")

        assert employee.can_access_location(location)
        assert not employee.can_access_location(sibling)

    def test_franchise_owner_sees_all_franchise_locations(self, franchise, location, other_location):
        owner = User.objects.create_user(
            username="llcowner",
            password="testpass123",
            role=User.FRANCHISE_OWNER,
            franchise=franchise,
        )

        assert owner.can_access_location(location)
        assert not owner.can_access_location(other_location)

    def test_franchisor_owner_sees_every_franchise(self, franchisor_owner, franchisor, location):
        second = Franchise.objects.create(franchisor=franchisor, legal_name="Glow Nails Waco LLC")
        remote = Location.objects.create(franchise=second, name="Waco")

        assert franchisor_owner.can_access_location(location)
        assert franchisor_owner.can_access_location(remote)

    def test_platform_admin_sees_everything(self, platform_admin, other_location, station):
        assert platform_admin.can_access_location(other_location)
        assert platform_admin.can_access_station(station)


@pytest.mark.django_db
class TestHasHierarchyAccess:
    def test_object_permission_follows_user_access(self, employee, station, other_location):
        request = SimpleNamespace(user=employee)
        permission = HasHierarchyAccess()

        assert permission.has_object_permission(request, None, station)
        assert permission.has_object_permission(request, None, station.location)
        assert not permission.has_object_permission(request, None, other_location)

    def test_superuser_without_franchisor_counts_as_platform_admin(self, db, other_location):
        superuser = User.objects.create_user(
            username="support", password="testpass123", role=User.EMPLOYEE, is_superuser=True
        )
        request = SimpleNamespace(user=superuser)

        assert superuser.is_platform_admin()
        assert HasHierarchyAccess().has_permission(request, None)
        assert HasHierarchyAccess().has_object_permission(request, None, other_location)
