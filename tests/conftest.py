"""
Pytest configuration and fixtures for the franchise POS platform.
"""

import pytest

from apps.core.models import Franchise, Franchisor, Location, Station, User


@pytest.fixture
def api_client():
    """
    Fixture for Django REST framework API client.
    """
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def franchisor(db):
    return Franchisor.objects.create(name="Glow Nails")


@pytest.fixture
def franchise(franchisor):
    return Franchise.objects.create(franchisor=franchisor, legal_name="Glow Nails Austin LLC")


@pytest.fixture
def location(franchise):
    return Location.objects.create(
        franchise=franchise, name="Downtown", business_type=Location.SALON
    )


@pytest.fixture
def station(location):
    return Station.objects.create(location=location, name="REGISTER-1")


@pytest.fixture
def other_location(db):
    """A location under an unrelated franchisor."""
    other_franchisor = Franchisor.objects.create(name="Quick Mart")
    other_franchise = Franchise.objects.create(
        franchisor=other_franchisor, legal_name="Quick Mart Dallas LLC"
    )
    return Location.objects.create(
        franchise=other_franchise, name="Elm Street", business_type=Location.RETAIL
    )


@pytest.fixture
def platform_admin(db):
    return User.objects.create_user(
        username="admin",
        email="admin@example.com",
        password="testpass123",
        role=User.PLATFORM_ADMIN,
    )


@pytest.fixture
def franchisor_owner(franchisor):
    return User.objects.create_user(
        username="brandowner",
        email="owner@example.com",
        password="testpass123",
        role=User.FRANCHISOR_OWNER,
        franchisor=franchisor,
    )


@pytest.fixture
def employee(location):
    return User.objects.create_user(
        username="employee",
        email="employee@example.com",
        password="testpass123",
        role=User.EMPLOYEE,
        location=location,
    )


@pytest.fixture
def authenticated_client(api_client, employee):
    """
    Fixture for an API client authenticated as an employee of ``location``.
    """
    api_client.force_authenticate(user=employee)
    return api_client, employee
