"""
Enumerations and fixed values shared by the feature flag modules.
"""

from django.db import models

# Clients treat a resolved flag set as fresh for this long unless the version changes
DEFAULT_TTL_SECONDS = 3600


class FlagStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"


class ScopeType(models.TextChoices):
    FRANCHISOR = "FRANCHISOR", "Franchisor"
    FRANCHISEE_BUSINESS = "FRANCHISEE_BUSINESS", "Franchise"
    LOCATION = "LOCATION", "Location"
    STATION = "STATION", "Station"


# Higher rank is more specific and wins. 0 means no override applied.
SCOPE_PRIORITY = {
    ScopeType.FRANCHISOR: 1,
    ScopeType.FRANCHISEE_BUSINESS: 2,
    ScopeType.LOCATION: 3,
    ScopeType.STATION: 4,
}


def scope_rank(scope_type):
    """Rank of a scope type; unknown scope types rank 0 and never win."""
    return SCOPE_PRIORITY.get(scope_type, 0)
