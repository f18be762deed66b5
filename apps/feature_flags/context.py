"""
Request-scoped inputs of flag resolution.

None of these objects touch the database; the store produces them from model
rows and the resolver consumes them, so resolution can be exercised with
plain fixture data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .constants import FlagStatus, ScopeType


def _normalize_id(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class ResolutionContext:
    """
    Where in the franchise hierarchy a caller is anchored.

    ``business_type`` is required. The scope ids are optional: a context
    supplies as many of them as the caller knows, from the franchisor alone
    down to a single station.
    """

    business_type: str
    station_id: Optional[str] = None
    location_id: Optional[str] = None
    franchise_id: Optional[str] = None
    franchisor_id: Optional[str] = None

    def __post_init__(self):
        business_type = (self.business_type or "").strip().upper()
        if not business_type:
            raise ValueError("ResolutionContext requires a business_type")
        object.__setattr__(self, "business_type", business_type)
        for name in ("station_id", "location_id", "franchise_id", "franchisor_id"):
            object.__setattr__(self, name, _normalize_id(getattr(self, name)))

    @classmethod
    def for_location(cls, location) -> "ResolutionContext":
        """Context for a location and every ancestor above it."""
        return cls(
            business_type=location.effective_business_type,
            location_id=location.pk,
            franchise_id=location.franchise_id,
            franchisor_id=location.franchise.franchisor_id,
        )

    @classmethod
    def for_station(cls, station) -> "ResolutionContext":
        """Context for a station, its location and every ancestor above it."""
        location = station.location
        return cls(
            business_type=location.effective_business_type,
            station_id=station.pk,
            location_id=location.pk,
            franchise_id=location.franchise_id,
            franchisor_id=location.franchise.franchisor_id,
        )

    def scope_pairs(self) -> list[tuple[str, str]]:
        """(scope_type, scope_id) pairs for every id present, least specific first."""
        candidates = [
            (ScopeType.FRANCHISOR, self.franchisor_id),
            (ScopeType.FRANCHISEE_BUSINESS, self.franchise_id),
            (ScopeType.LOCATION, self.location_id),
            (ScopeType.STATION, self.station_id),
        ]
        return [(scope_type.value, scope_id) for scope_type, scope_id in candidates if scope_id]

    def matches(self, scope_type, scope_id) -> bool:
        """Whether an override on (scope_type, scope_id) targets this context."""
        return (scope_type, _normalize_id(scope_id)) in self.scope_pairs()

    def cache_token(self) -> str:
        """Stable text form used in cache keys and ETags."""
        return "|".join(
            [
                self.business_type,
                self.franchisor_id or "-",
                self.franchise_id or "-",
                self.location_id or "-",
                self.station_id or "-",
            ]
        )


@dataclass(frozen=True)
class FlagDefinition:
    key: str
    default_value: bool
    target_verticals: tuple[str, ...] = ()
    status: str = FlagStatus.ACTIVE.value
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        verticals = tuple(v.strip().upper() for v in self.target_verticals or ())
        object.__setattr__(self, "target_verticals", verticals)

    def admits(self, business_type: str) -> bool:
        """Vertical targeting: an empty target list admits every vertical."""
        if not self.target_verticals:
            return True
        return (business_type or "").strip().upper() in self.target_verticals


@dataclass(frozen=True)
class OverrideRecord:
    scope_type: str
    scope_id: str
    value: bool
    updated_at: Optional[datetime] = field(default=None, compare=False)
