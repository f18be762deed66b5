"""
Exceptions raised by the feature flag store.

Database failures are not wrapped: they surface as Django's own
``DatabaseError`` family so callers see exactly what the ORM raised.
"""


class FeatureFlagError(Exception):
    """Base class for feature flag errors."""


class FlagStoreError(FeatureFlagError):
    """A stored flag or override row cannot be interpreted."""
