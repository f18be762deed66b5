"""
Feature flag app for the franchise POS platform.

Resolves the effective value of every platform feature flag for a point in
the franchise hierarchy:
- Vertical targeting (flags that only exist for salons, restaurants, ...)
- Scoped overrides on franchisor, franchise, location and station
- A version token clients use to skip refetching unchanged flags
"""
