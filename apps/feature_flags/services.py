"""
Feature flag service.

Wires the store, the resolver and the version oracle together and packages
the result in the envelope clients receive:

    {
        "featureFlags": {"usesLoyalty": true, ...},
        "featureFlagsMeta": {"version": 1718000000, "fetchedAt": "...", "ttlSeconds": 3600}
    }
"""

import hashlib
import json
import logging

from django.conf import settings
from django.core.cache import caches
from django.utils import timezone
from django.utils.encoding import force_bytes

from .constants import DEFAULT_TTL_SECONDS
from .resolver import resolve_flags
from .store import FlagStore
from .version import VersionOracle

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "feature_flags"


def get_ttl_seconds():
    return int(getattr(settings, "FEATURE_FLAGS_TTL_SECONDS", DEFAULT_TTL_SECONDS))


def build_envelope(flags, version, fetched_at, ttl_seconds):
    """
    Package resolved flags with their metadata.

    Args:
        flags: ResolvedFlagSet or plain mapping of flag key to bool
        version: Version token from the VersionOracle
        fetched_at: Aware datetime of the resolution
        ttl_seconds: How long clients may keep the result

    Returns:
        dict: The wire envelope
    """
    return {
        "featureFlags": dict(flags),
        "featureFlagsMeta": {
            "version": version,
            "fetchedAt": fetched_at.isoformat(),
            "ttlSeconds": ttl_seconds,
        },
    }


def compute_feature_flags(context, *, store=None, oracle=None, version=None, now=None):
    """
    Resolve every applicable flag for a context.

    The version is read before the flags so a change landing between the two
    reads makes the returned version older than the data, never newer; the
    client then refetches on its next check instead of missing the change.

    Store errors propagate to the caller unchanged.

    Args:
        context: ResolutionContext
        store: FlagStore to read from (default alias when omitted)
        oracle: VersionOracle to read from (default alias when omitted)
        version: Already computed version, skips the oracle
        now: Timestamp to report as fetchedAt

    Returns:
        dict: The wire envelope
    """
    store = store or FlagStore()
    if version is None:
        version = (oracle or VersionOracle()).current_version()

    flags = resolve_flags(store.fetch(context), context)
    return build_envelope(flags, version, now or timezone.now(), get_ttl_seconds())


def compute_etag(context, flags):
    """
    Entity tag for the resolved flags of one context.

    Hashes the flag values themselves, so the tag changes whenever the
    content does, however close together two writes land.
    """
    content = json.dumps(dict(flags), sort_keys=True, separators=(",", ":"))
    token = f"{context.cache_token()}:{content}"
    return f'"{hashlib.md5(force_bytes(token)).hexdigest()}"'


def get_cache_key(context, latest_change):
    """Cache key for one context at one full-precision change marker."""
    marker = latest_change.isoformat() if latest_change else "empty"
    key_string = f"{marker}:{context.cache_token()}"
    return f"{CACHE_KEY_PREFIX}:{hashlib.md5(force_bytes(key_string)).hexdigest()}"


def get_feature_flags_payload(context, *, store=None, oracle=None):
    """
    Envelope for a context, served from the cache when enabled.

    Entries are keyed by the latest ``updated_at`` at full precision and the
    context, so any flag or override change moves readers to a fresh key and
    old entries simply expire.
    """
    latest_change = (oracle or VersionOracle()).latest_change()
    version = VersionOracle.to_version(latest_change)

    if not getattr(settings, "FEATURE_FLAGS_CACHE_ENABLED", True):
        return compute_feature_flags(context, store=store, version=version)

    cache = caches[getattr(settings, "FEATURE_FLAGS_CACHE_ALIAS", "default")]
    cache_key = get_cache_key(context, latest_change)

    payload = cache.get(cache_key)
    if payload is not None:
        logger.debug(f"Feature flag cache hit for {cache_key}")
        return payload

    payload = compute_feature_flags(context, store=store, version=version)
    cache.set(cache_key, payload, timeout=get_ttl_seconds())
    return payload
