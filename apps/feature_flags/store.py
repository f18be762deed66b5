"""
Read-only access to flag definitions and the overrides matching a context.
"""

import logging
from functools import reduce
from operator import or_

from django.db.models import Prefetch, Q

from .constants import FlagStatus
from .context import FlagDefinition, OverrideRecord, ResolutionContext
from .exceptions import FlagStoreError
from .models import FeatureFlag, FeatureFlagOverride

logger = logging.getLogger(__name__)


class FlagStore:
    """
    Fetches ACTIVE flags together with the overrides that target a context.

    The database alias is passed in rather than looked up, so the caller
    decides which connection resolution reads from. ``DatabaseError`` raised
    by the ORM propagates unchanged.
    """

    def __init__(self, using="default"):
        self.using = using

    def fetch(
        self, context: ResolutionContext
    ) -> list[tuple[FlagDefinition, list[OverrideRecord]]]:
        """
        Return (flag, overrides) pairs ordered by flag key.

        Overrides are limited to the (scope_type, scope_id) pairs present in
        the context and ordered by primary key. A context without scope ids
        gets no overrides at all.
        """
        flags = (
            FeatureFlag.objects.using(self.using).filter(status=FlagStatus.ACTIVE).order_by("key")
        )

        scope_filter = self._scope_filter(context)
        if scope_filter is None:
            return [(self._to_definition(flag), []) for flag in flags]

        overrides = (
            FeatureFlagOverride.objects.using(self.using)
            .filter(scope_filter)
            .order_by("pk")
        )
        flags = flags.prefetch_related(
            Prefetch("overrides", queryset=overrides, to_attr="matching_overrides")
        )

        entries = []
        for flag in flags:
            records = [self._to_record(override) for override in flag.matching_overrides]
            entries.append((self._to_definition(flag), records))

        logger.debug(
            f"Fetched {len(entries)} active flags for {context.cache_token()} "
            f"({sum(len(records) for _, records in entries)} matching overrides)"
        )
        return entries

    @staticmethod
    def _scope_filter(context):
        pairs = context.scope_pairs()
        if not pairs:
            return None
        return reduce(
            or_,
            (Q(scope_type=scope_type, scope_id=scope_id) for scope_type, scope_id in pairs),
        )

    @staticmethod
    def _to_definition(flag):
        verticals = flag.target_verticals
        if verticals is None:
            verticals = []
        if not isinstance(verticals, list) or not all(isinstance(v, str) for v in verticals):
            raise FlagStoreError(
                f"Flag {flag.key} has malformed target_verticals: {verticals!r}"
            )
        return FlagDefinition(
            key=flag.key,
            default_value=flag.default_value,
            target_verticals=tuple(verticals),
            status=flag.status,
            updated_at=flag.updated_at,
        )

    @staticmethod
    def _to_record(override):
        return OverrideRecord(
            scope_type=override.scope_type,
            scope_id=override.scope_id,
            value=override.value,
            updated_at=override.updated_at,
        )
