"""
Feature flag resolution.

``resolve_flags`` reduces flag definitions and their overrides to the
effective value of every flag for one context:

1. Vertical filter: a flag targeting other verticals is left out entirely.
2. Seed with the flag's default value.
3. Apply the most specific matching override. Ranks are
   FRANCHISOR < FRANCHISEE_BUSINESS < LOCATION < STATION and an override only
   replaces the current value when its rank is strictly higher, so among
   same-rank duplicates the first one seen is kept.

Resolution does no I/O and keeps no state; identical inputs always give an
identical result.
"""

import enum
import logging
from collections.abc import Iterable, Mapping, Sequence

from .constants import FlagStatus, scope_rank
from .context import FlagDefinition, OverrideRecord, ResolutionContext

logger = logging.getLogger(__name__)


class FlagState(str, enum.Enum):
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ResolvedFlagSet(Mapping):
    """
    Resolved flag values for one context.

    Only flags whose vertical targeting admits the context are present.
    Looking up an absent key with ``[]`` raises ``KeyError``; use
    :meth:`state` to tell "not applicable" apart from "disabled".
    """

    def __init__(self, values=None):
        self._values = {key: bool(values[key]) for key in sorted(values or {})}

    def __getitem__(self, key):
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"ResolvedFlagSet({self._values!r})"

    def state(self, key) -> FlagState:
        if key not in self._values:
            return FlagState.NOT_APPLICABLE
        return FlagState.ENABLED if self._values[key] else FlagState.DISABLED

    def applies(self, key) -> bool:
        return key in self._values

    def is_enabled(self, key) -> bool:
        """True only for flags that apply and resolved to True."""
        return self.state(key) is FlagState.ENABLED

    def as_dict(self) -> dict:
        return dict(self._values)


def resolve_flag_value(
    flag: FlagDefinition,
    overrides: Sequence[OverrideRecord],
    context: ResolutionContext,
) -> bool:
    """
    Effective value of one flag that already passed the vertical filter.
    """
    resolved = flag.default_value
    highest_rank = 0
    seen_ranks = set()

    for override in overrides:
        rank = scope_rank(override.scope_type)
        if rank == 0:
            logger.warning(
                "Ignoring override on flag %s with unknown scope type %r",
                flag.key,
                override.scope_type,
            )
            continue
        if not context.matches(override.scope_type, override.scope_id):
            continue

        if rank in seen_ranks:
            logger.warning(
                "Flag %s has more than one %s override for this context; keeping the first",
                flag.key,
                override.scope_type,
            )
        seen_ranks.add(rank)

        if rank > highest_rank:
            resolved = override.value
            highest_rank = rank

    return resolved


def resolve_flags(
    entries: Iterable[tuple[FlagDefinition, Sequence[OverrideRecord]]],
    context: ResolutionContext,
) -> ResolvedFlagSet:
    """
    Resolve every applicable flag for a context.

    Args:
        entries: (flag, overrides) pairs as returned by ``FlagStore.fetch``
        context: Where in the hierarchy the caller is anchored

    Returns:
        ResolvedFlagSet keyed by flag key
    """
    values = {}
    for flag, overrides in entries:
        if flag.status != FlagStatus.ACTIVE:
            continue
        if not flag.admits(context.business_type):
            continue
        values[flag.key] = resolve_flag_value(flag, overrides, context)
    return ResolvedFlagSet(values)
