"""
Card Vault — Extended Stats

The single snapshot every requirement handler reads: the aggregated
CollectionStats plus counters that live outside the collection (friends,
trades, streaks, activity, themed counts, flags).

build_extended_stats() is the merge point. Counters supplied by the
external provider win over counters derived from the collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, TypedDict

import structlog

from cardvault.config import settings
from cardvault.engine.themes import DerivedCounters
from cardvault.engine.types import CollectionStats

logger = structlog.get_logger(__name__)

# Requirement kinds that read a CollectionStats field under another name
_STATS_ALIASES: dict[str, str] = {
    "cards": "total_cards",
    "exact_cards": "total_cards",
    "unique_cards": "unique_cards",
    "exact_unique_cards": "unique_cards",
    "collection_value_eur": "total_value_eur",
    "rare_cards": "rare_cards",
}

_ACTIVITY_FIELDS = (
    "friends",
    "completed_trades",
    "login_streak",
    "collection_streak",
    "trade_streak",
    "active_days_30",
    "daily_cards_added",
    "daily_trades_completed",
)


class ExternalCounters(TypedDict, total=False):
    """Counters supplied by the counter provider. Every key is optional."""
    friends: int
    completed_trades: int
    login_streak: int
    collection_streak: int
    trade_streak: int
    active_days_30: int
    daily_cards_added: int
    daily_trades_completed: int
    themed_counts: dict[str, int]
    flags: dict[str, bool]


@dataclass(frozen=True, slots=True)
class ExtendedStats:
    """Read-only evaluation context for one user."""

    stats: CollectionStats = field(default_factory=CollectionStats)
    friends: int = 0
    completed_trades: int = 0
    login_streak: int = 0
    collection_streak: int = 0
    trade_streak: int = 0
    active_days_30: int = 0
    daily_cards_added: int = 0
    daily_trades_completed: int = 0
    themed_counts: dict[str, int] = field(default_factory=dict)
    flags: dict[str, bool] = field(default_factory=dict)

    def stat(self, kind: str) -> int | Decimal:
        """Current numeric value for a threshold/exact requirement kind; 0 if unknown."""
        alias = _STATS_ALIASES.get(kind)
        if alias is not None:
            return getattr(self.stats, alias)
        if kind in _ACTIVITY_FIELDS:
            return getattr(self, kind)
        return self.themed_counts.get(kind, 0)

    def flag(self, kind: str) -> bool:
        return bool(self.flags.get(kind, False))


def _coerce_count(name: str, value: Any) -> int:
    """Integer counter value; None and malformed values become 0."""
    if value is None:
        return 0
    try:
        return int(value.strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning(
            "extended_counter_invalid",
            counter=name,
            value=repr(value),
            source="context",
        )
        return 0


def _mapping(name: str, value: Any) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        logger.warning(
            "extended_counter_invalid",
            counter=name,
            value=repr(value),
            source="context",
        )
        return {}
    return value


def build_extended_stats(
    stats: CollectionStats,
    derived: DerivedCounters | None = None,
    external: ExternalCounters | None = None,
) -> ExtendedStats:
    """
    Merge collection stats, derived themed counters and external counters.

    Args:
        stats: Output of aggregate().
        derived: Output of derive_collection_counters(), if computed.
        external: Counter provider payload; missing keys default to 0/False.

    Returns:
        ExtendedStats ready for evaluate_achievements().
    """
    external = _mapping("external", external)

    themed_counts: dict[str, int] = {}
    flags: dict[str, bool] = {}
    if derived is not None:
        themed_counts.update(derived.counts)
        flags.update(derived.flags)
    themed_counts.update(
        (kind, _coerce_count(kind, value))
        for kind, value in _mapping("themed_counts", external.get("themed_counts")).items()
    )
    flags.update(_mapping("flags", external.get("flags")))

    activity = {name: _coerce_count(name, external.get(name)) for name in _ACTIVITY_FIELDS}

    return ExtendedStats(stats=stats, themed_counts=themed_counts, flags=flags, **activity)


def is_early_adopter(joined_at: datetime | date | None, cutoff: date | None = None) -> bool:
    """True if the account was created before the early-adopter cutoff."""
    if joined_at is None:
        return False
    limit = cutoff if cutoff is not None else settings.EARLY_ADOPTER_CUTOFF
    joined = joined_at.date() if isinstance(joined_at, datetime) else joined_at
    return joined < limit
