"""
Card Vault — Collection Aggregator

Folds a user's ownership rows into one CollectionStats snapshot.

Invariants on the result:
    - total_cards == Σ record.quantity
    - total_value_eur == Σ unit_value(record) × quantity
    - counts in every breakdown (rarity, condition, variant, set) sum to total_cards

Rows whose card is missing from the catalog still count as units. They land
in the "Unknown" rarity/set buckets with zero value and are kept out of the
top-value list.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

import structlog

from cardvault.config import CardVariant, settings
from cardvault.engine.types import (
    BreakdownEntry,
    CardSet,
    CollectionStats,
    Item,
    ItemLookup,
    OwnershipRecord,
    RecentCard,
    SetProgress,
    ValueCard,
)
from cardvault.engine.valuation import safe_average, safe_percentage, unit_value
from cardvault.utils.condition_map import parse_condition

logger = structlog.get_logger(__name__)

UNKNOWN_BUCKET = "Unknown"
UNKNOWN_CONDITION = "unknown"

_ZERO = Decimal("0")


@dataclass
class _Bucket:
    count: int = 0
    value: Decimal = _ZERO


@dataclass
class _Holding:
    """All rows for one card, merged across variants and conditions."""

    item: Item | None
    quantity: int = 0
    value: Decimal = _ZERO


@dataclass
class _SetTally:
    card_set: CardSet
    card_ids: set[str] = field(default_factory=set)
    value: Decimal = _ZERO


def is_rare(rarity: str | None) -> bool:
    """Exact match against settings.RARE_RARITIES, ignoring case."""
    if not rarity:
        return False
    return rarity.strip().lower() in {tag.lower() for tag in settings.RARE_RARITIES}


def _variant_key(variant: CardVariant | str | None) -> str:
    if variant is None:
        return CardVariant.NORMAL.value
    if isinstance(variant, CardVariant):
        return variant.value
    return str(variant)


def _condition_key(condition) -> str:
    grade = parse_condition(condition)
    return grade.value if grade is not None else UNKNOWN_CONDITION


def _finalise(buckets: dict[str, _Bucket], total_cards: int) -> dict[str, BreakdownEntry]:
    return {
        key: BreakdownEntry(
            count=bucket.count,
            value=bucket.value,
            percentage=safe_percentage(bucket.count, total_cards),
        )
        for key, bucket in buckets.items()
    }


def _recent_sort_key(entry: tuple[OwnershipRecord, Decimal, Item | None]):
    # Newest first; rows without a timestamp go last
    acquired = entry[0].acquired_at
    return (acquired is None, -(acquired.timestamp()) if acquired is not None else 0.0)


def build_set_progress(tallies: Iterable[_SetTally]) -> list[SetProgress]:
    """Completion per touched set, most complete first, then set id."""
    progress = []
    for tally in tallies:
        total = tally.card_set.total_cards
        owned = len(tally.card_ids)
        completion = min(safe_percentage(owned, total), Decimal("100"))
        progress.append(
            SetProgress(
                set_id=tally.card_set.set_id,
                set_name=tally.card_set.name,
                total_cards=total,
                owned_cards=owned,
                missing_cards=max(total - owned, 0),
                completion_percentage=completion,
                total_value=tally.value,
                release_date=tally.card_set.release_date,
            )
        )
    progress.sort(key=lambda p: (-p.completion_percentage, p.set_id))
    return progress


def aggregate(
    records: Iterable[OwnershipRecord],
    items: ItemLookup,
    top_limit: int | None = None,
    recent_limit: int | None = None,
) -> CollectionStats:
    """
    Compute collection statistics from ownership rows.

    Args:
        records: Every ownership row for one user.
        items: Catalog lookup keyed by card_id (missing keys are tolerated).
        top_limit: Size of the top-value list (default: settings.TOP_VALUE_LIMIT).
        recent_limit: Size of the recent list (default: settings.RECENT_ADDITIONS_LIMIT).

    Returns:
        CollectionStats. An empty input yields the all-zero default.
    """
    top_n = top_limit if top_limit is not None else settings.TOP_VALUE_LIMIT
    recent_n = recent_limit if recent_limit is not None else settings.RECENT_ADDITIONS_LIMIT

    total_cards = 0
    total_value = _ZERO
    holdings: dict[str, _Holding] = {}
    sets: dict[str, _SetTally] = {}
    rarity: dict[str, _Bucket] = defaultdict(_Bucket)
    condition: dict[str, _Bucket] = defaultdict(_Bucket)
    variant: dict[str, _Bucket] = defaultdict(_Bucket)
    by_set: dict[str, _Bucket] = defaultdict(_Bucket)
    valued_rows: list[tuple[OwnershipRecord, Decimal, Item | None]] = []
    missing: set[str] = set()

    for record in records:
        item = items.get(record.card_id)
        if item is None:
            missing.add(record.card_id)

        price = unit_value(record, item)
        row_value = price * record.quantity

        total_cards += record.quantity
        total_value += row_value
        valued_rows.append((record, price, item))

        holding = holdings.setdefault(record.card_id, _Holding(item=item))
        holding.quantity += record.quantity
        holding.value += row_value

        rarity_key = (item.rarity if item else None) or UNKNOWN_BUCKET
        set_key = (item.set_id if item else None) or UNKNOWN_BUCKET
        for buckets, key in (
            (rarity, rarity_key),
            (condition, _condition_key(record.condition)),
            (variant, _variant_key(record.variant)),
            (by_set, set_key),
        ):
            buckets[key].count += record.quantity
            buckets[key].value += row_value

        if item is not None and item.card_set is not None:
            tally = sets.setdefault(item.card_set.set_id, _SetTally(card_set=item.card_set))
            tally.card_ids.add(record.card_id)
            tally.value += row_value

    if not holdings:
        return CollectionStats()

    if missing:
        logger.info(
            "aggregate_items_missing",
            missing_count=len(missing),
            card_ids=sorted(missing)[:10],
            source="aggregator",
        )

    top_value = sorted(
        (
            (card_id, holding)
            for card_id, holding in holdings.items()
            if holding.item is not None
        ),
        key=lambda pair: (-pair[1].value, pair[0]),
    )[:top_n]

    top_value_cards = [
        ValueCard(
            card_id=card_id,
            card_name=holding.item.name,
            set_id=holding.item.set_id or UNKNOWN_BUCKET,
            set_name=holding.item.card_set.name if holding.item.card_set else UNKNOWN_BUCKET,
            rarity=holding.item.rarity or UNKNOWN_BUCKET,
            quantity=holding.quantity,
            unit_value=safe_average(holding.value, holding.quantity),
            total_value=holding.value,
        )
        for card_id, holding in top_value
    ]

    recent_additions = [
        RecentCard(
            card_id=record.card_id,
            card_name=item.name if item else record.card_id,
            set_id=(item.set_id if item else None) or UNKNOWN_BUCKET,
            set_name=item.card_set.name if item and item.card_set else UNKNOWN_BUCKET,
            rarity=(item.rarity if item else None) or UNKNOWN_BUCKET,
            variant=_variant_key(record.variant),
            condition=_condition_key(record.condition),
            quantity=record.quantity,
            unit_value=price,
            added_at=record.acquired_at,
        )
        for record, price, item in sorted(valued_rows, key=_recent_sort_key)[:recent_n]
    ]

    # Collection rows, not copies or distinct cards
    rare_cards = sum(
        1 for _, _, item in valued_rows
        if item is not None and is_rare(item.rarity)
    )

    stats = CollectionStats(
        total_cards=total_cards,
        unique_cards=len(holdings),
        total_value_eur=total_value,
        average_card_value=safe_average(total_value, total_cards),
        sets_with_cards=len(sets),
        rare_cards=rare_cards,
        rarity_breakdown=_finalise(rarity, total_cards),
        condition_breakdown=_finalise(condition, total_cards),
        variant_breakdown=_finalise(variant, total_cards),
        set_breakdown=_finalise(by_set, total_cards),
        set_progress=build_set_progress(sets.values()),
        top_value_cards=top_value_cards,
        recent_additions=recent_additions,
    )

    logger.debug(
        "collection_aggregated",
        total_cards=stats.total_cards,
        unique_cards=stats.unique_cards,
        total_value_eur=str(stats.total_value_eur),
        source="aggregator",
    )
    return stats
