"""
Card Vault — Engine value types

Plain in-memory shapes passed between the record store and the pure
engine functions. Nothing here touches the database; the SQLAlchemy
models in cardvault.models are converted into these by the store layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Mapping, NamedTuple

from cardvault.config import CardCondition, CardVariant

_ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Reference data (read-only)
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class CardSet:
    """Originating expansion of a card."""

    set_id: str
    name: str = ""
    total_cards: int = 0
    release_date: date | None = None


@dataclass(frozen=True, slots=True)
class PriceQuotes:
    """Price quotations for one card, per source and per variant.

    Cardmarket fields are EUR, TCGPlayer fields are USD. None (or 0)
    means the source has no quote.
    """

    cardmarket_avg: Decimal | None = None
    cardmarket_low: Decimal | None = None
    cardmarket_trend: Decimal | None = None
    cardmarket_reverse_holo_avg: Decimal | None = None
    cardmarket_reverse_holo_low: Decimal | None = None
    cardmarket_reverse_holo_trend: Decimal | None = None
    cardmarket_1st_edition_avg: Decimal | None = None
    cardmarket_1st_edition_low: Decimal | None = None
    cardmarket_1st_edition_trend: Decimal | None = None
    tcgplayer_1st_edition_holofoil_market: Decimal | None = None
    tcgplayer_1st_edition_normal_market: Decimal | None = None


@dataclass(frozen=True, slots=True)
class Item:
    """Canonical card catalog entry ("{set_code}-{card_number}", e.g. "base1-4")."""

    card_id: str
    name: str
    rarity: str | None = None
    types: tuple[str, ...] = ()
    subtypes: tuple[str, ...] = ()
    national_pokedex_numbers: tuple[int, ...] = ()
    card_set: CardSet | None = None
    prices: PriceQuotes = field(default_factory=PriceQuotes)

    @property
    def set_id(self) -> str | None:
        return self.card_set.set_id if self.card_set else None


ItemLookup = Mapping[str, Item]


# ---------------------------------------------------------------------------
# User data
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class OwnershipRecord:
    """One (card, variant, condition) row a user owns.

    Rows for the same card are never merged in storage; the aggregator
    groups them.
    """

    card_id: str
    quantity: int
    variant: CardVariant | str = CardVariant.NORMAL
    condition: CardCondition | str | None = CardCondition.NEAR_MINT
    acquired_at: datetime | None = None
    updated_at: datetime | None = None
    record_id: str | None = None


class UnlockedAchievement(NamedTuple):
    """A persisted unlock: type key plus when it happened."""
    achievement_type: str
    unlocked_at: datetime
    points: int = 0


# ---------------------------------------------------------------------------
# Aggregation output
# ---------------------------------------------------------------------------
class BreakdownEntry(NamedTuple):
    """Units, value and share of total units for one classification bucket."""
    count: int
    value: Decimal
    percentage: Decimal


class ValueCard(NamedTuple):
    """One card in the top-value list (all variants/conditions combined)."""
    card_id: str
    card_name: str
    set_id: str
    set_name: str
    rarity: str
    quantity: int
    unit_value: Decimal
    total_value: Decimal


class RecentCard(NamedTuple):
    """One ownership row in the recent-additions list."""
    card_id: str
    card_name: str
    set_id: str
    set_name: str
    rarity: str
    variant: str
    condition: str
    quantity: int
    unit_value: Decimal
    added_at: datetime | None


class SetProgress(NamedTuple):
    """How much of one printed set the user owns."""
    set_id: str
    set_name: str
    total_cards: int
    owned_cards: int
    missing_cards: int
    completion_percentage: Decimal
    total_value: Decimal
    release_date: date | None


@dataclass(frozen=True, slots=True)
class CollectionStats:
    """Snapshot of one user's collection.

    Every field has a concrete zero/empty default so an empty collection
    renders without None checks.
    """

    total_cards: int = 0
    unique_cards: int = 0
    total_value_eur: Decimal = _ZERO
    average_card_value: Decimal = _ZERO
    sets_with_cards: int = 0
    rare_cards: int = 0
    rarity_breakdown: dict[str, BreakdownEntry] = field(default_factory=dict)
    condition_breakdown: dict[str, BreakdownEntry] = field(default_factory=dict)
    variant_breakdown: dict[str, BreakdownEntry] = field(default_factory=dict)
    set_breakdown: dict[str, BreakdownEntry] = field(default_factory=dict)
    set_progress: list[SetProgress] = field(default_factory=list)
    top_value_cards: list[ValueCard] = field(default_factory=list)
    recent_additions: list[RecentCard] = field(default_factory=list)
