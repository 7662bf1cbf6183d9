"""
Card Vault — Collection-Derived Themed Counters

Counts the themed milestones that can be read straight off a user's
collection (name matches, rarity tags, card types, Pokédex generation,
set release years).

Name, rarity and variant matches (pikachu, charizard, holo, 1st Edition,
secret rare, shiny, promo) count collection rows: one card held as a normal
and a reverse holo print is two. Type, generation and set counters count
distinct cards.

Counters this module cannot derive from catalog data (starter generations,
legendary Pokémon, shadowless, full/alt art, holiday cards) are left to the
external counter provider and default to 0.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, NamedTuple

import structlog

from cardvault.config import CardVariant, settings
from cardvault.engine.types import Item, ItemLookup, OwnershipRecord

logger = structlog.get_logger(__name__)

GEN1_DEX = range(1, 152)
GEN2_DEX = range(152, 252)


class DerivedCounters(NamedTuple):
    """Themed integer counts and boolean flags derived from a collection."""
    counts: dict[str, int]
    flags: dict[str, bool]


def _lower(value: str | None) -> str:
    return (value or "").lower()


def _in_dex_range(item: Item, dex: range) -> bool:
    return any(number in dex for number in item.national_pokedex_numbers)


def derive_collection_counters(
    records: Iterable[OwnershipRecord],
    items: ItemLookup,
) -> DerivedCounters:
    """
    Compute themed counters from ownership rows and their catalog entries.

    Rows whose card is missing from `items` only count toward the
    variant-based counters (holo, 1st Edition).

    Returns:
        DerivedCounters(counts, flags) keyed by requirement kind.
    """
    owned: dict[str, Item] = {}
    rows: list[tuple[str, str, str]] = []

    for record in records:
        item = items.get(record.card_id)
        variant = record.variant.value if isinstance(record.variant, CardVariant) else str(record.variant)
        rows.append((_lower(item.name if item else None), _lower(item.rarity if item else None), variant))
        if item is not None:
            owned[record.card_id] = item

    cards = list(owned.values())
    names = [_lower(item.name) for item in cards]
    owned_types = {card_type for item in cards for card_type in item.types}

    set_members: dict[str, set[str]] = defaultdict(set)
    set_info = {}
    for card_id, item in owned.items():
        if item.card_set is not None:
            set_members[item.card_set.set_id].add(card_id)
            set_info[item.card_set.set_id] = item.card_set

    modern_sets = sum(
        1 for card_set in set_info.values()
        if card_set.release_date is not None
        and card_set.release_date.year >= settings.MODERN_SET_YEAR
    )
    vintage_sets = sum(
        1 for card_set in set_info.values()
        if card_set.release_date is not None
        and card_set.release_date.year < settings.VINTAGE_SET_YEAR
    )
    completed_sets = sum(
        1 for set_id, members in set_members.items()
        if set_info[set_id].total_cards > 0 and len(members) >= set_info[set_id].total_cards
    )

    counts = {
        "pikachu_cards": sum(1 for name, _, _ in rows if "pikachu" in name),
        "charizard_cards": sum(1 for name, _, _ in rows if "charizard" in name),
        "holo_cards": sum(
            1 for _, rarity, variant in rows
            if variant == CardVariant.HOLO.value or "holo" in rarity
        ),
        "first_edition_cards": sum(1 for _, _, variant in rows if variant == CardVariant.FIRST_EDITION.value),
        "secret_rare_cards": sum(1 for _, rarity, _ in rows if "secret" in rarity),
        "shiny_cards": sum(1 for _, rarity, _ in rows if "shiny" in rarity),
        "promo_cards": sum(1 for name, _, _ in rows if "promo" in name),
        "fire_type_cards": sum(1 for item in cards if "Fire" in item.types),
        "water_type_cards": sum(1 for item in cards if "Water" in item.types),
        "electric_type_cards": sum(1 for item in cards if "Lightning" in item.types),
        "gen1_cards": sum(1 for item in cards if _in_dex_range(item, GEN1_DEX)),
        "gen2_cards": sum(1 for item in cards if _in_dex_range(item, GEN2_DEX)),
        "modern_sets": modern_sets,
        "vintage_sets": vintage_sets,
        "completed_sets": completed_sets,
    }

    flags = {
        "eeveelution_complete": bool(cards) and all(
            any(evolution in name for name in names) for evolution in settings.EEVEELUTIONS
        ),
        "all_types_collected": bool(cards) and set(settings.ALL_CARD_TYPES) <= owned_types,
        "classic_sets_complete": bool(cards) and all(
            set_id in set_members for set_id in settings.CLASSIC_SET_IDS
        ),
    }

    logger.debug(
        "themed_counters_derived",
        unique_cards=len(owned),
        completed_sets=completed_sets,
        source="themes",
    )
    return DerivedCounters(counts=counts, flags=flags)
