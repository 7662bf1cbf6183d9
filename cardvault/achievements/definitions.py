"""
Card Vault — Achievement Catalog

Declarative list of every achievement. Each definition carries exactly one
requirement (kind + target) drawn from a closed set of kinds:

    | Family    | Satisfied when           | Kinds                                  |
    |:----------|:-------------------------|:---------------------------------------|
    | threshold | stat >= target           | cards, unique_cards, friends, ...      |
    | exact     | stat == target           | exact_cards, exact_unique_cards        |
    | flag      | flag is true             | eeveelution_complete, early_adopter... |

The list is append-only across releases: type keys are stored in the
user_achievements table, so never rename or reuse one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Sequence

from cardvault.config import AchievementCategory, AchievementRarity

# ---------------------------------------------------------------------------
# Requirement kinds
# ---------------------------------------------------------------------------
THRESHOLD_KINDS: frozenset[str] = frozenset({
    # collection stats
    "cards",
    "unique_cards",
    "collection_value_eur",
    "rare_cards",
    # social / trading
    "friends",
    "completed_trades",
    # themed counters
    "pikachu_cards",
    "charizard_cards",
    "starter_generations",
    "legendary_pokemon",
    "shiny_cards",
    "fire_type_cards",
    "water_type_cards",
    "electric_type_cards",
    "gen1_cards",
    "gen2_cards",
    "modern_sets",
    "vintage_sets",
    "holo_cards",
    "first_edition_cards",
    "shadowless_cards",
    "promo_cards",
    "full_art_cards",
    "secret_rare_cards",
    "alt_art_cards",
    "completed_sets",
    "holiday_cards",
    # activity
    "login_streak",
    "collection_streak",
    "trade_streak",
    "active_days_30",
    "daily_cards_added",
    "daily_trades_completed",
})

EXACT_KINDS: frozenset[str] = frozenset({"exact_cards", "exact_unique_cards"})

FLAG_KINDS: frozenset[str] = frozenset({
    "eeveelution_complete",
    "all_types_collected",
    "classic_sets_complete",
    "early_adopter",
})


class Requirement(NamedTuple):
    kind: str
    target: int | bool


@dataclass(frozen=True, slots=True)
class AchievementDefinition:
    """One catalog entry. Immutable; the type key is the stable identity."""

    type: str
    name: str
    description: str
    icon: str
    category: AchievementCategory
    rarity: AchievementRarity
    points: int
    requirement: Requirement
    hidden: bool = False


_COLLECTION = AchievementCategory.COLLECTION
_SOCIAL = AchievementCategory.SOCIAL
_TRADING = AchievementCategory.TRADING
_SPECIAL = AchievementCategory.SPECIAL

_COMMON = AchievementRarity.COMMON
_RARE = AchievementRarity.RARE
_EPIC = AchievementRarity.EPIC
_LEGENDARY = AchievementRarity.LEGENDARY


ACHIEVEMENT_DEFINITIONS: tuple[AchievementDefinition, ...] = (
    # -----------------------------------------------------------------------
    # Collection milestones (unique cards)
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "first_card", "First Steps", "Add your first card to your collection", "🎯",
        _COLLECTION, _COMMON, 10, Requirement("cards", 1),
    ),
    AchievementDefinition(
        "collector_10", "Getting Started", "Collect 10 different cards", "📚",
        _COLLECTION, _COMMON, 25, Requirement("unique_cards", 10),
    ),
    AchievementDefinition(
        "collector_25", "Card Enthusiast", "Collect 25 different cards", "🎴",
        _COLLECTION, _COMMON, 50, Requirement("unique_cards", 25),
    ),
    AchievementDefinition(
        "collector_50", "Dedicated Collector", "Collect 50 different cards", "📖",
        _COLLECTION, _RARE, 100, Requirement("unique_cards", 50),
    ),
    AchievementDefinition(
        "collector_100", "Serious Collector", "Collect 100 different cards", "📕",
        _COLLECTION, _EPIC, 250, Requirement("unique_cards", 100),
    ),
    AchievementDefinition(
        "collector_250", "Master Collector", "Collect 250 different cards", "📚",
        _COLLECTION, _EPIC, 500, Requirement("unique_cards", 250),
    ),
    AchievementDefinition(
        "collector_500", "Elite Collector", "Collect 500 different cards", "🏛️",
        _COLLECTION, _LEGENDARY, 1000, Requirement("unique_cards", 500),
    ),
    AchievementDefinition(
        "collector_1000", "Pokédex Master", "Collect 1000 different cards", "📱",
        _COLLECTION, _LEGENDARY, 2000, Requirement("unique_cards", 1000),
    ),
    AchievementDefinition(
        "collector_2000", "Legendary Archivist", "Collect 2000 different cards", "🏆",
        _COLLECTION, _LEGENDARY, 5000, Requirement("unique_cards", 2000),
    ),

    # -----------------------------------------------------------------------
    # Collection value (EUR)
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "valuable_collection_100", "Valuable Collection", "Build a collection worth €100", "💰",
        _COLLECTION, _RARE, 150, Requirement("collection_value_eur", 100),
    ),
    AchievementDefinition(
        "valuable_collection_250", "Treasure Keeper", "Build a collection worth €250", "💎",
        _COLLECTION, _RARE, 300, Requirement("collection_value_eur", 250),
    ),
    AchievementDefinition(
        "valuable_collection_500", "Investment Guru", "Build a collection worth €500", "💍",
        _COLLECTION, _EPIC, 600, Requirement("collection_value_eur", 500),
    ),
    AchievementDefinition(
        "valuable_collection_1000", "High Roller", "Build a collection worth €1000", "👑",
        _COLLECTION, _EPIC, 1200, Requirement("collection_value_eur", 1000),
    ),
    AchievementDefinition(
        "valuable_collection_2500", "Millionaire Mindset", "Build a collection worth €2500", "🏦",
        _COLLECTION, _LEGENDARY, 2500, Requirement("collection_value_eur", 2500),
    ),
    AchievementDefinition(
        "valuable_collection_5000", "Treasure Dragon", "Build a collection worth €5000", "🐉",
        _COLLECTION, _LEGENDARY, 5000, Requirement("collection_value_eur", 5000),
    ),

    # -----------------------------------------------------------------------
    # Rare cards
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "rare_collector", "Rare Hunter", "Collect 10 rare or higher rarity cards", "⭐",
        _COLLECTION, _RARE, 200, Requirement("rare_cards", 10),
    ),
    AchievementDefinition(
        "rare_collector_25", "Rarity Seeker", "Collect 25 rare or higher rarity cards", "🌟",
        _COLLECTION, _RARE, 400, Requirement("rare_cards", 25),
    ),
    AchievementDefinition(
        "rare_collector_50", "Legendary Collector", "Collect 50 rare or higher rarity cards", "✨",
        _COLLECTION, _EPIC, 750, Requirement("rare_cards", 50),
    ),
    AchievementDefinition(
        "rare_collector_100", "Rainbow Master", "Collect 100 rare or higher rarity cards", "🌈",
        _COLLECTION, _LEGENDARY, 1500, Requirement("rare_cards", 100),
    ),

    # -----------------------------------------------------------------------
    # Volume (copies, duplicates included)
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "volume_collector_100", "Card Hoarder", "Own 100 total cards (including duplicates)", "📦",
        _COLLECTION, _COMMON, 75, Requirement("cards", 100),
    ),
    AchievementDefinition(
        "volume_collector_500", "Bulk Collector", "Own 500 total cards (including duplicates)", "📚",
        _COLLECTION, _RARE, 300, Requirement("cards", 500),
    ),
    AchievementDefinition(
        "volume_collector_1000", "Card Warehouse", "Own 1000 total cards (including duplicates)", "🏭",
        _COLLECTION, _EPIC, 800, Requirement("cards", 1000),
    ),
    AchievementDefinition(
        "volume_collector_5000", "Card Empire", "Own 5000 total cards (including duplicates)", "🏰",
        _COLLECTION, _LEGENDARY, 3000, Requirement("cards", 5000),
    ),

    # -----------------------------------------------------------------------
    # Social
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "first_friend", "Making Friends", "Add your first friend", "👋",
        _SOCIAL, _COMMON, 20, Requirement("friends", 1),
    ),
    AchievementDefinition(
        "social_circle", "Social Circle", "Have 5 friends", "👥",
        _SOCIAL, _COMMON, 50, Requirement("friends", 5),
    ),
    AchievementDefinition(
        "social_butterfly", "Social Butterfly", "Have 10 friends", "🦋",
        _SOCIAL, _RARE, 100, Requirement("friends", 10),
    ),
    AchievementDefinition(
        "party_host", "Party Host", "Have 25 friends", "🎉",
        _SOCIAL, _RARE, 250, Requirement("friends", 25),
    ),
    AchievementDefinition(
        "social_influencer", "Social Influencer", "Have 50 friends", "📢",
        _SOCIAL, _EPIC, 500, Requirement("friends", 50),
    ),
    AchievementDefinition(
        "community_leader", "Community Leader", "Have 100 friends", "👨‍💼",
        _SOCIAL, _LEGENDARY, 1000, Requirement("friends", 100),
    ),

    # -----------------------------------------------------------------------
    # Trading
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "first_trade", "First Trade", "Complete your first trade", "🤝",
        _TRADING, _COMMON, 50, Requirement("completed_trades", 1),
    ),
    AchievementDefinition(
        "frequent_trader", "Frequent Trader", "Complete 5 trades", "🔄",
        _TRADING, _COMMON, 125, Requirement("completed_trades", 5),
    ),
    AchievementDefinition(
        "active_trader", "Active Trader", "Complete 10 trades", "📈",
        _TRADING, _RARE, 200, Requirement("completed_trades", 10),
    ),
    AchievementDefinition(
        "seasoned_trader", "Seasoned Trader", "Complete 25 trades", "💼",
        _TRADING, _RARE, 400, Requirement("completed_trades", 25),
    ),
    AchievementDefinition(
        "trading_expert", "Trading Expert", "Complete 50 trades", "🎯",
        _TRADING, _EPIC, 750, Requirement("completed_trades", 50),
    ),
    AchievementDefinition(
        "trade_master", "Trade Master", "Complete 100 trades", "🏅",
        _TRADING, _EPIC, 1500, Requirement("completed_trades", 100),
    ),
    AchievementDefinition(
        "trading_mogul", "Trading Mogul", "Complete 250 trades", "💎",
        _TRADING, _LEGENDARY, 3000, Requirement("completed_trades", 250),
    ),

    # -----------------------------------------------------------------------
    # Special: themed collections
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "pikachu_lover", "Pikachu Lover", "Collect 10 different Pikachu cards", "⚡",
        _SPECIAL, _RARE, 300, Requirement("pikachu_cards", 10),
    ),
    AchievementDefinition(
        "charizard_hunter", "Charizard Hunter", "Collect 5 different Charizard cards", "🔥",
        _SPECIAL, _EPIC, 500, Requirement("charizard_cards", 5),
    ),
    AchievementDefinition(
        "eeveelution_master", "Eeveelution Master", "Collect cards from all Eevee evolutions", "🌙",
        _SPECIAL, _EPIC, 400, Requirement("eeveelution_complete", True),
    ),
    AchievementDefinition(
        "starter_pokemon_fan", "Starter Pokémon Fan",
        "Collect starter Pokémon from 3 different generations", "🌱",
        _SPECIAL, _RARE, 250, Requirement("starter_generations", 3),
    ),
    AchievementDefinition(
        "legendary_collector", "Legendary Pokémon Trainer",
        "Collect 10 different legendary Pokémon cards", "👑",
        _SPECIAL, _EPIC, 600, Requirement("legendary_pokemon", 10),
    ),
    AchievementDefinition(
        "shiny_hunter", "Shiny Hunter", "Collect 5 different shiny Pokémon cards", "✨",
        _SPECIAL, _EPIC, 750, Requirement("shiny_cards", 5),
    ),
    AchievementDefinition(
        "type_master_fire", "Fire Type Master", "Collect 25 different Fire-type Pokémon cards", "🔥",
        _SPECIAL, _RARE, 200, Requirement("fire_type_cards", 25),
    ),
    AchievementDefinition(
        "type_master_water", "Water Type Master", "Collect 25 different Water-type Pokémon cards", "💧",
        _SPECIAL, _RARE, 200, Requirement("water_type_cards", 25),
    ),
    AchievementDefinition(
        "type_master_electric", "Electric Type Master",
        "Collect 25 different Electric-type Pokémon cards", "⚡",
        _SPECIAL, _RARE, 200, Requirement("electric_type_cards", 25),
    ),
    AchievementDefinition(
        "rainbow_collector", "Rainbow Collector", "Collect cards from all 18 Pokémon types", "🌈",
        _SPECIAL, _LEGENDARY, 1000, Requirement("all_types_collected", True),
    ),
    AchievementDefinition(
        "generation_1_master", "Kanto Champion", "Collect 50 different Generation 1 Pokémon cards", "🎮",
        _SPECIAL, _EPIC, 400, Requirement("gen1_cards", 50),
    ),
    AchievementDefinition(
        "generation_2_master", "Johto Champion", "Collect 30 different Generation 2 Pokémon cards", "🏆",
        _SPECIAL, _EPIC, 350, Requirement("gen2_cards", 30),
    ),
    AchievementDefinition(
        "retro_collector", "Retro Collector", "Collect cards from the Base Set, Jungle, and Fossil sets", "🏛️",
        _SPECIAL, _LEGENDARY, 800, Requirement("classic_sets_complete", True),
    ),
    AchievementDefinition(
        "modern_collector", "Modern Collector", "Collect cards from 10 different modern sets (2020+)", "🚀",
        _SPECIAL, _EPIC, 500, Requirement("modern_sets", 10),
    ),
    AchievementDefinition(
        "holographic_enthusiast", "Holographic Enthusiast", "Collect 20 different holographic cards", "💫",
        _SPECIAL, _RARE, 300, Requirement("holo_cards", 20),
    ),
    AchievementDefinition(
        "first_edition_collector", "First Edition Collector",
        "Collect 10 different First Edition cards", "1️⃣",
        _SPECIAL, _EPIC, 600, Requirement("first_edition_cards", 10),
    ),
    AchievementDefinition(
        "shadowless_hunter", "Shadowless Hunter", "Collect 5 different Shadowless cards", "👻",
        _SPECIAL, _LEGENDARY, 1000, Requirement("shadowless_cards", 5),
    ),
    AchievementDefinition(
        "promo_collector", "Promo Collector", "Collect 15 different promotional cards", "🎁",
        _SPECIAL, _RARE, 400, Requirement("promo_cards", 15),
    ),
    AchievementDefinition(
        "full_art_fan", "Full Art Fan", "Collect 10 different Full Art cards", "🖼️",
        _SPECIAL, _EPIC, 500, Requirement("full_art_cards", 10),
    ),
    AchievementDefinition(
        "secret_rare_hunter", "Secret Rare Hunter", "Collect 5 different Secret Rare cards", "🔐",
        _SPECIAL, _LEGENDARY, 1200, Requirement("secret_rare_cards", 5),
    ),
    AchievementDefinition(
        "alt_art_collector", "Alt Art Collector", "Collect 8 different Alternate Art cards", "🎨",
        _SPECIAL, _EPIC, 700, Requirement("alt_art_cards", 8),
    ),
    AchievementDefinition(
        "vintage_master", "Vintage Master", "Collect cards from 5 different vintage sets (pre-2010)", "📜",
        _SPECIAL, _LEGENDARY, 900, Requirement("vintage_sets", 5),
    ),
    AchievementDefinition(
        "completionist", "Set Completionist", "Complete your first full set", "💯",
        _SPECIAL, _LEGENDARY, 1500, Requirement("completed_sets", 1),
    ),
    AchievementDefinition(
        "super_completionist", "Super Completionist", "Complete 3 different full sets", "🏆",
        _SPECIAL, _LEGENDARY, 3000, Requirement("completed_sets", 3),
    ),
    AchievementDefinition(
        "lucky_number_777", "Lucky Number 777", "Have exactly 777 total cards in your collection", "🍀",
        _SPECIAL, _RARE, 777, Requirement("exact_cards", 777),
    ),
    AchievementDefinition(
        "power_of_ten", "Power of Ten", "Have exactly 1000 unique cards in your collection", "💪",
        _SPECIAL, _EPIC, 1000, Requirement("exact_unique_cards", 1000),
    ),
    AchievementDefinition(
        "holiday_collector", "Holiday Collector", "Collect special holiday-themed cards", "🎄",
        _SPECIAL, _RARE, 300, Requirement("holiday_cards", 5),
    ),

    # -----------------------------------------------------------------------
    # Login streaks
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "first_login", "Welcome Back!", "Log in to the platform", "👋",
        _SPECIAL, _COMMON, 5, Requirement("login_streak", 1),
    ),
    AchievementDefinition(
        "login_streak_3", "Getting Into the Habit", "Log in for 3 consecutive days", "📅",
        _SPECIAL, _COMMON, 25, Requirement("login_streak", 3),
    ),
    AchievementDefinition(
        "login_streak_7", "Weekly Warrior", "Log in for 7 consecutive days", "🗓️",
        _SPECIAL, _RARE, 100, Requirement("login_streak", 7),
    ),
    AchievementDefinition(
        "login_streak_30", "Monthly Dedication", "Log in for 30 consecutive days", "📆",
        _SPECIAL, _EPIC, 500, Requirement("login_streak", 30),
    ),
    AchievementDefinition(
        "login_streak_100", "Century Commitment", "Log in for 100 consecutive days", "💯",
        _SPECIAL, _LEGENDARY, 2000, Requirement("login_streak", 100),
    ),

    # -----------------------------------------------------------------------
    # Collection / trade streaks
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "collection_streak_3", "Collection Enthusiast",
        "Add cards to your collection for 3 consecutive days", "🎴",
        _COLLECTION, _COMMON, 50, Requirement("collection_streak", 3),
    ),
    AchievementDefinition(
        "collection_streak_7", "Daily Collector",
        "Add cards to your collection for 7 consecutive days", "📚",
        _COLLECTION, _RARE, 150, Requirement("collection_streak", 7),
    ),
    AchievementDefinition(
        "collection_streak_14", "Fortnight Finder",
        "Add cards to your collection for 14 consecutive days", "🔍",
        _COLLECTION, _EPIC, 300, Requirement("collection_streak", 14),
    ),
    AchievementDefinition(
        "trade_streak_3", "Trading Rookie", "Complete trades for 3 consecutive days", "🤝",
        _TRADING, _COMMON, 75, Requirement("trade_streak", 3),
    ),
    AchievementDefinition(
        "trade_streak_7", "Weekly Trader", "Complete trades for 7 consecutive days", "📈",
        _TRADING, _RARE, 200, Requirement("trade_streak", 7),
    ),

    # -----------------------------------------------------------------------
    # Activity in the last 30 days
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "daily_active_7", "Active Week", "Be active for 7 days (not necessarily consecutive)", "⚡",
        _SPECIAL, _COMMON, 50, Requirement("active_days_30", 7),
    ),
    AchievementDefinition(
        "daily_active_15", "Consistent Collector", "Be active for 15 days in the last 30 days", "🎯",
        _SPECIAL, _RARE, 150, Requirement("active_days_30", 15),
    ),
    AchievementDefinition(
        "daily_active_25", "Almost Perfect Month", "Be active for 25 days in the last 30 days", "⭐",
        _SPECIAL, _EPIC, 400, Requirement("active_days_30", 25),
    ),
    AchievementDefinition(
        "lightning_collector", "Lightning Collector", "Add 10+ cards to your collection in a single day", "⚡",
        _COLLECTION, _RARE, 100, Requirement("daily_cards_added", 10),
    ),
    AchievementDefinition(
        "trading_frenzy", "Trading Frenzy", "Complete 5+ trades in a single day", "🔥",
        _TRADING, _EPIC, 400, Requirement("daily_trades_completed", 5),
    ),

    # -----------------------------------------------------------------------
    # Hidden
    # -----------------------------------------------------------------------
    AchievementDefinition(
        "early_adopter", "Early Adopter", "Join the platform in its first month", "🚀",
        _SPECIAL, _LEGENDARY, 500, Requirement("early_adopter", True), hidden=True,
    ),
)


class AchievementCatalog:
    """
    Ordered, read-only view over a sequence of definitions.

    The type-key index is built once at construction; duplicate keys are a
    programming error and raise ValueError.
    """

    def __init__(self, definitions: Sequence[AchievementDefinition]) -> None:
        self._definitions: tuple[AchievementDefinition, ...] = tuple(definitions)
        self._index: dict[str, AchievementDefinition] = {}
        for definition in self._definitions:
            if definition.type in self._index:
                raise ValueError(f"Duplicate achievement type: {definition.type}")
            self._index[definition.type] = definition

    def get(self, achievement_type: str) -> AchievementDefinition | None:
        return self._index.get(achievement_type)

    def by_category(self, category: AchievementCategory | str) -> list[AchievementDefinition]:
        return [d for d in self._definitions if d.category == category]

    def by_rarity(self, rarity: AchievementRarity | str) -> list[AchievementDefinition]:
        return [d for d in self._definitions if d.rarity == rarity]

    def visible(self) -> list[AchievementDefinition]:
        return [d for d in self._definitions if not d.hidden]

    def __iter__(self) -> Iterator[AchievementDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, achievement_type: object) -> bool:
        return achievement_type in self._index


ACHIEVEMENT_CATALOG = AchievementCatalog(ACHIEVEMENT_DEFINITIONS)
