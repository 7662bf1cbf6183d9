"""
Card Vault — Achievement Progress & Summary

Display-side views over the catalog: how far a user is from each
achievement, and totals per category / rarity.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from decimal import Decimal
from typing import NamedTuple

from cardvault.achievements.context import ExtendedStats
from cardvault.achievements.definitions import (
    ACHIEVEMENT_CATALOG,
    FLAG_KINDS,
    AchievementCatalog,
    AchievementDefinition,
)
from cardvault.engine.types import UnlockedAchievement
from cardvault.engine.valuation import safe_percentage

_HUNDRED = Decimal("100")
NEARLY_COMPLETE_PERCENTAGE = Decimal("80")
RECENT_UNLOCKS_LIMIT = 5


class AchievementProgress(NamedTuple):
    achievement_type: str
    current: int | Decimal
    required: int | Decimal
    percentage: Decimal
    unlocked: bool
    definition: AchievementDefinition


class CategoryTally(NamedTuple):
    unlocked: int
    total: int


class AchievementSummary(NamedTuple):
    total_achievements: int
    unlocked_achievements: int
    total_points: int
    completion_percentage: Decimal
    category_stats: dict[str, CategoryTally]
    rarity_stats: dict[str, CategoryTally]
    recent_unlocks: list[UnlockedAchievement]


def required_value(definition: AchievementDefinition) -> int | Decimal:
    """Target as a number; flags count as 1."""
    kind, target = definition.requirement
    if kind in FLAG_KINDS:
        return 1
    if isinstance(target, bool) or not isinstance(target, (int, Decimal)):
        return 0
    return target


def current_value(definition: AchievementDefinition, ctx: ExtendedStats) -> int | Decimal:
    kind = definition.requirement.kind
    if kind in FLAG_KINDS:
        return 1 if ctx.flag(kind) else 0
    return max(ctx.stat(kind), 0)


def calculate_progress(
    ctx: ExtendedStats,
    unlocked: Collection[str],
    catalog: AchievementCatalog | None = None,
) -> list[AchievementProgress]:
    """
    Progress for every definition the user can see, in catalog order.

    Hidden achievements appear only once unlocked. Unlocked entries report
    current == required so the display never shows "378/100".
    """
    catalog = catalog if catalog is not None else ACHIEVEMENT_CATALOG
    held = set(unlocked)
    progress = []

    for definition in catalog:
        is_unlocked = definition.type in held
        if definition.hidden and not is_unlocked:
            continue

        required = required_value(definition)
        current = required if is_unlocked else current_value(definition, ctx)
        if required > 0:
            percentage = min(safe_percentage(current, required), _HUNDRED)
        else:
            percentage = _HUNDRED

        progress.append(
            AchievementProgress(
                achievement_type=definition.type,
                current=current,
                required=required,
                percentage=percentage,
                unlocked=is_unlocked,
                definition=definition,
            )
        )

    return progress


def nearly_complete(progress: Iterable[AchievementProgress]) -> list[AchievementProgress]:
    """Locked achievements at or above 80% progress."""
    return [
        entry for entry in progress
        if not entry.unlocked and entry.percentage >= NEARLY_COMPLETE_PERCENTAGE
    ]


def summarize_achievements(
    unlocked: Iterable[UnlockedAchievement],
    catalog: AchievementCatalog | None = None,
) -> AchievementSummary:
    """
    Totals for a user's unlocked achievements.

    Points come from the current catalog. Unlocks whose type is no longer
    in the catalog are ignored.
    """
    catalog = catalog if catalog is not None else ACHIEVEMENT_CATALOG
    known = [entry for entry in unlocked if entry.achievement_type in catalog]
    held = {entry.achievement_type for entry in known}
    visible = catalog.visible()

    category_stats: dict[str, CategoryTally] = {}
    rarity_stats: dict[str, CategoryTally] = {}
    for definition in visible:
        hit = 1 if definition.type in held else 0
        for tallies, key in ((category_stats, definition.category.value), (rarity_stats, definition.rarity.value)):
            previous = tallies.get(key, CategoryTally(0, 0))
            tallies[key] = CategoryTally(previous.unlocked + hit, previous.total + 1)

    total_points = sum(catalog.get(key).points for key in held)
    recent = sorted(known, key=lambda entry: entry.unlocked_at, reverse=True)[:RECENT_UNLOCKS_LIMIT]

    return AchievementSummary(
        total_achievements=len(visible),
        unlocked_achievements=len(held),
        total_points=total_points,
        completion_percentage=min(safe_percentage(len(held), len(visible)), _HUNDRED),
        category_stats=category_stats,
        rarity_stats=rarity_stats,
        recent_unlocks=recent,
    )
