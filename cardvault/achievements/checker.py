"""
Card Vault — Achievement Evaluator

Handler-registry evaluation of the achievement catalog. Each requirement
kind maps to a pure handler (target, ctx) -> bool; the evaluator runs every
definition against one ExtendedStats snapshot and diffs the satisfied set
against what the user already has.

Achievements are re-derived from scratch on each call, so an achievement
whose requirement stops holding is revoked (unless its category is sticky).

This module is pure calculation: no database I/O.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable
from decimal import Decimal, InvalidOperation
from functools import partial
from typing import NamedTuple

import structlog

from cardvault.achievements.context import ExtendedStats
from cardvault.achievements.definitions import (
    ACHIEVEMENT_CATALOG,
    EXACT_KINDS,
    FLAG_KINDS,
    THRESHOLD_KINDS,
    AchievementCatalog,
    AchievementDefinition,
)
from cardvault.config import AchievementCategory, settings

logger = structlog.get_logger(__name__)


def _numeric_target(target: object) -> int | Decimal:
    # bool is an int subclass; True is not a valid count
    if isinstance(target, bool) or not isinstance(target, (int, Decimal)):
        raise TypeError(f"numeric target expected, got {target!r}")
    return target


# ---------------------------------------------------------------------------
# Requirement handlers: pure functions (target, ctx) → bool
# ---------------------------------------------------------------------------

def _check_threshold(kind: str, target: object, ctx: ExtendedStats) -> bool:
    """stat >= target."""
    return ctx.stat(kind) >= _numeric_target(target)


def _check_exact(kind: str, target: object, ctx: ExtendedStats) -> bool:
    """stat == target."""
    return ctx.stat(kind) == _numeric_target(target)


def _check_flag(kind: str, target: object, ctx: ExtendedStats) -> bool:
    """Flag is set. The only meaningful target is True."""
    if target is not True:
        raise TypeError(f"flag target must be True, got {target!r}")
    return ctx.flag(kind)


# ---------------------------------------------------------------------------
# Handler registry
# ---------------------------------------------------------------------------
RequirementHandler = Callable[[object, ExtendedStats], bool]

REQUIREMENT_HANDLERS: dict[str, RequirementHandler] = {
    **{kind: partial(_check_threshold, kind) for kind in THRESHOLD_KINDS},
    **{kind: partial(_check_exact, kind) for kind in EXACT_KINDS},
    **{kind: partial(_check_flag, kind) for kind in FLAG_KINDS},
}


def is_satisfied(definition: AchievementDefinition, ctx: ExtendedStats) -> bool:
    """
    Evaluate one definition against the context.

    Malformed requirements (unknown kind, missing target, wrong target
    shape) fail closed: logged and treated as unsatisfied.
    """
    kind, target = definition.requirement
    handler = REQUIREMENT_HANDLERS.get(kind)
    if handler is None or target is None:
        logger.warning(
            "achievement_requirement_invalid",
            achievement_type=definition.type,
            kind=kind,
            target=target,
            reason="unknown_kind" if handler is None else "missing_target",
            source="checker",
        )
        return False

    try:
        return bool(handler(target, ctx))
    except (TypeError, InvalidOperation) as exc:
        logger.warning(
            "achievement_requirement_invalid",
            achievement_type=definition.type,
            kind=kind,
            target=repr(target),
            reason=str(exc),
            source="checker",
        )
        return False


class EvaluationResult(NamedTuple):
    """Achievement type keys, each tuple in catalog order."""
    newly_unlocked: tuple[str, ...]
    revoked: tuple[str, ...]
    still_unlocked: tuple[str, ...]
    currently_satisfied: tuple[str, ...]


def evaluate_achievements(
    ctx: ExtendedStats,
    previously_unlocked: Iterable[str],
    catalog: AchievementCatalog | None = None,
    sticky_categories: Collection[AchievementCategory | str] | None = None,
) -> EvaluationResult:
    """
    Evaluate the whole catalog and diff against the user's unlocked set.

    Args:
        ctx: ExtendedStats snapshot for the user.
        previously_unlocked: Type keys the user currently holds.
        catalog: Definitions to evaluate (default: ACHIEVEMENT_CATALOG).
        sticky_categories: Categories never revoked once unlocked
            (default: settings.ACHIEVEMENT_STICKY_CATEGORIES).

    Returns:
        EvaluationResult. Keys held by the user but absent from the catalog
        are neither revoked nor reported as still unlocked.
    """
    catalog = catalog if catalog is not None else ACHIEVEMENT_CATALOG
    sticky = set(sticky_categories if sticky_categories is not None else settings.ACHIEVEMENT_STICKY_CATEGORIES)
    previous = set(previously_unlocked)

    unknown = sorted(key for key in previous if key not in catalog)
    if unknown:
        logger.warning(
            "achievement_unlocked_not_in_catalog",
            achievement_types=unknown,
            source="checker",
        )

    newly_unlocked: list[str] = []
    revoked: list[str] = []
    still_unlocked: list[str] = []
    satisfied: list[str] = []

    for definition in catalog:
        held = definition.type in previous
        if is_satisfied(definition, ctx):
            satisfied.append(definition.type)
            (still_unlocked if held else newly_unlocked).append(definition.type)
        elif held:
            if definition.category in sticky:
                still_unlocked.append(definition.type)
            else:
                revoked.append(definition.type)

    if newly_unlocked or revoked:
        logger.info(
            "achievements_evaluated",
            newly_unlocked=newly_unlocked,
            revoked=revoked,
            satisfied_count=len(satisfied),
            source="checker",
        )

    return EvaluationResult(
        newly_unlocked=tuple(newly_unlocked),
        revoked=tuple(revoked),
        still_unlocked=tuple(still_unlocked),
        currently_satisfied=tuple(satisfied),
    )
