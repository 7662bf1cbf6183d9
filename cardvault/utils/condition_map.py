"""
Card Vault — Condition Multiplier Table

Maps a physical condition grade to the factor applied to a card's market
price. Grades are the ones a user picks when adding a card:

    | Grade             | Multiplier |
    |:------------------|:-----------|
    | mint              | 1.00       |
    | near_mint         | 0.95       |
    | lightly_played    | 0.85       |
    | moderately_played | 0.70       |
    | heavily_played    | 0.50       |
    | damaged           | 0.30       |

Anything else (missing, misspelled, legacy grade codes) is valued as
near mint.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from cardvault.config import CardCondition, settings

logger = structlog.get_logger(__name__)


def _condition_table() -> dict[CardCondition, Decimal]:
    return {
        CardCondition.MINT: settings.CONDITION_MULTIPLIER_MINT,
        CardCondition.NEAR_MINT: settings.CONDITION_MULTIPLIER_NEAR_MINT,
        CardCondition.LIGHTLY_PLAYED: settings.CONDITION_MULTIPLIER_LIGHTLY_PLAYED,
        CardCondition.MODERATELY_PLAYED: settings.CONDITION_MULTIPLIER_MODERATELY_PLAYED,
        CardCondition.HEAVILY_PLAYED: settings.CONDITION_MULTIPLIER_HEAVILY_PLAYED,
        CardCondition.DAMAGED: settings.CONDITION_MULTIPLIER_DAMAGED,
    }


def parse_condition(condition: CardCondition | str | None) -> CardCondition | None:
    """
    Normalise a stored condition value to a CardCondition.

    Accepts enum members, canonical values ("near_mint") and the display
    spellings the UI sometimes stores ("Near Mint", "near-mint").

    Returns:
        The matching CardCondition, or None if the value is not a known grade.
    """
    if condition is None:
        return None
    if isinstance(condition, CardCondition):
        return condition

    key = str(condition).strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return CardCondition(key)
    except ValueError:
        return None


def condition_multiplier(condition: CardCondition | str | None) -> Decimal:
    """
    Look up the value multiplier for a condition grade.

    Args:
        condition: Grade as enum, string, or None.

    Returns:
        Decimal multiplier. Unknown grades return CONDITION_MULTIPLIER_DEFAULT.
    """
    grade = parse_condition(condition)
    if grade is None:
        logger.debug(
            "condition_unknown_defaulted",
            condition=condition,
            multiplier=str(settings.CONDITION_MULTIPLIER_DEFAULT),
            source="condition_map",
        )
        return settings.CONDITION_MULTIPLIER_DEFAULT

    return _condition_table()[grade]
