"""
Card Vault — Valuation Function

    unit_value     = resolve_price(item, variant, average) × condition_multiplier(condition)
    extended_value = unit_value × quantity

Values are not rounded here; display code quantizes.
"""

from __future__ import annotations

from decimal import Decimal

from cardvault.config import PriceKind
from cardvault.engine.types import Item, OwnershipRecord
from cardvault.engine.variant_pricing import resolve_price
from cardvault.utils.condition_map import condition_multiplier

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def unit_value(record: OwnershipRecord, item: Item | None) -> Decimal:
    """
    EUR value of a single copy described by `record`.

    Args:
        record: Ownership row (variant + condition are read).
        item: Catalog entry, or None if the card is unknown.

    Returns:
        Decimal >= 0. An unknown card is worth 0.
    """
    if item is None:
        return _ZERO
    price = resolve_price(item, record.variant, PriceKind.AVERAGE)
    return price * condition_multiplier(record.condition)


def extended_value(record: OwnershipRecord, item: Item | None) -> Decimal:
    """unit_value × quantity."""
    return unit_value(record, item) * record.quantity


def safe_average(total: Decimal, count: int) -> Decimal:
    """total / count, or 0 when count is 0."""
    if count <= 0:
        return _ZERO
    return total / count


def safe_percentage(part: int | Decimal, whole: int | Decimal) -> Decimal:
    """part as a percentage of whole, or 0 when whole is 0."""
    if not whole:
        return _ZERO
    return Decimal(part) * _HUNDRED / Decimal(whole)
