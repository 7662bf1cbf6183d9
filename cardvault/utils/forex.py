"""
Card Vault — Currency Conversion

Collection values are reported in EUR (Cardmarket is the primary price
source). The only USD quotations the engine reads are TCGPlayer
first-edition market prices, which are converted with a fixed rate from
config (USD_TO_EUR_RATE).

All money values use Decimal, never float.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

import structlog

from cardvault.config import settings

logger = structlog.get_logger(__name__)


def to_decimal(value: Any) -> Decimal | None:
    """
    Coerce a raw price value (float, int, str, Decimal) to Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not the binary
    expansion.

    Returns:
        Decimal, or None for None / unparseable / NaN / Infinity input.
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            logger.warning("price_value_unparseable", value=repr(value), source="forex")
            return None
    if not result.is_finite():
        logger.warning("price_value_not_finite", value=repr(value), source="forex")
        return None
    return result


def convert_usd_to_eur(
    amount_usd: Decimal,
    rate: Decimal | None = None,
) -> Decimal:
    """
    Convert a USD amount to EUR.

    Args:
        amount_usd: Amount in USD.
        rate: EUR per USD (default: settings.USD_TO_EUR_RATE, 0.85).

    Returns:
        Amount in EUR. Not rounded; callers quantize for display.

    Raises:
        ValueError: If amount_usd is negative or rate is zero/negative.
    """
    if amount_usd < Decimal("0"):
        raise ValueError(f"amount_usd must be non-negative, got {amount_usd}")

    effective_rate = rate if rate is not None else settings.USD_TO_EUR_RATE
    if effective_rate <= Decimal("0"):
        raise ValueError(f"rate must be positive, got {effective_rate}")

    result = amount_usd * effective_rate

    logger.debug(
        "forex_usd_to_eur",
        amount_usd=str(amount_usd),
        rate=str(effective_rate),
        result_eur=str(result),
        source="forex",
    )
    return result
