"""
Card Vault — Variant Price Resolver

Returns the EUR price for one card in one print variant.

Fallback chain per variant:
    | Variant                     | Source                                           |
    |:----------------------------|:-------------------------------------------------|
    | normal, holo                | Cardmarket standard quote                        |
    | reverse_holo                | Cardmarket reverse quote → standard quote        |
    | pokeball/masterball pattern | Cardmarket standard quote (no pattern market)    |
    | 1st_edition                 | Cardmarket 1st-ed quote → TCGPlayer 1st-ed       |
    |                             | holofoil (USD→EUR) → 1st-ed normal (USD→EUR) →   |
    |                             | FIRST_EDITION_MULTIPLIER × standard quote        |

A quote of None or 0 counts as missing. Missing data degrades to the next
step or to 0; this module never raises on absent prices.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from cardvault.config import CardVariant, PriceKind, settings
from cardvault.engine.types import Item, PriceQuotes
from cardvault.utils.forex import convert_usd_to_eur

logger = structlog.get_logger(__name__)

_ZERO = Decimal("0")


def parse_variant(variant: CardVariant | str | None) -> CardVariant | None:
    """Normalise a stored variant tag; None if it is not a known variant."""
    if variant is None:
        return CardVariant.NORMAL
    if isinstance(variant, CardVariant):
        return variant
    try:
        return CardVariant(str(variant).strip().lower())
    except ValueError:
        return None


def parse_price_kind(price_kind: PriceKind | str) -> PriceKind:
    if isinstance(price_kind, PriceKind):
        return price_kind
    try:
        return PriceKind(str(price_kind).strip().lower())
    except ValueError:
        logger.warning("price_kind_unknown_defaulted", price_kind=price_kind, source="variant_pricing")
        return PriceKind.AVERAGE


def _quote(value: Decimal | None) -> Decimal | None:
    """Treat zero, negative and NaN/Infinity quotes the same as a missing one."""
    if value is None or not value.is_finite() or value <= _ZERO:
        return None
    return value


def standard_price(prices: PriceQuotes, price_kind: PriceKind) -> Decimal:
    """Cardmarket normal/holo quote for price_kind, 0 if absent."""
    if price_kind is PriceKind.LOW:
        value = prices.cardmarket_low
    elif price_kind is PriceKind.TREND:
        value = prices.cardmarket_trend
    else:
        value = prices.cardmarket_avg
    return _quote(value) or _ZERO


def reverse_holo_price(prices: PriceQuotes, price_kind: PriceKind) -> Decimal:
    """Cardmarket reverse holo quote, falling back to the standard quote."""
    if price_kind is PriceKind.LOW:
        value = prices.cardmarket_reverse_holo_low
    elif price_kind is PriceKind.TREND:
        value = prices.cardmarket_reverse_holo_trend
    else:
        value = prices.cardmarket_reverse_holo_avg
    return _quote(value) or standard_price(prices, price_kind)


def first_edition_price(
    prices: PriceQuotes,
    price_kind: PriceKind,
    multiplier: Decimal | None = None,
    usd_to_eur_rate: Decimal | None = None,
) -> Decimal:
    """
    1st Edition price: dedicated quote when one exists, estimate otherwise.

    TCGPlayer only publishes a market price for 1st Edition prints, so the
    USD quotes are used for every price_kind.

    Args:
        prices: The card's price quotes.
        price_kind: average / low / trend.
        multiplier: Estimate factor over the standard price
            (default: settings.FIRST_EDITION_MULTIPLIER).
        usd_to_eur_rate: Conversion for TCGPlayer quotes
            (default: settings.USD_TO_EUR_RATE).
    """
    if price_kind is PriceKind.LOW:
        cardmarket = prices.cardmarket_1st_edition_low
    elif price_kind is PriceKind.TREND:
        cardmarket = prices.cardmarket_1st_edition_trend
    else:
        cardmarket = prices.cardmarket_1st_edition_avg
    if _quote(cardmarket) is not None:
        return cardmarket

    for usd_quote in (
        prices.tcgplayer_1st_edition_holofoil_market,
        prices.tcgplayer_1st_edition_normal_market,
    ):
        if _quote(usd_quote) is not None:
            return convert_usd_to_eur(usd_quote, usd_to_eur_rate)

    factor = multiplier if multiplier is not None else settings.FIRST_EDITION_MULTIPLIER
    return standard_price(prices, price_kind) * factor


def resolve_price(
    item: Item,
    variant: CardVariant | str | None,
    price_kind: PriceKind | str = PriceKind.AVERAGE,
    first_edition_multiplier: Decimal | None = None,
    usd_to_eur_rate: Decimal | None = None,
) -> Decimal:
    """
    Resolve the EUR price of one unit of `item` printed as `variant`.

    Args:
        item: Catalog entry carrying the price quotes.
        variant: Variant tag (enum or stored string). Unknown tags are
            priced as the standard print.
        price_kind: average / low / trend.
        first_edition_multiplier: Override for the 1st Edition estimate factor.
        usd_to_eur_rate: Override for the TCGPlayer conversion rate.

    Returns:
        Price in EUR (Decimal, >= 0).
    """
    kind = parse_price_kind(price_kind)
    parsed = parse_variant(variant)
    prices = item.prices

    if parsed is None:
        logger.debug(
            "variant_unknown_priced_as_standard",
            card_id=item.card_id,
            variant=variant,
            source="variant_pricing",
        )
        return standard_price(prices, kind)

    if parsed is CardVariant.REVERSE_HOLO:
        return reverse_holo_price(prices, kind)
    if parsed is CardVariant.FIRST_EDITION:
        return first_edition_price(
            prices,
            kind,
            multiplier=first_edition_multiplier,
            usd_to_eur_rate=usd_to_eur_rate,
        )

    # normal, holo and the pattern prints have no market of their own
    return standard_price(prices, kind)
