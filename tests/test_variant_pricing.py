"""
Card Vault — Variant Price Resolver Tests

Fallback chains per variant, price kinds, and the zero-means-missing rule.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from cardvault.config import CardVariant, PriceKind, settings
from cardvault.engine.types import Item, PriceQuotes
from cardvault.engine.variant_pricing import resolve_price


def _item(**prices: Decimal | None) -> Item:
    return Item(card_id="base1-4", name="Charizard", prices=PriceQuotes(**prices))


STANDARD = dict(
    cardmarket_avg=Decimal("100.00"),
    cardmarket_low=Decimal("80.00"),
    cardmarket_trend=Decimal("110.00"),
)


class TestStandardVariants:
    """normal / holo / patterns read the standard quote."""

    @pytest.mark.parametrize(
        "variant",
        [CardVariant.NORMAL, CardVariant.HOLO, CardVariant.POKEBALL_PATTERN, CardVariant.MASTERBALL_PATTERN],
    )
    def test_standard_quote(self, variant: CardVariant) -> None:
        assert resolve_price(_item(**STANDARD), variant) == Decimal("100.00")

    @pytest.mark.parametrize(
        "kind, expected",
        [(PriceKind.AVERAGE, "100.00"), (PriceKind.LOW, "80.00"), (PriceKind.TREND, "110.00")],
    )
    def test_price_kinds(self, kind: PriceKind, expected: str) -> None:
        assert resolve_price(_item(**STANDARD), CardVariant.NORMAL, kind) == Decimal(expected)

    def test_price_kind_as_string(self) -> None:
        assert resolve_price(_item(**STANDARD), "normal", "trend") == Decimal("110.00")

    def test_missing_quote_is_zero(self) -> None:
        assert resolve_price(_item(), CardVariant.NORMAL) == Decimal("0")

    def test_unknown_variant_priced_as_standard(self) -> None:
        assert resolve_price(_item(**STANDARD), "gold_star_stamped") == Decimal("100.00")

    def test_none_variant_priced_as_standard(self) -> None:
        assert resolve_price(_item(**STANDARD), None) == Decimal("100.00")


class TestReverseHolo:
    """Reverse quote first, standard quote as fallback."""

    def test_reverse_quote_used(self) -> None:
        item = _item(**STANDARD, cardmarket_reverse_holo_avg=Decimal("15.00"))
        assert resolve_price(item, CardVariant.REVERSE_HOLO) == Decimal("15.00")

    def test_reverse_low_for_low_kind(self) -> None:
        item = _item(**STANDARD, cardmarket_reverse_holo_low=Decimal("12.00"))
        assert resolve_price(item, CardVariant.REVERSE_HOLO, PriceKind.LOW) == Decimal("12.00")

    def test_missing_reverse_falls_back_to_standard(self) -> None:
        """Without a reverse quote the value is exactly the standard value."""
        item = _item(**STANDARD)
        assert resolve_price(item, CardVariant.REVERSE_HOLO) == resolve_price(item, CardVariant.NORMAL)

    def test_zero_reverse_quote_treated_as_missing(self) -> None:
        item = _item(**STANDARD, cardmarket_reverse_holo_avg=Decimal("0"))
        assert resolve_price(item, CardVariant.REVERSE_HOLO) == Decimal("100.00")


class TestFirstEdition:
    """Cardmarket 1st-ed → TCGPlayer holofoil → TCGPlayer normal → multiplier."""

    def test_cardmarket_first_edition_quote(self) -> None:
        item = _item(
            **STANDARD,
            cardmarket_1st_edition_avg=Decimal("900.00"),
            tcgplayer_1st_edition_holofoil_market=Decimal("1000.00"),
        )
        assert resolve_price(item, CardVariant.FIRST_EDITION) == Decimal("900.00")

    def test_tcgplayer_holofoil_converted(self) -> None:
        item = _item(
            **STANDARD,
            tcgplayer_1st_edition_holofoil_market=Decimal("1000.00"),
            tcgplayer_1st_edition_normal_market=Decimal("500.00"),
        )
        assert resolve_price(item, CardVariant.FIRST_EDITION) == Decimal("850.00")

    def test_tcgplayer_normal_converted(self) -> None:
        item = _item(**STANDARD, tcgplayer_1st_edition_normal_market=Decimal("200.00"))
        assert resolve_price(item, CardVariant.FIRST_EDITION) == Decimal("170.00")

    def test_multiplier_estimate(self) -> None:
        item = _item(**STANDARD)
        expected = Decimal("100.00") * settings.FIRST_EDITION_MULTIPLIER
        assert resolve_price(item, CardVariant.FIRST_EDITION) == expected
        assert expected == Decimal("250.00")

    def test_multiplier_uses_requested_kind(self) -> None:
        item = _item(**STANDARD)
        assert resolve_price(item, CardVariant.FIRST_EDITION, PriceKind.LOW) == Decimal("200.00")

    def test_zero_quotes_skipped(self) -> None:
        item = _item(
            **STANDARD,
            cardmarket_1st_edition_avg=Decimal("0"),
            tcgplayer_1st_edition_holofoil_market=Decimal("0"),
            tcgplayer_1st_edition_normal_market=Decimal("40.00"),
        )
        assert resolve_price(item, CardVariant.FIRST_EDITION) == Decimal("34.00")

    def test_overrides(self) -> None:
        item = _item(**STANDARD)
        price = resolve_price(item, "1st_edition", first_edition_multiplier=Decimal("3"))
        assert price == Decimal("300.00")

        item = _item(tcgplayer_1st_edition_holofoil_market=Decimal("10"))
        price = resolve_price(item, "1st_edition", usd_to_eur_rate=Decimal("0.5"))
        assert price == Decimal("5.0")

    def test_no_data_at_all_is_zero(self) -> None:
        assert resolve_price(_item(), CardVariant.FIRST_EDITION) == Decimal("0")


class TestCorruptQuotes:
    """Negative and non-finite quotes count as missing; resolution never raises."""

    def test_negative_tcgplayer_quote_skipped(self) -> None:
        item = _item(**STANDARD, tcgplayer_1st_edition_holofoil_market=Decimal("-5"))
        assert resolve_price(item, CardVariant.FIRST_EDITION) == Decimal("250.00")

    def test_negative_quote_falls_to_next_tcgplayer_quote(self) -> None:
        item = _item(
            tcgplayer_1st_edition_holofoil_market=Decimal("-5"),
            tcgplayer_1st_edition_normal_market=Decimal("20"),
        )
        assert resolve_price(item, CardVariant.FIRST_EDITION) == Decimal("17.00")

    @pytest.mark.parametrize("bad", [Decimal("NaN"), Decimal("Infinity"), Decimal("-Infinity")])
    def test_non_finite_standard_quote_is_zero(self, bad: Decimal) -> None:
        assert resolve_price(_item(cardmarket_avg=bad), CardVariant.NORMAL) == Decimal("0")

    def test_nan_reverse_quote_falls_back(self) -> None:
        item = _item(**STANDARD, cardmarket_reverse_holo_avg=Decimal("NaN"))
        assert resolve_price(item, CardVariant.REVERSE_HOLO) == Decimal("100.00")

    def test_nan_first_edition_quote_skipped(self) -> None:
        item = _item(**STANDARD, cardmarket_1st_edition_avg=Decimal("NaN"))
        assert resolve_price(item, CardVariant.FIRST_EDITION) == Decimal("250.00")
