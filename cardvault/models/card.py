"""
Card Vault — Card Model

Canonical card catalog with the price quotes the valuation engine reads.

Cardmarket columns are EUR, TCGPlayer columns are USD. A NULL or 0 price
means the source has no quote for that variant.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import DECIMAL as SA_DECIMAL, JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, MappedColumn, mapped_column, relationship

from cardvault.models.base import Base
from cardvault.models.card_set import CardSet


def _price(comment: str) -> MappedColumn[Decimal | None]:
    return mapped_column(SA_DECIMAL(10, 2), nullable=True, comment=comment)


class Card(Base):
    """
    Card catalog entry.

    The id uses the pokemontcg.io canonical format: "{set_code}-{card_number}"
    (e.g., "base1-4" = Base Set Charizard).
    """

    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(
        String,
        primary_key=True,
        comment="pokemontcg.io canonical ID: {set_code}-{card_number}",
    )
    name: Mapped[str] = mapped_column(
        String, nullable=False, comment="Card name (e.g., 'Charizard')"
    )
    rarity: Mapped[str | None] = mapped_column(
        String, nullable=True, comment="Rarity tag (e.g., 'Rare Holo', 'Secret Rare')"
    )
    types: Mapped[list[str] | None] = mapped_column(
        JSON, nullable=True, comment="Energy types (e.g., ['Fire'])"
    )
    subtypes: Mapped[list[str] | None] = mapped_column(
        JSON, nullable=True, comment="Subtypes (e.g., ['Stage 2'])"
    )
    national_pokedex_numbers: Mapped[list[int] | None] = mapped_column(
        JSON, nullable=True, comment="National Pokédex numbers for generation counters"
    )
    set_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("sets.id"),
        nullable=True,
        index=True,
        comment="Originating set",
    )

    # --- Cardmarket (EUR) ---
    cardmarket_avg_sell_price: Mapped[Decimal | None] = _price("Cardmarket average sell price")
    cardmarket_low_price: Mapped[Decimal | None] = _price("Cardmarket low price")
    cardmarket_trend_price: Mapped[Decimal | None] = _price("Cardmarket trend price")
    cardmarket_reverse_holo_sell: Mapped[Decimal | None] = _price("Cardmarket reverse holo average")
    cardmarket_reverse_holo_low: Mapped[Decimal | None] = _price("Cardmarket reverse holo low")
    cardmarket_reverse_holo_trend: Mapped[Decimal | None] = _price("Cardmarket reverse holo trend")
    cardmarket_1st_edition_avg: Mapped[Decimal | None] = _price("Cardmarket 1st Edition average")
    cardmarket_1st_edition_low: Mapped[Decimal | None] = _price("Cardmarket 1st Edition low")
    cardmarket_1st_edition_trend: Mapped[Decimal | None] = _price("Cardmarket 1st Edition trend")

    # --- TCGPlayer (USD) ---
    tcgplayer_1st_edition_holofoil_market: Mapped[Decimal | None] = _price(
        "TCGPlayer 1st Edition holofoil market (USD)"
    )
    tcgplayer_1st_edition_normal_market: Mapped[Decimal | None] = _price(
        "TCGPlayer 1st Edition normal market (USD)"
    )

    card_set: Mapped[CardSet | None] = relationship(lazy="joined")

    def __repr__(self) -> str:
        return f"<Card id={self.id!r} name={self.name!r} rarity={self.rarity!r}>"
