"""
Card Vault — Card Set Model

One printed expansion (Base Set, Jungle, Scarlet & Violet...). The printed
total drives set-completion progress; the release date drives the
modern/vintage set counters.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import DATE, INTEGER, String
from sqlalchemy.orm import Mapped, mapped_column

from cardvault.models.base import Base


class CardSet(Base):
    """Set reference data, keyed by the pokemontcg.io set id (e.g. "base1")."""

    __tablename__ = "sets"

    id: Mapped[str] = mapped_column(
        String,
        primary_key=True,
        comment="pokemontcg.io set id (e.g., 'base1', 'sv1')",
    )
    name: Mapped[str] = mapped_column(
        String, nullable=False, comment="Set name (e.g., 'Base Set')"
    )
    total_cards: Mapped[int] = mapped_column(
        INTEGER,
        default=0,
        server_default="0",
        comment="Printed total, denominator for set completion",
    )
    release_date: Mapped[date | None] = mapped_column(
        DATE,
        nullable=True,
        comment="Release date: modern (2020+) / vintage (pre-2010) counters",
    )

    def __repr__(self) -> str:
        return f"<CardSet id={self.id!r} name={self.name!r} total_cards={self.total_cards!r}>"
