"""
Card Vault — User Collection Model

One row per (user, card, variant, condition). Rows for the same card are
never merged; the aggregator groups them at read time.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    INTEGER,
    TIMESTAMP,
    CheckConstraint,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from cardvault.config import CardCondition, CardVariant
from cardvault.models.base import Base


class UserCollection(Base):
    """A user's holding of one card in one variant and condition."""

    __tablename__ = "user_collections"
    __table_args__ = (
        UniqueConstraint("user_id", "card_id", "variant", "condition", name="uq_user_collection_entry"),
        CheckConstraint("quantity >= 1", name="ck_user_collection_quantity_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique collection row identifier",
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Owner of this row",
    )
    card_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("cards.id"),
        nullable=False,
        comment="Card held",
    )
    variant: Mapped[str] = mapped_column(
        String,
        default=CardVariant.NORMAL.value,
        server_default=CardVariant.NORMAL.value,
        comment="Print variant: normal, holo, reverse_holo, pokeball_pattern, masterball_pattern, 1st_edition",
    )
    condition: Mapped[str] = mapped_column(
        String,
        default=CardCondition.NEAR_MINT.value,
        server_default=CardCondition.NEAR_MINT.value,
        comment="Condition grade: mint ... damaged",
    )
    quantity: Mapped[int] = mapped_column(
        INTEGER,
        default=1,
        server_default="1",
        comment="Copies held (>= 1)",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        comment="When the row was added (acquisition time)",
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        comment="Last modification",
    )

    def __repr__(self) -> str:
        return (
            f"<UserCollection user_id={self.user_id!r} card_id={self.card_id!r} "
            f"variant={self.variant!r} condition={self.condition!r} quantity={self.quantity!r}>"
        )
