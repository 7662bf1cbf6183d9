"""
Card Vault — User Achievement Model

One row per unlocked achievement. Rows are written and deleted only by the
achievement check's unlock diff.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import INTEGER, JSON, TIMESTAMP, String, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from cardvault.models.base import Base


class UserAchievement(Base):
    """An achievement a user currently holds."""

    __tablename__ = "user_achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_type", name="uq_user_achievement_type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique unlock row identifier",
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Achievement holder",
    )
    achievement_type: Mapped[str] = mapped_column(
        String,
        nullable=False,
        comment="Catalog type key (e.g., 'collector_50'), never renamed",
    )
    points: Mapped[int] = mapped_column(
        INTEGER,
        default=0,
        server_default="0",
        comment="Point value at unlock time",
    )
    achievement_data: Mapped[dict[str, Any] | None] = mapped_column(
        JSON,
        nullable=True,
        comment="Snapshot of name/icon/rarity at unlock time",
    )
    unlocked_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        comment="Unlock timestamp",
    )

    def __repr__(self) -> str:
        return (
            f"<UserAchievement user_id={self.user_id!r} "
            f"achievement_type={self.achievement_type!r} points={self.points!r}>"
        )
