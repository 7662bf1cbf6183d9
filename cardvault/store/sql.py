"""
Card Vault — SQLAlchemy Record Store & Item Catalog

Reads user_collections / user_achievements / cards / sets and converts rows
into the engine's plain value types. Each call opens its own session from
the injected async_sessionmaker.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable, Sequence

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cardvault.achievements.definitions import AchievementDefinition
from cardvault.engine.types import (
    CardSet as CardSetInfo,
    Item,
    OwnershipRecord,
    PriceQuotes,
    UnlockedAchievement,
)
from cardvault.models.card import Card
from cardvault.models.user_achievement import UserAchievement
from cardvault.models.user_collection import UserCollection
from cardvault.utils.forex import to_decimal

logger = structlog.get_logger(__name__)


def card_to_item(card: Card) -> Item:
    """Convert a Card row (with its set loaded) to an engine Item."""
    card_set = None
    if card.card_set is not None:
        card_set = CardSetInfo(
            set_id=card.card_set.id,
            name=card.card_set.name,
            total_cards=card.card_set.total_cards or 0,
            release_date=card.card_set.release_date,
        )
    elif card.set_id:
        card_set = CardSetInfo(set_id=card.set_id)

    prices = PriceQuotes(
        cardmarket_avg=to_decimal(card.cardmarket_avg_sell_price),
        cardmarket_low=to_decimal(card.cardmarket_low_price),
        cardmarket_trend=to_decimal(card.cardmarket_trend_price),
        cardmarket_reverse_holo_avg=to_decimal(card.cardmarket_reverse_holo_sell),
        cardmarket_reverse_holo_low=to_decimal(card.cardmarket_reverse_holo_low),
        cardmarket_reverse_holo_trend=to_decimal(card.cardmarket_reverse_holo_trend),
        cardmarket_1st_edition_avg=to_decimal(card.cardmarket_1st_edition_avg),
        cardmarket_1st_edition_low=to_decimal(card.cardmarket_1st_edition_low),
        cardmarket_1st_edition_trend=to_decimal(card.cardmarket_1st_edition_trend),
        tcgplayer_1st_edition_holofoil_market=to_decimal(card.tcgplayer_1st_edition_holofoil_market),
        tcgplayer_1st_edition_normal_market=to_decimal(card.tcgplayer_1st_edition_normal_market),
    )

    return Item(
        card_id=card.id,
        name=card.name,
        rarity=card.rarity,
        types=tuple(card.types or ()),
        subtypes=tuple(card.subtypes or ()),
        national_pokedex_numbers=tuple(card.national_pokedex_numbers or ()),
        card_set=card_set,
        prices=prices,
    )


def row_to_record(row: UserCollection) -> OwnershipRecord:
    return OwnershipRecord(
        card_id=row.card_id,
        quantity=row.quantity,
        variant=row.variant,
        condition=row.condition,
        acquired_at=row.created_at,
        updated_at=row.updated_at,
        record_id=str(row.id),
    )


class SqlRecordStore:
    """RecordStore over user_collections and user_achievements."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_ownership_records(self, user_id: uuid.UUID) -> list[OwnershipRecord]:
        stmt = (
            select(UserCollection)
            .where(UserCollection.user_id == user_id)
            .order_by(UserCollection.created_at.desc())
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            rows: Sequence[UserCollection] = result.scalars().all()

        logger.debug(
            "ownership_records_loaded",
            user_id=str(user_id),
            rows_found=len(rows),
            source="sql_store",
        )
        return [row_to_record(row) for row in rows]

    async def list_unlocked_achievements(self, user_id: uuid.UUID) -> list[UnlockedAchievement]:
        stmt = (
            select(UserAchievement)
            .where(UserAchievement.user_id == user_id)
            .order_by(UserAchievement.unlocked_at.asc())
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            rows: Sequence[UserAchievement] = result.scalars().all()

        return [
            UnlockedAchievement(
                achievement_type=row.achievement_type,
                unlocked_at=row.unlocked_at,
                points=row.points,
            )
            for row in rows
        ]

    async def persist_unlock_diff(
        self,
        user_id: uuid.UUID,
        newly_unlocked: Sequence[AchievementDefinition],
        revoked: Sequence[str],
    ) -> None:
        """Insert new unlock rows and delete revoked ones in one transaction."""
        now = datetime.now(timezone.utc)
        async with self.session_factory() as session:
            async with session.begin():
                if revoked:
                    await session.execute(
                        delete(UserAchievement).where(
                            UserAchievement.user_id == user_id,
                            UserAchievement.achievement_type.in_(list(revoked)),
                        )
                    )
                session.add_all(
                    UserAchievement(
                        user_id=user_id,
                        achievement_type=definition.type,
                        points=definition.points,
                        achievement_data={
                            "name": definition.name,
                            "icon": definition.icon,
                            "category": definition.category.value,
                            "rarity": definition.rarity.value,
                        },
                        unlocked_at=now,
                    )
                    for definition in newly_unlocked
                )

        logger.info(
            "unlock_diff_persisted",
            user_id=str(user_id),
            inserted=len(newly_unlocked),
            deleted=len(revoked),
            source="sql_store",
        )


class SqlItemCatalog:
    """ItemCatalog over cards + sets."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def lookup_items(self, card_ids: Iterable[str]) -> dict[str, Item]:
        wanted = list(dict.fromkeys(card_ids))
        if not wanted:
            return {}

        stmt = select(Card).where(Card.id.in_(wanted))
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            cards: Sequence[Card] = result.unique().scalars().all()

        items = {card.id: card_to_item(card) for card in cards}
        if len(items) < len(wanted):
            logger.debug(
                "items_not_found",
                requested=len(wanted),
                found=len(items),
                source="sql_store",
            )
        return items
