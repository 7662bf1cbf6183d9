"""Tests for the collection and achievement ORM models."""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cardvault.models import Card, CardSet, UserAchievement, UserCollection


class TestModelRepr:
    def test_user_collection_repr(self) -> None:
        """__repr__ includes card, variant and quantity."""
        row = UserCollection(user_id=uuid.uuid4(), card_id="base1-4", variant="holo", condition="mint", quantity=2)
        r = repr(row)
        assert "UserCollection" in r
        assert "card_id='base1-4'" in r
        assert "quantity=2" in r

    def test_user_achievement_repr(self) -> None:
        row = UserAchievement(user_id=uuid.uuid4(), achievement_type="first_card", points=10)
        assert "achievement_type='first_card'" in repr(row)

    def test_card_and_set_repr(self) -> None:
        assert "Charizard" in repr(Card(id="base1-4", name="Charizard"))
        assert "total_cards=102" in repr(CardSet(id="base1", name="Base Set", total_cards=102))


class TestUserCollectionConstraints:
    """Defaults and table constraints enforced by the database."""

    async def _seed_card(self, session: AsyncSession) -> None:
        session.add(CardSet(id="base1", name="Base Set", total_cards=102))
        session.add(Card(id="base1-4", name="Charizard", set_id="base1"))
        await session.flush()

    async def test_defaults_applied_on_flush(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        async with session_factory() as session:
            await self._seed_card(session)
            row = UserCollection(user_id=uuid.uuid4(), card_id="base1-4")
            session.add(row)
            await session.flush()

            assert row.id is not None
            assert row.variant == "normal"
            assert row.condition == "near_mint"
            assert row.quantity == 1

    async def test_quantity_must_be_positive(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        async with session_factory() as session:
            await self._seed_card(session)
            session.add(UserCollection(user_id=uuid.uuid4(), card_id="base1-4", quantity=0))
            with pytest.raises(IntegrityError):
                await session.flush()

    async def test_duplicate_entry_rejected(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Same card, variant and condition for one user is a single row with a quantity."""
        user_id = uuid.uuid4()
        async with session_factory() as session:
            await self._seed_card(session)
            session.add(UserCollection(user_id=user_id, card_id="base1-4", variant="holo", condition="mint"))
            await session.flush()
            session.add(UserCollection(user_id=user_id, card_id="base1-4", variant="holo", condition="mint"))
            with pytest.raises(IntegrityError):
                await session.flush()


class TestUserAchievementConstraints:
    async def test_one_row_per_type(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        user_id = uuid.uuid4()
        async with session_factory() as session:
            session.add(UserAchievement(user_id=user_id, achievement_type="first_card", points=10))
            await session.flush()
            session.add(UserAchievement(user_id=user_id, achievement_type="first_card", points=10))
            with pytest.raises(IntegrityError):
                await session.flush()
