"""
Card Vault — Shared pytest Fixtures & Configuration

Provides common fixtures for all test modules:
- Sample catalog items and ownership records
- In-memory aiosqlite session factory with every table created
- Async test support via pytest-asyncio
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cardvault.config import CardCondition, CardVariant
from cardvault.engine.types import CardSet, Item, OwnershipRecord, PriceQuotes
from cardvault.models.base import Base


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

pytest_plugins = ("pytest_asyncio",)


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------

BASE_SET = CardSet(set_id="base1", name="Base Set", total_cards=102, release_date=date(1999, 1, 9))
JUNGLE = CardSet(set_id="base2", name="Jungle", total_cards=64, release_date=date(1999, 6, 16))
MINI_SET = CardSet(set_id="mini1", name="Mini Set", total_cards=2, release_date=date(2023, 3, 31))


def make_item(
    card_id: str,
    name: str,
    avg: str | None = "10.00",
    rarity: str | None = "Common",
    card_set: CardSet | None = BASE_SET,
    types: tuple[str, ...] = (),
    dex: tuple[int, ...] = (),
    **prices: Decimal | None,
) -> Item:
    """Build an Item with a Cardmarket average price and optional extra quotes."""
    return Item(
        card_id=card_id,
        name=name,
        rarity=rarity,
        types=types,
        national_pokedex_numbers=dex,
        card_set=card_set,
        prices=PriceQuotes(cardmarket_avg=Decimal(avg) if avg is not None else None, **prices),
    )


def make_record(
    card_id: str,
    quantity: int = 1,
    variant: CardVariant | str = CardVariant.NORMAL,
    condition: CardCondition | str | None = CardCondition.MINT,
    acquired_at: datetime | None = None,
) -> OwnershipRecord:
    return OwnershipRecord(
        card_id=card_id,
        quantity=quantity,
        variant=variant,
        condition=condition,
        acquired_at=acquired_at,
    )


@pytest.fixture
def now() -> datetime:
    """Current timestamp for tests."""
    return datetime.now(timezone.utc)


@pytest.fixture
def sample_items() -> dict[str, Item]:
    """Small catalog spanning two vintage sets and one modern two-card set."""
    items = [
        make_item("base1-4", "Charizard", avg="300.00", rarity="Rare Holo", types=("Fire",), dex=(6,)),
        make_item("base1-58", "Pikachu", avg="2.00", rarity="Common", types=("Lightning",), dex=(25,)),
        make_item("base1-63", "Squirtle", avg="1.50", rarity="Common", types=("Water",), dex=(7,)),
        make_item(
            "base2-51", "Eevee", avg="1.00", rarity="Common", card_set=JUNGLE,
            types=("Colorless",), dex=(133,),
        ),
        make_item("mini1-1", "Sylveon", avg="5.00", rarity="Rare", card_set=MINI_SET, types=("Fairy",), dex=(700,)),
        make_item("mini1-2", "Umbreon", avg="8.00", rarity="Secret Rare", card_set=MINI_SET, types=("Darkness",), dex=(197,)),
    ]
    return {item.card_id: item for item in items}


@pytest.fixture
def sample_records(now: datetime) -> list[OwnershipRecord]:
    """Eight copies across five rows, oldest first."""
    return [
        make_record("base1-4", 1, CardVariant.HOLO, CardCondition.NEAR_MINT, now - timedelta(days=5)),
        make_record("base1-58", 3, CardVariant.NORMAL, CardCondition.LIGHTLY_PLAYED, now - timedelta(days=4)),
        make_record("base1-58", 1, CardVariant.REVERSE_HOLO, CardCondition.MINT, now - timedelta(days=3)),
        make_record("mini1-1", 1, CardVariant.NORMAL, CardCondition.MINT, now - timedelta(days=2)),
        make_record("mini1-2", 2, CardVariant.NORMAL, CardCondition.DAMAGED, now - timedelta(days=1)),
    ]


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """
    Async session factory over in-memory SQLite.

    Creates a fresh database for each test, ensuring isolation.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory

    await engine.dispose()
