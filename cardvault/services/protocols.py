"""
Card Vault — Collaborator Interfaces

The tracker depends only on these shapes. cardvault.store.sql provides the
SQLAlchemy implementations; tests substitute AsyncMock objects.
"""

from __future__ import annotations

import uuid
from typing import Iterable, Protocol, Sequence

from cardvault.achievements.context import ExternalCounters
from cardvault.achievements.definitions import AchievementDefinition
from cardvault.engine.types import Item, OwnershipRecord, UnlockedAchievement


class RecordStore(Protocol):
    async def list_ownership_records(self, user_id: uuid.UUID) -> list[OwnershipRecord]:
        ...

    async def list_unlocked_achievements(self, user_id: uuid.UUID) -> list[UnlockedAchievement]:
        ...

    async def persist_unlock_diff(
        self,
        user_id: uuid.UUID,
        newly_unlocked: Sequence[AchievementDefinition],
        revoked: Sequence[str],
    ) -> None:
        """Insert the new unlocks and delete the revoked ones in one transaction."""
        ...


class ItemCatalog(Protocol):
    async def lookup_items(self, card_ids: Iterable[str]) -> dict[str, Item]:
        """Batched lookup; unknown ids are simply absent from the result."""
        ...


class CounterProvider(Protocol):
    async def get_extended_counters(self, user_id: uuid.UUID) -> ExternalCounters:
        ...
