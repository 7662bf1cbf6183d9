"""
Card Vault — Achievement Tracker

Async orchestration around the pure engines:

    records + items ──► aggregate() ──► CollectionStats
                      └► derive_collection_counters()
    CollectionStats + derived + external counters ──► ExtendedStats
    ExtendedStats + unlocked set ──► evaluate_achievements() ──► unlock diff

Only the diff is written back. Record-store failures propagate; a failing
counter provider degrades to zeroed counters.
"""

from __future__ import annotations

import uuid
from collections.abc import Collection
from typing import NamedTuple

import structlog

from cardvault.achievements.checker import EvaluationResult, evaluate_achievements
from cardvault.achievements.context import ExtendedStats, ExternalCounters, build_extended_stats
from cardvault.achievements.definitions import (
    ACHIEVEMENT_CATALOG,
    AchievementCatalog,
    AchievementDefinition,
)
from cardvault.achievements.progress import (
    AchievementProgress,
    AchievementSummary,
    calculate_progress,
    summarize_achievements,
)
from cardvault.config import AchievementCategory
from cardvault.engine.aggregator import aggregate
from cardvault.engine.themes import derive_collection_counters
from cardvault.engine.types import CollectionStats, Item, OwnershipRecord
from cardvault.services.protocols import CounterProvider, ItemCatalog, RecordStore

logger = structlog.get_logger(__name__)


class AchievementCheckResult(NamedTuple):
    newly_unlocked: list[AchievementDefinition]
    revoked: list[AchievementDefinition]


class AchievementTracker:
    """
    Computes collection stats and keeps a user's unlocked achievements in
    sync with them.

    Collaborators are injected; nothing here holds per-user state, so one
    instance serves every user.
    """

    def __init__(
        self,
        record_store: RecordStore,
        item_catalog: ItemCatalog,
        counters: CounterProvider | None = None,
        catalog: AchievementCatalog = ACHIEVEMENT_CATALOG,
        sticky_categories: Collection[AchievementCategory | str] | None = None,
    ):
        self.record_store = record_store
        self.item_catalog = item_catalog
        self.counters = counters
        self.catalog = catalog
        self.sticky_categories = sticky_categories

    async def _load_collection(
        self, user_id: uuid.UUID
    ) -> tuple[list[OwnershipRecord], dict[str, Item]]:
        records = await self.record_store.list_ownership_records(user_id)
        card_ids = sorted({record.card_id for record in records})
        items = await self.item_catalog.lookup_items(card_ids) if card_ids else {}
        return records, items

    async def _external_counters(self, user_id: uuid.UUID) -> ExternalCounters:
        if self.counters is None:
            logger.info(
                "extended_counters_unavailable",
                user_id=str(user_id),
                reason="no_provider",
                source="tracker",
            )
            return {}
        try:
            return await self.counters.get_extended_counters(user_id)
        except Exception as e:
            logger.warning(
                "extended_counters_unavailable",
                user_id=str(user_id),
                error=str(e),
                error_type=type(e).__name__,
                source="tracker",
            )
            return {}

    async def compute_stats(self, user_id: uuid.UUID) -> CollectionStats:
        """Aggregate the user's full collection."""
        records, items = await self._load_collection(user_id)
        return aggregate(records, items)

    async def build_extended_stats(self, user_id: uuid.UUID) -> ExtendedStats:
        """CollectionStats merged with derived and external counters."""
        records, items = await self._load_collection(user_id)
        stats = aggregate(records, items)
        derived = derive_collection_counters(records, items)
        external = await self._external_counters(user_id)
        return build_extended_stats(stats, derived, external)

    async def preview_achievement_check(self, user_id: uuid.UUID) -> EvaluationResult:
        """Evaluate against the stored unlocks without writing anything."""
        ctx = await self.build_extended_stats(user_id)
        unlocked = await self.record_store.list_unlocked_achievements(user_id)
        return evaluate_achievements(
            ctx,
            (entry.achievement_type for entry in unlocked),
            catalog=self.catalog,
            sticky_categories=self.sticky_categories,
        )

    async def run_achievement_check(self, user_id: uuid.UUID) -> AchievementCheckResult:
        """
        Re-evaluate every achievement and persist the unlock diff.

        Call after any collection, friend or trade mutation. Safe to repeat:
        a second call with no intervening change returns an empty result.

        Returns:
            AchievementCheckResult with the definitions unlocked and revoked.
        """
        result = await self.preview_achievement_check(user_id)

        newly_unlocked = [self.catalog.get(key) for key in result.newly_unlocked]
        revoked = [self.catalog.get(key) for key in result.revoked]

        if newly_unlocked or revoked:
            await self.record_store.persist_unlock_diff(user_id, newly_unlocked, list(result.revoked))
            logger.info(
                "achievement_check_persisted",
                user_id=str(user_id),
                newly_unlocked=list(result.newly_unlocked),
                revoked=list(result.revoked),
                source="tracker",
            )

        return AchievementCheckResult(newly_unlocked=newly_unlocked, revoked=revoked)

    async def get_progress(self, user_id: uuid.UUID) -> list[AchievementProgress]:
        """Per-achievement progress for display."""
        ctx = await self.build_extended_stats(user_id)
        unlocked = await self.record_store.list_unlocked_achievements(user_id)
        return calculate_progress(
            ctx, {entry.achievement_type for entry in unlocked}, catalog=self.catalog
        )

    async def get_summary(self, user_id: uuid.UUID) -> AchievementSummary:
        unlocked = await self.record_store.list_unlocked_achievements(user_id)
        return summarize_achievements(unlocked, catalog=self.catalog)
