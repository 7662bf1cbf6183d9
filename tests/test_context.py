"""Tests for ExtendedStats merging and the early-adopter helper."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from cardvault.achievements.context import ExtendedStats, build_extended_stats, is_early_adopter
from cardvault.engine.themes import DerivedCounters
from cardvault.engine.types import CollectionStats


class TestBuildExtendedStats:
    """Collection stats + derived counters + external counters."""

    def test_defaults_when_nothing_external(self) -> None:
        ctx = build_extended_stats(CollectionStats(total_cards=3))
        assert ctx.stat("cards") == 3
        assert ctx.friends == 0
        assert ctx.login_streak == 0
        assert ctx.flag("early_adopter") is False

    def test_external_counters_copied(self) -> None:
        ctx = build_extended_stats(
            CollectionStats(),
            external={"friends": 4, "completed_trades": 2, "login_streak": 9, "flags": {"early_adopter": True}},
        )
        assert ctx.stat("friends") == 4
        assert ctx.stat("completed_trades") == 2
        assert ctx.stat("login_streak") == 9
        assert ctx.flag("early_adopter") is True

    def test_external_overrides_derived(self) -> None:
        derived = DerivedCounters(
            counts={"pikachu_cards": 2, "holo_cards": 5},
            flags={"eeveelution_complete": False},
        )
        ctx = build_extended_stats(
            CollectionStats(),
            derived,
            external={"themed_counts": {"pikachu_cards": 12}, "flags": {"eeveelution_complete": True}},
        )
        assert ctx.stat("pikachu_cards") == 12
        assert ctx.stat("holo_cards") == 5
        assert ctx.flag("eeveelution_complete") is True

    def test_none_values_default_to_zero(self) -> None:
        ctx = build_extended_stats(CollectionStats(), external={"friends": None})
        assert ctx.friends == 0

    def test_malformed_counter_defaults_to_zero(self) -> None:
        ctx = build_extended_stats(
            CollectionStats(), external={"friends": "n/a", "login_streak": "7", "completed_trades": 3}
        )
        assert ctx.friends == 0
        assert ctx.login_streak == 7
        assert ctx.completed_trades == 3

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), [1, 2], object()])
    def test_unusable_values_default_to_zero(self, bad) -> None:
        ctx = build_extended_stats(CollectionStats(), external={"trade_streak": bad})
        assert ctx.trade_streak == 0

    def test_malformed_themed_count(self) -> None:
        derived = DerivedCounters(counts={"pikachu_cards": 4}, flags={})
        ctx = build_extended_stats(
            CollectionStats(),
            derived,
            external={"themed_counts": {"pikachu_cards": "lots", "legendary_pokemon": 2}},
        )
        assert ctx.stat("pikachu_cards") == 0
        assert ctx.stat("legendary_pokemon") == 2

    def test_wrong_shape_sections_ignored(self) -> None:
        ctx = build_extended_stats(
            CollectionStats(total_cards=2), external={"themed_counts": [1, 2], "flags": "yes"}
        )
        assert ctx.stat("cards") == 2
        assert ctx.themed_counts == {}
        assert ctx.flags == {}


class TestStatAliases:
    """Requirement kinds that read CollectionStats fields."""

    def test_aliases(self) -> None:
        ctx = ExtendedStats(
            stats=CollectionStats(total_cards=7, unique_cards=5, total_value_eur=Decimal("12.5"), rare_cards=2)
        )
        assert ctx.stat("cards") == 7
        assert ctx.stat("exact_cards") == 7
        assert ctx.stat("unique_cards") == 5
        assert ctx.stat("exact_unique_cards") == 5
        assert ctx.stat("collection_value_eur") == Decimal("12.5")
        assert ctx.stat("rare_cards") == 2

    def test_unknown_kind_is_zero(self) -> None:
        assert ExtendedStats().stat("holiday_cards") == 0


class TestIsEarlyAdopter:
    """Joined before the cutoff (2024-02-01)."""

    def test_before_cutoff(self) -> None:
        assert is_early_adopter(datetime(2024, 1, 31, 23, 59, tzinfo=timezone.utc)) is True

    def test_on_cutoff(self) -> None:
        assert is_early_adopter(date(2024, 2, 1)) is False

    def test_after_cutoff(self) -> None:
        assert is_early_adopter(datetime(2024, 6, 1, tzinfo=timezone.utc)) is False

    def test_unknown_join_date(self) -> None:
        assert is_early_adopter(None) is False

    def test_custom_cutoff(self) -> None:
        assert is_early_adopter(date(2025, 1, 1), cutoff=date(2025, 6, 1)) is True
