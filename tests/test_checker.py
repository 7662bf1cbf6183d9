"""
Card Vault — Achievement Evaluator Tests

Threshold, exact and flag predicates; the unlock/revoke diff; fail-closed
handling of malformed requirements.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from cardvault.achievements.checker import EvaluationResult, evaluate_achievements, is_satisfied
from cardvault.achievements.context import ExtendedStats
from cardvault.achievements.definitions import (
    ACHIEVEMENT_CATALOG,
    AchievementCatalog,
    AchievementDefinition,
    Requirement,
)
from cardvault.config import AchievementCategory, AchievementRarity
from cardvault.engine.types import CollectionStats


def _ctx(**kwargs) -> ExtendedStats:
    stats_fields = {"total_cards", "unique_cards", "total_value_eur", "rare_cards"}
    stats = CollectionStats(**{k: v for k, v in kwargs.items() if k in stats_fields})
    rest = {k: v for k, v in kwargs.items() if k not in stats_fields}
    return ExtendedStats(stats=stats, **rest)


def _definition(
    key: str,
    requirement: Requirement,
    category: AchievementCategory = AchievementCategory.COLLECTION,
) -> AchievementDefinition:
    return AchievementDefinition(
        key, key.title(), "", "", category, AchievementRarity.COMMON, 10, requirement,
    )


def _check(key: str, ctx: ExtendedStats) -> bool:
    definition = ACHIEVEMENT_CATALOG.get(key)
    assert definition is not None
    return is_satisfied(definition, ctx)


class TestThresholdRequirements:
    """stat >= target."""

    @pytest.mark.parametrize("unique, expected", [(49, False), (50, True), (1000, True)])
    def test_unique_cards_50(self, unique: int, expected: bool) -> None:
        assert _check("collector_50", _ctx(unique_cards=unique)) is expected

    def test_first_card_uses_total_cards(self) -> None:
        assert _check("first_card", _ctx(total_cards=1)) is True
        assert _check("first_card", _ctx(total_cards=0)) is False

    def test_collection_value(self) -> None:
        assert _check("valuable_collection_100", _ctx(total_value_eur=Decimal("100.00"))) is True
        assert _check("valuable_collection_100", _ctx(total_value_eur=Decimal("99.99"))) is False

    def test_social_and_trading(self) -> None:
        ctx = _ctx(friends=5, completed_trades=10)
        assert _check("social_circle", ctx) is True
        assert _check("social_butterfly", ctx) is False
        assert _check("active_trader", ctx) is True

    def test_streaks_and_activity(self) -> None:
        ctx = _ctx(login_streak=7, collection_streak=3, active_days_30=15, daily_cards_added=10)
        assert _check("login_streak_7", ctx) is True
        assert _check("login_streak_30", ctx) is False
        assert _check("collection_streak_3", ctx) is True
        assert _check("daily_active_15", ctx) is True
        assert _check("lightning_collector", ctx) is True

    def test_themed_counts(self) -> None:
        ctx = _ctx(themed_counts={"pikachu_cards": 10, "charizard_cards": 4})
        assert _check("pikachu_lover", ctx) is True
        assert _check("charizard_hunter", ctx) is False

    def test_missing_themed_count_is_zero(self) -> None:
        assert _check("shadowless_hunter", _ctx()) is False


class TestExactRequirements:
    """stat == target."""

    @pytest.mark.parametrize("total, expected", [(776, False), (777, True), (778, False)])
    def test_lucky_number_777(self, total: int, expected: bool) -> None:
        assert _check("lucky_number_777", _ctx(total_cards=total)) is expected

    @pytest.mark.parametrize("unique, expected", [(999, False), (1000, True), (1001, False)])
    def test_power_of_ten(self, unique: int, expected: bool) -> None:
        assert _check("power_of_ten", _ctx(unique_cards=unique)) is expected


class TestFlagRequirements:
    def test_flag_set(self) -> None:
        assert _check("eeveelution_master", _ctx(flags={"eeveelution_complete": True})) is True

    def test_flag_unset(self) -> None:
        assert _check("eeveelution_master", _ctx(flags={"eeveelution_complete": False})) is False
        assert _check("early_adopter", _ctx()) is False


class TestMalformedRequirements:
    """Fail closed for the definition only."""

    def test_unknown_kind(self) -> None:
        definition = _definition("mystery", Requirement("moon_phase", 3))
        assert is_satisfied(definition, _ctx(total_cards=100)) is False

    def test_missing_target(self) -> None:
        definition = _definition("no_target", Requirement("cards", None))
        assert is_satisfied(definition, _ctx(total_cards=100)) is False

    def test_wrong_shape_target(self) -> None:
        definition = _definition("string_target", Requirement("cards", "ten"))
        assert is_satisfied(definition, _ctx(total_cards=100)) is False

    def test_bool_target_on_threshold(self) -> None:
        definition = _definition("bool_target", Requirement("cards", True))
        assert is_satisfied(definition, _ctx(total_cards=100)) is False

    def test_non_true_flag_target(self) -> None:
        definition = _definition("flag_false", Requirement("early_adopter", False))
        assert is_satisfied(definition, _ctx(flags={"early_adopter": True})) is False

    def test_evaluation_continues_past_bad_definition(self) -> None:
        catalog = AchievementCatalog([
            _definition("bad", Requirement("moon_phase", 1)),
            _definition("good", Requirement("cards", 1)),
        ])
        result = evaluate_achievements(_ctx(total_cards=1), [], catalog=catalog)
        assert result.currently_satisfied == ("good",)


class TestEvaluationDiff:
    """newly_unlocked / revoked / still_unlocked against the previous set."""

    def test_empty_collection_unlocks_nothing(self) -> None:
        result = evaluate_achievements(ExtendedStats(), [])
        assert result == EvaluationResult((), (), (), ())

    def test_newly_unlocked_in_catalog_order(self) -> None:
        result = evaluate_achievements(_ctx(total_cards=30, unique_cards=30), [])
        assert result.newly_unlocked == ("first_card", "collector_10", "collector_25")
        assert result.revoked == ()

    def test_revoked_when_requirement_stops_holding(self) -> None:
        """collector_50 held, unique count drops to 40."""
        ctx = _ctx(total_cards=40, unique_cards=40)
        previous = ["first_card", "collector_10", "collector_25", "collector_50"]
        result = evaluate_achievements(ctx, previous)
        assert result.revoked == ("collector_50",)
        assert result.still_unlocked == ("first_card", "collector_10", "collector_25")
        assert result.newly_unlocked == ()

    def test_idempotent(self) -> None:
        ctx = _ctx(total_cards=120, unique_cards=60, friends=2, login_streak=3)
        first = evaluate_achievements(ctx, [])
        second = evaluate_achievements(ctx, first.newly_unlocked)
        assert second.currently_satisfied == first.currently_satisfied
        assert second.newly_unlocked == ()
        assert second.revoked == ()
        assert second.still_unlocked == first.newly_unlocked

    def test_unknown_previous_keys_left_alone(self) -> None:
        result = evaluate_achievements(_ctx(total_cards=1), ["retired_achievement"])
        assert "retired_achievement" not in result.revoked
        assert "retired_achievement" not in result.still_unlocked

    def test_sticky_category_not_revoked(self) -> None:
        previous = ["first_login", "first_card"]
        result = evaluate_achievements(
            _ctx(), previous, sticky_categories=[AchievementCategory.SPECIAL]
        )
        assert result.revoked == ("first_card",)
        assert result.still_unlocked == ("first_login",)

    def test_partial_counters(self) -> None:
        """Collection-only context still evaluates; external kinds stay locked."""
        result = evaluate_achievements(_ctx(total_cards=5, unique_cards=5), [])
        assert result.newly_unlocked == ("first_card",)
