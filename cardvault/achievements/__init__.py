from cardvault.achievements.checker import EvaluationResult, evaluate_achievements, is_satisfied
from cardvault.achievements.context import ExtendedStats, build_extended_stats, is_early_adopter
from cardvault.achievements.definitions import (
    ACHIEVEMENT_CATALOG,
    ACHIEVEMENT_DEFINITIONS,
    AchievementCatalog,
    AchievementDefinition,
    Requirement,
)
from cardvault.achievements.progress import calculate_progress, summarize_achievements

__all__ = [
    "ACHIEVEMENT_CATALOG",
    "ACHIEVEMENT_DEFINITIONS",
    "AchievementCatalog",
    "AchievementDefinition",
    "EvaluationResult",
    "ExtendedStats",
    "Requirement",
    "build_extended_stats",
    "calculate_progress",
    "evaluate_achievements",
    "is_early_adopter",
    "is_satisfied",
    "summarize_achievements",
]
