from cardvault.services.tracker import AchievementCheckResult, AchievementTracker

__all__ = ["AchievementCheckResult", "AchievementTracker"]
