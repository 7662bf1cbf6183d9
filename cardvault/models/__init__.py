"""
Models package — export all SQLAlchemy models.
"""

from cardvault.models.base import Base
from cardvault.models.card import Card
from cardvault.models.card_set import CardSet
from cardvault.models.user_achievement import UserAchievement
from cardvault.models.user_collection import UserCollection

__all__ = ["Base", "Card", "CardSet", "UserAchievement", "UserCollection"]
