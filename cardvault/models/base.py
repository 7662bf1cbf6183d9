"""
SQLAlchemy 2.0 async DeclarativeBase for Card Vault.

All models inherit from this Base.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Card Vault database models."""
    pass
