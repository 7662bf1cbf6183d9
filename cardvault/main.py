"""
Card Vault — Application Wiring

Configures structlog, creates the async SQLAlchemy engine, and assembles an
AchievementTracker over the SQL store.

Used by scripts/recheck_achievements.py and by any service embedding the
engine.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardvault.config import settings
from cardvault.services.protocols import CounterProvider
from cardvault.services.tracker import AchievementTracker
from cardvault.store.sql import SqlItemCatalog, SqlRecordStore


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def configure_logging(log_level: str | None = None) -> None:
    """
    Set up structured logging with JSON output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
            Defaults to settings.LOG_LEVEL.
    """
    level = (log_level or settings.LOG_LEVEL).upper()

    # Configure stdlib logging first (for third-party libraries)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Database Setup
# ---------------------------------------------------------------------------


def create_db_engine(
    database_url: str | None = None,
) -> tuple[Any, async_sessionmaker[AsyncSession]]:
    """
    Create SQLAlchemy async engine and session factory.

    Args:
        database_url: Override for settings.DATABASE_URL.

    Returns:
        (engine, session_factory) tuple.
    """
    logger = structlog.get_logger(__name__)
    url = database_url or settings.DATABASE_URL

    logger.info("database_engine_initializing", database_url=url.split("@")[-1])

    engine = create_async_engine(url, echo=False, pool_pre_ping=True)
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    logger.info("database_engine_ready")
    return engine, session_factory


def build_tracker(
    session_factory: async_sessionmaker[AsyncSession],
    counters: CounterProvider | None = None,
) -> AchievementTracker:
    """AchievementTracker backed by the SQL record store and card catalog."""
    return AchievementTracker(
        record_store=SqlRecordStore(session_factory),
        item_catalog=SqlItemCatalog(session_factory),
        counters=counters,
    )
