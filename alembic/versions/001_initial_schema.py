"""Initial schema: sets, cards, user_collections, user_achievements

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18

Adds:
  - sets (printed total + release date for set progress / era counters)
  - cards (catalog + Cardmarket EUR / TCGPlayer USD price quotes)
  - user_collections (one row per user, card, variant, condition)
  - user_achievements (one row per unlocked achievement type)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_PRICE_COLUMNS = (
    "cardmarket_avg_sell_price",
    "cardmarket_low_price",
    "cardmarket_trend_price",
    "cardmarket_reverse_holo_sell",
    "cardmarket_reverse_holo_low",
    "cardmarket_reverse_holo_trend",
    "cardmarket_1st_edition_avg",
    "cardmarket_1st_edition_low",
    "cardmarket_1st_edition_trend",
    "tcgplayer_1st_edition_holofoil_market",
    "tcgplayer_1st_edition_normal_market",
)


def upgrade() -> None:
    # ------------------------------------------------------------------
    # 1. Reference data
    # ------------------------------------------------------------------
    op.create_table(
        "sets",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("total_cards", sa.INTEGER(), server_default="0", nullable=False),
        sa.Column("release_date", sa.DATE(), nullable=True),
    )

    op.create_table(
        "cards",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("rarity", sa.String(), nullable=True),
        sa.Column("types", sa.JSON(), nullable=True),
        sa.Column("subtypes", sa.JSON(), nullable=True),
        sa.Column("national_pokedex_numbers", sa.JSON(), nullable=True),
        sa.Column("set_id", sa.String(), sa.ForeignKey("sets.id"), nullable=True),
        *(sa.Column(name, sa.DECIMAL(10, 2), nullable=True) for name in _PRICE_COLUMNS),
    )
    op.create_index("ix_cards_set_id", "cards", ["set_id"])

    # ------------------------------------------------------------------
    # 2. User data
    # ------------------------------------------------------------------
    op.create_table(
        "user_collections",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("card_id", sa.String(), sa.ForeignKey("cards.id"), nullable=False),
        sa.Column("variant", sa.String(), server_default="normal", nullable=False),
        sa.Column("condition", sa.String(), server_default="near_mint", nullable=False),
        sa.Column("quantity", sa.INTEGER(), server_default="1", nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.UniqueConstraint("user_id", "card_id", "variant", "condition", name="uq_user_collection_entry"),
        sa.CheckConstraint("quantity >= 1", name="ck_user_collection_quantity_positive"),
    )
    op.create_index("ix_user_collections_user_id", "user_collections", ["user_id"])

    op.create_table(
        "user_achievements",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("achievement_type", sa.String(), nullable=False),
        sa.Column("points", sa.INTEGER(), server_default="0", nullable=False),
        sa.Column("achievement_data", sa.JSON(), nullable=True),
        sa.Column(
            "unlocked_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.UniqueConstraint("user_id", "achievement_type", name="uq_user_achievement_type"),
    )
    op.create_index("ix_user_achievements_user_id", "user_achievements", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_user_achievements_user_id", table_name="user_achievements")
    op.drop_table("user_achievements")
    op.drop_index("ix_user_collections_user_id", table_name="user_collections")
    op.drop_table("user_collections")
    op.drop_index("ix_cards_set_id", table_name="cards")
    op.drop_table("cards")
    op.drop_table("sets")
