"""Tour schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates the saved tour tables:
- tour
- tour_day, tour_day_activity
- tour_pricing
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all tables."""
    # tour table
    op.create_table(
        "tour",
        sa.Column("tour_id", sa.Uuid(), primary_key=True),
        sa.Column("tour_code", sa.Text(), nullable=False),
        sa.Column("tour_name", sa.Text(), nullable=False),
        sa.Column("duration_days", sa.Integer(), nullable=False),
        sa.Column("cities", sa.JSON(), nullable=False),
        sa.Column("tour_type", sa.Text(), nullable=False),
        sa.Column("is_template", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("party_size", sa.Integer(), nullable=False),
        sa.Column("price_tier", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("tour_code", name="uq_tour_code"),
    )

    # tour_day table
    op.create_table(
        "tour_day",
        sa.Column("day_id", sa.Uuid(), primary_key=True),
        sa.Column("tour_id", sa.Uuid(), nullable=False),
        sa.Column("day_number", sa.Integer(), nullable=False),
        sa.Column("city", sa.Text(), server_default="", nullable=False),
        sa.Column("accommodation", sa.JSON(), nullable=True),
        sa.Column("breakfast_included", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("lunch", sa.JSON(), nullable=True),
        sa.Column("dinner", sa.JSON(), nullable=True),
        sa.Column("guide_required", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("guide", sa.JSON(), nullable=True),
        sa.Column("additional_services", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["tour_id"], ["tour.tour_id"], ondelete="CASCADE"),
        sa.UniqueConstraint("tour_id", "day_number", name="uq_tour_day_number"),
    )
    op.create_index("idx_tour_day_tour", "tour_day", ["tour_id"])

    # tour_day_activity table
    op.create_table(
        "tour_day_activity",
        sa.Column("activity_id", sa.Uuid(), primary_key=True),
        sa.Column("day_id", sa.Uuid(), nullable=False),
        sa.Column("activity_order", sa.Integer(), nullable=False),
        sa.Column("entrances", sa.JSON(), nullable=False),
        sa.Column("transportation", sa.JSON(), nullable=True),
        sa.Column("activity_notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["day_id"], ["tour_day.day_id"], ondelete="CASCADE"),
    )
    op.create_index("idx_activity_day", "tour_day_activity", ["day_id", "activity_order"])

    # tour_pricing table
    op.create_table(
        "tour_pricing",
        sa.Column("pricing_id", sa.Uuid(), primary_key=True),
        sa.Column("tour_id", sa.Uuid(), nullable=False),
        sa.Column("party_size", sa.Integer(), nullable=False),
        sa.Column("tier", sa.Text(), nullable=False),
        sa.Column("total_accommodation", sa.Float(), nullable=False),
        sa.Column("total_meals", sa.Float(), nullable=False),
        sa.Column("total_guides", sa.Float(), nullable=False),
        sa.Column("total_transportation", sa.Float(), nullable=False),
        sa.Column("total_entrances", sa.Float(), nullable=False),
        sa.Column("total_additional_services", sa.Float(), nullable=False),
        sa.Column("grand_total", sa.Float(), nullable=False),
        sa.Column("per_person_total", sa.Float(), nullable=False),
        sa.Column("breakdown", sa.JSON(), nullable=False),
        sa.Column("calculated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["tour_id"], ["tour.tour_id"], ondelete="CASCADE"),
    )
    op.create_index("idx_pricing_tour", "tour_pricing", ["tour_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("idx_pricing_tour", table_name="tour_pricing")
    op.drop_table("tour_pricing")
    op.drop_index("idx_activity_day", table_name="tour_day_activity")
    op.drop_table("tour_day_activity")
    op.drop_index("idx_tour_day_tour", table_name="tour_day")
    op.drop_table("tour_day")
    op.drop_table("tour")
