"""create badge registry tables

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "badge_owners",
        sa.Column("badge_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("owner", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("badge_id"),
    )
    op.create_index("ix_badge_owners_owner", "badge_owners", ["owner"])
    op.create_table(
        "badge_uris",
        sa.Column("badge_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("uri", sa.String(length=256), nullable=False),
        sa.PrimaryKeyConstraint("badge_id"),
    )
    op.create_table(
        "badge_uri_index",
        sa.Column("uri", sa.String(length=256), nullable=False),
        sa.Column("badge_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("uri"),
        sa.UniqueConstraint("badge_id"),
    )
    op.create_table(
        "burned_badges",
        sa.Column("badge_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("burned", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("badge_id"),
    )
    op.create_table(
        "registry_counters",
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("value", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )
    op.create_table(
        "badge_events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("badge_id", sa.Integer(), nullable=False),
        sa.Column("event_type", sa.String(length=50), nullable=False),
        sa.Column("actor", sa.String(length=255), nullable=False),
        sa.Column("detail", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_badge_events_badge_id", "badge_events", ["badge_id"])
    op.create_index("ix_badge_events_event_type", "badge_events", ["event_type"])


def downgrade() -> None:
    op.drop_index("ix_badge_events_event_type", table_name="badge_events")
    op.drop_index("ix_badge_events_badge_id", table_name="badge_events")
    op.drop_table("badge_events")
    op.drop_table("registry_counters")
    op.drop_table("burned_badges")
    op.drop_table("badge_uri_index")
    op.drop_table("badge_uris")
    op.drop_index("ix_badge_owners_owner", table_name="badge_owners")
    op.drop_table("badge_owners")
