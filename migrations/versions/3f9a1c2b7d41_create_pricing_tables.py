"""create_pricing_tables

Revision ID: 3f9a1c2b7d41
Revises:
Create Date: 2026-10-19 10:12:04.318502

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f9a1c2b7d41"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "parking_spots",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("label", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("is_ev", sa.Boolean(), nullable=False),
        sa.Column("base_price", sa.Float(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("reserved_by", sa.String(length=255), nullable=True),
        sa.Column("zone", sa.String(length=255), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column(
            "last_updated",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=True,
        ),
        sa.CheckConstraint(
            "status IN ('free', 'occupied', 'reserved')", name="check_spot_status"
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "occupancy_snapshots",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("free", sa.Integer(), nullable=False),
        sa.Column("total", sa.Integer(), nullable=False),
        sa.CheckConstraint("free >= 0 AND free <= total", name="check_free_within_total"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_occupancy_snapshots_timestamp", "occupancy_snapshots", ["timestamp"])

    op.create_table(
        "pricing_configs",
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("rule", sa.String(length=16), nullable=False),
        sa.Column("ev_discount", sa.Float(), nullable=False),
        sa.Column("base_price_default", sa.Float(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("name"),
    )


def downgrade() -> None:
    op.drop_table("pricing_configs")
    op.drop_index("ix_occupancy_snapshots_timestamp", table_name="occupancy_snapshots")
    op.drop_table("occupancy_snapshots")
    op.drop_table("parking_spots")
