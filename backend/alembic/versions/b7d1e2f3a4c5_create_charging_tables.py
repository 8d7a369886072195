"""create_charging_tables

Revision ID: b7d1e2f3a4c5
Revises:
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "b7d1e2f3a4c5"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create charging_station_type, charging_station and connector."""
    op.create_table(
        "charging_station_type",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("plug_count", sa.Integer(), nullable=False),
        sa.Column("efficiency", sa.Float(), nullable=False),
        sa.Column("current_type", sa.String(length=2), nullable=False),
        sa.CheckConstraint("plug_count >= 0", name="ck_charging_station_type_plug_count"),
        sa.CheckConstraint("current_type IN ('AC', 'DC')", name="ck_charging_station_type_current_type"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "charging_station",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("device_id", sa.String(length=36), nullable=False),
        sa.Column("ip_address", sa.String(length=45), nullable=False),
        sa.Column("firmware_version", sa.String(length=255), nullable=False),
        sa.Column("charging_station_type_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["charging_station_type_id"], ["charging_station_type.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "connector",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("priority", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("charging_station_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["charging_station_id"], ["charging_station.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(
        "uq_connector_priority_per_station",
        "connector",
        ["charging_station_id"],
        unique=True,
        sqlite_where=sa.text("priority = 1"),
        postgresql_where=sa.text("priority IS TRUE"),
    )


def downgrade() -> None:
    """Drop the charging tables."""
    op.drop_index("uq_connector_priority_per_station", table_name="connector", if_exists=True)
    op.drop_table("connector", if_exists=True)
    op.drop_table("charging_station", if_exists=True)
    op.drop_table("charging_station_type", if_exists=True)
