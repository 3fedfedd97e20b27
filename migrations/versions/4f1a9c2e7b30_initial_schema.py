"""initial_schema

Revision ID: 4f1a9c2e7b30
Revises:
Create Date: 2026-10-17 09:12:40.318275

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4f1a9c2e7b30"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create cars table
    op.create_table(
        "cars",
        sa.Column("plate_number", sa.String(length=20), nullable=False),
        sa.Column("driver_name", sa.String(length=100), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=False),
        sa.Column("car_model", sa.String(length=50), nullable=True),
        sa.Column("car_color", sa.String(length=30), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("plate_number"),
    )
    op.create_index("ix_cars_phone_number", "cars", ["phone_number"])

    # Create parking_slots table
    op.create_table(
        "parking_slots",
        sa.Column("slot_number", sa.String(length=10), nullable=False),
        sa.Column("slot_type", sa.String(length=16), nullable=False),
        sa.Column("hourly_rate", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("slot_status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "slot_status IN ('available', 'occupied', 'maintenance')",
            name="check_slot_status",
        ),
        sa.CheckConstraint("slot_type IN ('regular', 'vip', 'disabled')", name="check_slot_type"),
        sa.CheckConstraint("hourly_rate >= 0", name="check_hourly_rate"),
        sa.PrimaryKeyConstraint("slot_number"),
    )
    op.create_index("ix_parking_slots_slot_status", "parking_slots", ["slot_status"])

    # Create parking_records table
    op.create_table(
        "parking_records",
        sa.Column("record_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("plate_number", sa.String(length=20), nullable=False),
        sa.Column("slot_number", sa.String(length=10), nullable=False),
        sa.Column("entry_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("exit_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("total_amount", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_by", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("status IN ('active', 'completed')", name="check_record_status"),
        sa.CheckConstraint(
            "exit_time IS NULL OR exit_time >= entry_time",
            name="check_exit_after_entry",
        ),
        sa.ForeignKeyConstraint(["plate_number"], ["cars.plate_number"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(
            ["slot_number"], ["parking_slots.slot_number"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("record_id"),
    )
    op.create_index("ix_parking_records_plate_number", "parking_records", ["plate_number"])
    op.create_index("ix_parking_records_slot_number", "parking_records", ["slot_number"])
    op.create_index("ix_parking_records_entry_time", "parking_records", ["entry_time"])

    # At most one active record per vehicle and per slot
    op.create_index(
        "uq_parking_records_active_plate",
        "parking_records",
        ["plate_number"],
        unique=True,
        postgresql_where=sa.text("status = 'active'"),
        sqlite_where=sa.text("status = 'active'"),
    )
    op.create_index(
        "uq_parking_records_active_slot",
        "parking_records",
        ["slot_number"],
        unique=True,
        postgresql_where=sa.text("status = 'active'"),
        sqlite_where=sa.text("status = 'active'"),
    )

    # Create payments table
    op.create_table(
        "payments",
        sa.Column("payment_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("record_id", sa.Integer(), nullable=False),
        sa.Column("amount_paid", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("payment_method", sa.String(length=16), nullable=False),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("payment_status", sa.String(length=16), nullable=False),
        sa.Column("receipt_number", sa.String(length=32), nullable=False),
        sa.Column("created_by", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "payment_method IN ('cash', 'card', 'mobile_money')",
            name="check_payment_method",
        ),
        sa.CheckConstraint(
            "payment_status IN ('pending', 'completed', 'failed')",
            name="check_payment_status",
        ),
        sa.ForeignKeyConstraint(
            ["record_id"], ["parking_records.record_id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("payment_id"),
        sa.UniqueConstraint("receipt_number"),
    )
    op.create_index("ix_payments_record_id", "payments", ["record_id"])
    op.create_index("ix_payments_payment_date", "payments", ["payment_date"])


def downgrade() -> None:
    op.drop_index("ix_payments_payment_date", table_name="payments")
    op.drop_index("ix_payments_record_id", table_name="payments")
    op.drop_table("payments")

    op.drop_index("uq_parking_records_active_slot", table_name="parking_records")
    op.drop_index("uq_parking_records_active_plate", table_name="parking_records")
    op.drop_index("ix_parking_records_entry_time", table_name="parking_records")
    op.drop_index("ix_parking_records_slot_number", table_name="parking_records")
    op.drop_index("ix_parking_records_plate_number", table_name="parking_records")
    op.drop_table("parking_records")

    op.drop_index("ix_parking_slots_slot_status", table_name="parking_slots")
    op.drop_table("parking_slots")

    op.drop_index("ix_cars_phone_number", table_name="cars")
    op.drop_table("cars")
