"""ParkingRecord model."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, Numeric, String, text
from sqlalchemy.orm import relationship

from smartpark.db.base import Base
from smartpark.db.types import UTCDateTime, utcnow

RECORD_STATUSES = ("active", "completed")


class ParkingRecord(Base):
    """One vehicle's continuous occupancy of one slot, from entry to exit."""

    __tablename__ = "parking_records"

    record_id = Column(Integer, primary_key=True, autoincrement=True)
    plate_number = Column(
        String(20),
        ForeignKey("cars.plate_number", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    slot_number = Column(
        String(10),
        ForeignKey("parking_slots.slot_number", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Time information
    entry_time = Column(UTCDateTime, nullable=False, index=True)
    exit_time = Column(UTCDateTime, nullable=True)

    # Filled in once, when the record is closed
    duration_minutes = Column(Integer, nullable=True)
    total_amount = Column(Numeric(10, 2), nullable=True)

    status = Column(String(16), nullable=False, default="active")
    created_by = Column(String(64), nullable=False)
    created_at = Column(
        UTCDateTime,
        default=utcnow,
        nullable=False,
    )
    updated_at = Column(
        UTCDateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    # Constraints
    __table_args__ = (
        CheckConstraint("status IN ('active', 'completed')", name="check_record_status"),
        CheckConstraint(
            "exit_time IS NULL OR exit_time >= entry_time",
            name="check_exit_after_entry",
        ),
        # At most one active record per vehicle and per slot
        Index(
            "uq_parking_records_active_plate",
            "plate_number",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
        Index(
            "uq_parking_records_active_slot",
            "slot_number",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )

    # Relationships
    vehicle = relationship("Vehicle", back_populates="parking_records")
    slot = relationship("ParkingSlot", back_populates="parking_records")
    payments = relationship("Payment", back_populates="parking_record")

    def __repr__(self):
        return (
            f"<ParkingRecord(record_id={self.record_id}, plate_number={self.plate_number}, "
            f"slot_number={self.slot_number}, status={self.status})>"
        )
