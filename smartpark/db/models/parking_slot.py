"""ParkingSlot model."""

from sqlalchemy import CheckConstraint, Column, Numeric, String
from sqlalchemy.orm import relationship

from smartpark.db.base import Base
from smartpark.db.types import UTCDateTime, utcnow

SLOT_STATUSES = ("available", "occupied", "maintenance")
SLOT_TYPES = ("regular", "vip", "disabled")


class ParkingSlot(Base):
    """Physical parking space with a billing rate."""

    __tablename__ = "parking_slots"

    slot_number = Column(String(10), primary_key=True)
    slot_type = Column(String(16), nullable=False, default="regular")
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    slot_status = Column(String(16), nullable=False, default="available", index=True)
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
        CheckConstraint(
            "slot_status IN ('available', 'occupied', 'maintenance')",
            name="check_slot_status",
        ),
        CheckConstraint("slot_type IN ('regular', 'vip', 'disabled')", name="check_slot_type"),
        CheckConstraint("hourly_rate >= 0", name="check_hourly_rate"),
    )

    # Relationships
    parking_records = relationship("ParkingRecord", back_populates="slot")

    def __repr__(self):
        return f"<ParkingSlot(slot_number={self.slot_number}, status={self.slot_status})>"
