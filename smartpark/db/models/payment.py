"""Payment model."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from smartpark.db.base import Base
from smartpark.db.types import UTCDateTime, utcnow

PAYMENT_METHODS = ("cash", "card", "mobile_money")
PAYMENT_STATUSES = ("pending", "completed", "failed")


class Payment(Base):
    """Settlement recorded against a completed parking record."""

    __tablename__ = "payments"

    payment_id = Column(Integer, primary_key=True, autoincrement=True)
    record_id = Column(
        Integer,
        ForeignKey("parking_records.record_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount_paid = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(16), nullable=False, default="cash")
    payment_date = Column(UTCDateTime, nullable=False, index=True)
    payment_status = Column(String(16), nullable=False, default="completed")
    receipt_number = Column(String(32), nullable=False, unique=True)
    created_by = Column(String(64), nullable=False)
    created_at = Column(
        UTCDateTime,
        default=utcnow,
        nullable=False,
    )

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "payment_method IN ('cash', 'card', 'mobile_money')",
            name="check_payment_method",
        ),
        CheckConstraint(
            "payment_status IN ('pending', 'completed', 'failed')",
            name="check_payment_status",
        ),
    )

    # Relationships
    parking_record = relationship("ParkingRecord", back_populates="payments")

    def __repr__(self):
        return f"<Payment(payment_id={self.payment_id}, receipt_number={self.receipt_number})>"
