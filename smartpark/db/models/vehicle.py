"""Vehicle model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from smartpark.db.base import Base
from smartpark.db.types import UTCDateTime, utcnow


class Vehicle(Base):
    """Registered vehicle, keyed by its plate number."""

    __tablename__ = "cars"

    plate_number = Column(String(20), primary_key=True)
    driver_name = Column(String(100), nullable=False)
    phone_number = Column(String(20), nullable=False, index=True)
    car_model = Column(String(50), nullable=True)
    car_color = Column(String(30), nullable=True)
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

    # Relationships
    parking_records = relationship("ParkingRecord", back_populates="vehicle")

    def __repr__(self):
        return f"<Vehicle(plate_number={self.plate_number}, driver_name={self.driver_name})>"
