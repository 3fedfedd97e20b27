"""Database models package."""

from smartpark.db.base import Base
from smartpark.db.models.parking_record import ParkingRecord
from smartpark.db.models.parking_slot import ParkingSlot
from smartpark.db.models.payment import Payment
from smartpark.db.models.vehicle import Vehicle

__all__ = [
    "Base",
    "ParkingRecord",
    "ParkingSlot",
    "Payment",
    "Vehicle",
]
