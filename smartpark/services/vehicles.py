"""Vehicle registry."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from smartpark.db.models import ParkingRecord, Payment, Vehicle
from smartpark.db.session import atomic
from smartpark.services.exceptions import (
    ConflictError,
    DuplicateVehicle,
    NotFoundError,
    VehicleHasActiveSession,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("driver_name", "phone_number", "car_model", "car_color")


@dataclass
class HistoryEntry:
    """A parking record together with what was paid against it."""

    record: ParkingRecord
    amount_paid: Optional[Decimal]
    payment_count: int


class VehicleRegistry:
    """Vehicle records and their parking history."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, plate_number: str, for_update: bool = False) -> Optional[Vehicle]:
        query = select(Vehicle).where(Vehicle.plate_number == plate_number)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get(self, plate_number: str) -> Vehicle:
        vehicle = await self.find(plate_number)
        if not vehicle:
            raise NotFoundError(f"Car {plate_number} not found")
        return vehicle

    async def list_all(self) -> List[Vehicle]:
        result = await self.session.execute(select(Vehicle).order_by(Vehicle.created_at.desc()))
        return list(result.scalars().all())

    async def search(
        self,
        plate_number: Optional[str] = None,
        driver_name: Optional[str] = None,
        phone_number: Optional[str] = None,
    ) -> List[Vehicle]:
        """Substring search on plate, driver name and phone number."""
        query = select(Vehicle).order_by(Vehicle.created_at.desc())

        if plate_number:
            query = query.where(Vehicle.plate_number.contains(plate_number, autoescape=True))
        if driver_name:
            query = query.where(Vehicle.driver_name.contains(driver_name, autoescape=True))
        if phone_number:
            query = query.where(Vehicle.phone_number.contains(phone_number, autoescape=True))

        result = await self.session.execute(query)
        return list(result.scalars().all())

    def build(
        self,
        plate_number: str,
        driver_name: str,
        phone_number: str,
        car_model: Optional[str] = None,
        car_color: Optional[str] = None,
    ) -> Vehicle:
        """Add a new vehicle to the current transaction without committing."""
        vehicle = Vehicle(
            plate_number=plate_number,
            driver_name=driver_name,
            phone_number=phone_number,
            car_model=car_model,
            car_color=car_color,
        )
        self.session.add(vehicle)
        return vehicle

    async def create(self, plate_number: str, driver_name: str, phone_number: str, **details) -> Vehicle:
        async with atomic(self.session):
            if await self.find(plate_number) is not None:
                raise DuplicateVehicle(f"Car with plate number {plate_number} already exists")
            vehicle = self.build(plate_number, driver_name, phone_number, **details)

        logger.info("Registered car %s", plate_number)
        return vehicle

    async def update(self, plate_number: str, **changes) -> Vehicle:
        async with atomic(self.session):
            vehicle = await self.find(plate_number, for_update=True)
            if not vehicle:
                raise NotFoundError(f"Car {plate_number} not found")

            for field, value in changes.items():
                if field in UPDATABLE_FIELDS:
                    setattr(vehicle, field, value)

        return vehicle

    async def delete(self, plate_number: str) -> None:
        """Delete a vehicle that is not currently parked."""
        async with atomic(self.session):
            vehicle = await self.find(plate_number, for_update=True)
            if not vehicle:
                raise NotFoundError(f"Car {plate_number} not found")

            if await self.active_record(plate_number) is not None:
                raise VehicleHasActiveSession(
                    f"Cannot delete car {plate_number} with active parking records"
                )

            if await self.session.scalar(
                select(func.count(ParkingRecord.record_id)).where(
                    ParkingRecord.plate_number == plate_number
                )
            ):
                raise ConflictError(f"Cannot delete car {plate_number} with parking history")

            await self.session.delete(vehicle)

        logger.info("Deleted car %s", plate_number)

    async def active_record(self, plate_number: str) -> Optional[ParkingRecord]:
        """The vehicle's active parking record, if it is parked right now."""
        result = await self.session.execute(
            select(ParkingRecord)
            .where(
                ParkingRecord.plate_number == plate_number,
                ParkingRecord.status == "active",
            )
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def history(self, plate_number: str) -> List[HistoryEntry]:
        """All parking records for a vehicle, newest first, with amounts paid."""
        await self.get(plate_number)

        paid = (
            select(
                Payment.record_id,
                func.sum(Payment.amount_paid).label("amount_paid"),
                func.count(Payment.payment_id).label("payment_count"),
            )
            .group_by(Payment.record_id)
            .subquery()
        )
        result = await self.session.execute(
            select(ParkingRecord, paid.c.amount_paid, paid.c.payment_count)
            .outerjoin(paid, paid.c.record_id == ParkingRecord.record_id)
            .where(ParkingRecord.plate_number == plate_number)
            .order_by(ParkingRecord.entry_time.desc())
        )

        return [
            HistoryEntry(record=record, amount_paid=amount_paid, payment_count=payment_count or 0)
            for record, amount_paid, payment_count in result.all()
        ]
