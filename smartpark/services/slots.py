"""Slot registry: the authoritative status of every parking slot."""

import logging
import re
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from smartpark.config import settings
from smartpark.db.models import ParkingRecord, ParkingSlot
from smartpark.db.session import atomic
from smartpark.schemas.parking_slot import ParkingSlotResponse, SlotMap, SlotStatistics
from smartpark.services.exceptions import ConflictError, DuplicateSlot, NotFoundError, SlotOccupied

logger = logging.getLogger(__name__)

_SLOT_NUMBER_SUFFIX = re.compile(r"(\d+)")


def _slot_sort_key(slot: ParkingSlot):
    match = _SLOT_NUMBER_SUFFIX.search(slot.slot_number[1:])
    return (int(match.group(1)) if match else 0, slot.slot_number)


class SlotRegistry:
    """Create, read, update and delete slots and change their status."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def lookup(self, slot_number: str, for_update: bool = False) -> ParkingSlot:
        """Get a slot by number, optionally locking its row."""
        query = select(ParkingSlot).where(ParkingSlot.slot_number == slot_number)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(query)
        slot = result.scalar_one_or_none()

        if not slot:
            raise NotFoundError(f"Parking slot {slot_number} not found")

        return slot

    async def list_all(self) -> List[ParkingSlot]:
        result = await self.session.execute(select(ParkingSlot).order_by(ParkingSlot.slot_number))
        return list(result.scalars().all())

    async def list_available(self) -> List[ParkingSlot]:
        result = await self.session.execute(
            select(ParkingSlot)
            .where(ParkingSlot.slot_status == "available")
            .order_by(ParkingSlot.slot_number)
        )
        return list(result.scalars().all())

    async def list_by_type(self, slot_type: str) -> List[ParkingSlot]:
        result = await self.session.execute(
            select(ParkingSlot)
            .where(ParkingSlot.slot_type == slot_type)
            .order_by(ParkingSlot.slot_number)
        )
        return list(result.scalars().all())

    async def create(
        self,
        slot_number: str,
        slot_type: Optional[str] = None,
        hourly_rate: Optional[Decimal] = None,
    ) -> ParkingSlot:
        """Register a new slot; slot numbers are unique."""
        async with atomic(self.session):
            existing = await self.session.get(ParkingSlot, slot_number)
            if existing is not None:
                raise DuplicateSlot(f"Slot number {slot_number} already exists")

            slot = ParkingSlot(
                slot_number=slot_number,
                slot_type=slot_type or settings.DEFAULT_SLOT_TYPE,
                hourly_rate=settings.DEFAULT_HOURLY_RATE if hourly_rate is None else hourly_rate,
                slot_status="available",
            )
            self.session.add(slot)

        logger.info("Created slot %s (%s @ %s/h)", slot.slot_number, slot.slot_type, slot.hourly_rate)
        return slot

    async def update(
        self,
        slot_number: str,
        slot_type: Optional[str] = None,
        hourly_rate: Optional[Decimal] = None,
    ) -> ParkingSlot:
        """Change a slot's type and/or rate. Active records bill at the rate in force at exit."""
        async with atomic(self.session):
            slot = await self.lookup(slot_number, for_update=True)
            if slot_type is not None:
                slot.slot_type = slot_type
            if hourly_rate is not None:
                slot.hourly_rate = hourly_rate

        return slot

    async def set_status(self, slot_number: str, new_status: str) -> ParkingSlot:
        """
        Overwrite a slot's status.

        This is the administrative override, for instance to take a slot into
        maintenance. It does not check session exclusivity; entries and exits
        change slot status through the session manager instead.
        """
        async with atomic(self.session):
            slot = await self.lookup(slot_number, for_update=True)
            previous = slot.slot_status
            slot.slot_status = new_status

        if previous == "occupied" and new_status != "occupied":
            logger.warning(
                "Slot %s manually changed from occupied to %s", slot_number, new_status
            )
        else:
            logger.info("Slot %s status %s -> %s", slot_number, previous, new_status)
        return slot

    async def delete(self, slot_number: str) -> None:
        """Delete a slot that is not in use."""
        async with atomic(self.session):
            slot = await self.lookup(slot_number, for_update=True)

            active_count = await self.session.scalar(
                select(func.count(ParkingRecord.record_id)).where(
                    ParkingRecord.slot_number == slot_number,
                    ParkingRecord.status == "active",
                )
            )
            if active_count or slot.slot_status == "occupied":
                raise SlotOccupied(f"Cannot delete slot {slot_number} with active parking records")

            if await self.session.scalar(
                select(func.count(ParkingRecord.record_id)).where(
                    ParkingRecord.slot_number == slot_number
                )
            ):
                raise ConflictError(f"Cannot delete slot {slot_number} with parking history")

            await self.session.delete(slot)

        logger.info("Deleted slot %s", slot_number)

    async def statistics(self) -> SlotStatistics:
        """Slot counts by status and by type."""

        def count_where(condition):
            return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

        result = await self.session.execute(
            select(
                func.count(ParkingSlot.slot_number).label("total_slots"),
                count_where(ParkingSlot.slot_status == "available").label("available_slots"),
                count_where(ParkingSlot.slot_status == "occupied").label("occupied_slots"),
                count_where(ParkingSlot.slot_status == "maintenance").label("maintenance_slots"),
                count_where(ParkingSlot.slot_type == "regular").label("regular_slots"),
                count_where(ParkingSlot.slot_type == "vip").label("vip_slots"),
                count_where(ParkingSlot.slot_type == "disabled").label("disabled_slots"),
            )
        )
        row = result.one()
        return SlotStatistics(**{key: int(value or 0) for key, value in row._mapping.items()})

    async def slot_map(self) -> SlotMap:
        """Slots grouped by section (first character of the slot number)."""
        slots = await self.list_all()

        sections: Dict[str, List[ParkingSlot]] = {}
        for slot in slots:
            sections.setdefault(slot.slot_number[:1], []).append(slot)

        return SlotMap(
            sections={
                section: [
                    ParkingSlotResponse.model_validate(slot)
                    for slot in sorted(section_slots, key=_slot_sort_key)
                ]
                for section, section_slots in sections.items()
            },
            total_slots=len(slots),
            available_count=sum(1 for s in slots if s.slot_status == "available"),
            occupied_count=sum(1 for s in slots if s.slot_status == "occupied"),
            maintenance_count=sum(1 for s in slots if s.slot_status == "maintenance"),
        )
