"""API dependencies."""

from datetime import datetime
from typing import AsyncGenerator, Callable, Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from smartpark.db.types import utcnow
from smartpark.services.payments import PaymentReconciler
from smartpark.services.reports import Reporting
from smartpark.services.sessions import SessionManager
from smartpark.services.slots import SlotRegistry
from smartpark.services.vehicles import VehicleRegistry


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session from the factory created at startup."""
    async with request.app.state.session_factory() as session:
        yield session


async def get_operator_id(x_operator_id: Optional[str] = Header(None)) -> str:
    """Identity of the staff member making a change, set by the auth gateway."""
    if not x_operator_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Operator-Id header is required",
        )
    return x_operator_id


def get_clock() -> Callable[[], datetime]:
    return utcnow


def get_slot_registry(db: AsyncSession = Depends(get_db_session)) -> SlotRegistry:
    return SlotRegistry(db)


def get_vehicle_registry(db: AsyncSession = Depends(get_db_session)) -> VehicleRegistry:
    return VehicleRegistry(db)


def get_session_manager(
    db: AsyncSession = Depends(get_db_session),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> SessionManager:
    return SessionManager(db, clock=clock)


def get_payment_reconciler(
    db: AsyncSession = Depends(get_db_session),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PaymentReconciler:
    return PaymentReconciler(db, clock=clock)


def get_reporting(
    db: AsyncSession = Depends(get_db_session),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> Reporting:
    return Reporting(db, clock=clock)
