"""API v1 router."""

from fastapi import APIRouter

from smartpark.api.v1.endpoints import parking, payments, slots, vehicles

api_router = APIRouter()

api_router.include_router(slots.router, prefix="/slots", tags=["slots"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(parking.router, prefix="/parking", tags=["parking"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
