"""Domain errors raised by the parking services.

Every error carries the HTTP status the API layer answers with and a short
machine-readable ``code``.
"""

from fastapi import status


class ParkingError(Exception):
    """Base class for all domain errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "parking_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ParkingError):
    """A referenced vehicle, slot, session or payment does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ConflictError(ParkingError):
    """An operation's precondition on current domain state is violated."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class SlotUnavailable(ConflictError):
    code = "slot_unavailable"


class VehicleAlreadyParked(ConflictError):
    code = "vehicle_already_parked"


class SessionNotActive(ConflictError):
    code = "session_not_active"


class SessionStillActive(ConflictError):
    code = "session_still_active"


class SlotOccupied(ConflictError):
    code = "slot_occupied"


class VehicleHasActiveSession(ConflictError):
    code = "vehicle_has_active_session"


class DuplicateSlot(ConflictError):
    code = "duplicate_slot"


class DuplicateVehicle(ConflictError):
    code = "duplicate_vehicle"


class InsufficientPayment(ParkingError):
    """Amount paid does not cover the amount due."""

    status_code = 422
    code = "insufficient_payment"


class ValidationFailed(ParkingError):
    status_code = 422
    code = "validation_failed"


class VehicleDetailsRequired(ValidationFailed):
    code = "vehicle_details_required"


class InvalidExitTime(ValidationFailed):
    code = "invalid_exit_time"


class StorageFailure(ParkingError):
    """The store could not complete the transaction; it has been rolled back."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "storage_failure"
