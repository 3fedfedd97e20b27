"""Parking duration and fee calculation."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

ONE_MINUTE = timedelta(minutes=1)
MINUTES_PER_HOUR = 60
CENTS = Decimal("0.01")


@dataclass(frozen=True)
class FeeQuote:
    """Result of pricing one stay."""

    duration_minutes: int
    billable_hours: int
    amount_due: Decimal


def _ceil_div(numerator, denominator) -> int:
    return -(-numerator // denominator)


def calculate_fee(entry_time: datetime, exit_time: datetime, hourly_rate) -> FeeQuote:
    """
    Price a stay from entry to exit.

    Duration is rounded up to whole minutes and billable hours are rounded
    up to whole hours, so a one minute stay bills a full hour.

    Args:
        entry_time: When the vehicle entered
        exit_time: When the vehicle left; must not be before ``entry_time``
        hourly_rate: Currency units per hour

    Returns:
        FeeQuote with duration in minutes, billable hours and amount due
    """
    duration_minutes = _ceil_div(exit_time - entry_time, ONE_MINUTE)
    billable_hours = _ceil_div(duration_minutes, MINUTES_PER_HOUR)
    amount_due = (Decimal(billable_hours) * Decimal(str(hourly_rate))).quantize(
        CENTS, rounding=ROUND_HALF_UP
    )
    return FeeQuote(
        duration_minutes=duration_minutes,
        billable_hours=billable_hours,
        amount_due=amount_due,
    )


def format_duration(entry_time: datetime, exit_time: datetime) -> str:
    """Human readable duration, e.g. ``2h 30m``."""
    total_minutes = (exit_time - entry_time) // ONE_MINUTE
    hours, minutes = divmod(total_minutes, MINUTES_PER_HOUR)
    return f"{hours}h {minutes}m"
