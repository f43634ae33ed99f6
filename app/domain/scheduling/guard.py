"""Booking guard - validation applied to a new appointment before it is stored"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

MISSING_FIELD = "missing field"
INVALID_DATETIME = "invalid datetime"
PAST_DATETIME = "past datetime"

REQUIRED_FIELDS = ("date", "time", "doctor_id")


class BookingValidationError(Exception):
    """Raised when an appointment request cannot be booked"""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class AppointmentRequest:
    """A candidate appointment as collected from the booking form"""

    subject_id: str
    date: Optional[str]
    time: Optional[str]
    doctor_id: Optional[str]

    def scheduled_at(self) -> datetime:
        """Combine date (YYYY-MM-DD) and time (HH:MM) into a naive local datetime"""
        return datetime.strptime(f"{self.date} {self.time}", "%Y-%m-%d %H:%M")


def validate_appointment_request(request: AppointmentRequest, now: datetime) -> AppointmentRequest:
    """
    Check that ``request`` names a doctor and a slot strictly after ``now``.

    Returns the request unchanged on success. Overlap with other bookings is
    not checked here.

    Raises:
        BookingValidationError: "missing field", "invalid datetime" or "past datetime"
    """
    missing = [name for name in REQUIRED_FIELDS if not getattr(request, name)]
    if missing:
        logger.info(f"Booking rejected for {request.subject_id}: missing {missing}")
        raise BookingValidationError(MISSING_FIELD)

    try:
        scheduled_at = request.scheduled_at()
    except ValueError as e:
        logger.info(
            f"Booking rejected for {request.subject_id}: unparseable {request.date!r} {request.time!r}"
        )
        raise BookingValidationError(INVALID_DATETIME) from e

    if scheduled_at <= now:
        logger.info(f"Booking rejected for {request.subject_id}: {scheduled_at} is not after {now}")
        raise BookingValidationError(PAST_DATETIME)

    return request
