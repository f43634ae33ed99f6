"""
Scheduling Domain

Pure appointment scheduling rules shared by the appointments domain:

- slots.py  - bookable 30-minute time labels for a calendar date
- guard.py  - validation gate applied before an appointment is persisted
- clock.py  - clinic wall-clock "now", injected into routes as a dependency

Nothing here touches the database. Callers pass ``now`` explicitly so every
function is deterministic given its inputs.
"""

from .clock import clinic_now, get_now
from .guard import AppointmentRequest, BookingValidationError, validate_appointment_request
from .slots import SLOT_DURATION_MINUTES, generate_time_slots

__all__ = [
    "AppointmentRequest",
    "BookingValidationError",
    "SLOT_DURATION_MINUTES",
    "clinic_now",
    "generate_time_slots",
    "get_now",
    "validate_appointment_request",
]
