"""Appointment service - Business logic for booking and listing appointments"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...auth import AuthUser
from ...models import Appointment
from ...shared.validators import parse_iso_date
from ..doctors.service import DoctorService
from ..scheduling import (
    AppointmentRequest,
    BookingValidationError,
    generate_time_slots,
    validate_appointment_request,
)
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentResponse, DoctorSummary, TimeSlotsResponse

logger = logging.getLogger(__name__)


def to_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        date=appointment.date.isoformat(),
        time=appointment.time,
        doctor=DoctorSummary(
            id=appointment.doctor_id,
            name=appointment.doctor.name,
            specialization=appointment.doctor.specialization,
        ),
    )


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.doctors = DoctorService(db)

    def get_appointments(
        self, user: AuthUser, start: Optional[str] = None, end: Optional[str] = None
    ) -> list[AppointmentResponse]:
        """Get the user's appointments; the range applies only when both bounds are given"""
        start_date = parse_iso_date(start, "start") if start and end else None
        end_date = parse_iso_date(end, "end") if start and end else None

        appointments = self.repo.get_appointments(self.db, user.id, start_date, end_date)
        return [to_response(a) for a in appointments]

    def get_appointment_dates(self, user: AuthUser) -> list[dict]:
        return [{"date": d.isoformat()} for d in self.repo.get_appointment_dates(self.db, user.id)]

    def get_time_slots(self, date_value: str, now: datetime) -> TimeSlotsResponse:
        """Bookable slot labels for a date, relative to ``now``"""
        target_date = parse_iso_date(date_value)
        return TimeSlotsResponse(
            date=target_date.isoformat(), slots=generate_time_slots(target_date, now)
        )

    def book_appointment(
        self, data: AppointmentCreate, user: AuthUser, now: datetime
    ) -> AppointmentResponse:
        """Validate a booking request and persist it"""
        request = AppointmentRequest(
            subject_id=user.id, date=data.date, time=data.time, doctor_id=data.doctorId
        )

        try:
            validate_appointment_request(request, now)
        except BookingValidationError as e:
            raise HTTPException(status_code=400, detail=e.reason) from e

        doctor = self.doctors.get_doctor(request.doctor_id)

        scheduled_at = request.scheduled_at()
        try:
            appointment = self.repo.create_appointment(
                self.db,
                user_id=request.subject_id,
                doctor_id=doctor.id,
                appointment_date=scheduled_at.date(),
                time=scheduled_at.strftime("%H:%M"),
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating appointment for {user.id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to create appointment") from e

        logger.info(
            f"📅 Appointment {appointment.id} booked for {user.id} with {doctor.name} "
            f"on {appointment.date} at {appointment.time}"
        )
        return to_response(appointment)
