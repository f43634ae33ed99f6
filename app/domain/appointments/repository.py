"""Appointment repository - Database operations for appointments"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Appointment


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def get_appointments(
        db: Session,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[Appointment]:
        """Get a user's appointments, optionally within [start, end]"""
        query = (
            db.query(Appointment)
            .options(joinedload(Appointment.doctor))
            .filter(Appointment.user_id == user_id)
        )

        if start and end:
            query = query.filter(Appointment.date >= start, Appointment.date <= end)

        return query.order_by(Appointment.date, Appointment.time).all()

    @staticmethod
    def get_appointment_dates(db: Session, user_id: str) -> list[date]:
        rows = (
            db.query(Appointment.date)
            .filter(Appointment.user_id == user_id)
            .order_by(Appointment.date)
            .all()
        )
        return [row.date for row in rows]

    @staticmethod
    def create_appointment(
        db: Session, user_id: str, doctor_id: str, appointment_date: date, time: str
    ) -> Appointment:
        appointment = Appointment(
            user_id=user_id, doctor_id=doctor_id, date=appointment_date, time=time
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment
