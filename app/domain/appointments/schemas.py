"""Appointment domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel


class AppointmentCreate(BaseModel):
    """
    Schema for booking an appointment.
    Fields are optional here so missing values reach the booking guard
    and come back as "missing field" instead of a 422.
    """

    date: Optional[str] = None  # YYYY-MM-DD
    time: Optional[str] = None  # HH:MM
    doctorId: Optional[str] = None


class DoctorSummary(BaseModel):
    id: str
    name: str
    specialization: str


class AppointmentResponse(BaseModel):
    id: str
    date: str
    time: str
    doctor: DoctorSummary


class AppointmentDate(BaseModel):
    date: str


class TimeSlotsResponse(BaseModel):
    date: str
    slots: list[str]
