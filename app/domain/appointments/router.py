"""Appointment router - FastAPI endpoints for appointment booking"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import AuthUser, get_current_user
from ...database import get_db
from ..scheduling import get_now
from .schemas import AppointmentCreate, AppointmentDate, AppointmentResponse, TimeSlotsResponse
from .service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


@router.get("", response_model=list[AppointmentResponse])
async def get_appointments(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    current_user: AuthUser = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Get the current user's appointments with their doctors"""
    return service.get_appointments(current_user, start, end)


@router.get("/dates", response_model=list[AppointmentDate])
async def get_appointment_dates(
    current_user: AuthUser = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Dates on which the current user has appointments (calendar highlights)"""
    return service.get_appointment_dates(current_user)


@router.get("/slots", response_model=TimeSlotsResponse)
async def get_time_slots(
    date: str = Query(..., description="Calendar date, YYYY-MM-DD"),
    _: AuthUser = Depends(get_current_user),
    now: datetime = Depends(get_now),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Bookable 30-minute slots for a date"""
    return service.get_time_slots(date, now)


@router.post("", response_model=AppointmentResponse)
async def book_appointment(
    data: AppointmentCreate,
    current_user: AuthUser = Depends(get_current_user),
    now: datetime = Depends(get_now),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment for the current user"""
    return service.book_appointment(data, current_user, now)
