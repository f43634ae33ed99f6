"""Doctor router - FastAPI endpoints for the doctor directory"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import AuthUser, get_current_user
from ...database import get_db
from .schemas import DoctorCreate, DoctorResponse
from .service import DoctorService

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def get_doctor_service(db: Session = Depends(get_db)) -> DoctorService:
    """Dependency injection for DoctorService"""
    return DoctorService(db)


@router.get("", response_model=list[DoctorResponse])
async def list_doctors(
    doctorId: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Match on name or specialization"),
    _: AuthUser = Depends(get_current_user),
    service: DoctorService = Depends(get_doctor_service),
):
    """List doctors for the booking form's doctor search"""
    return service.list_doctors(doctorId, search)


@router.post("", response_model=DoctorResponse)
async def create_doctor(
    data: DoctorCreate,
    _: AuthUser = Depends(get_current_user),
    service: DoctorService = Depends(get_doctor_service),
):
    """Add a doctor to the directory"""
    return service.create_doctor(data)
