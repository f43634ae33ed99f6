"""Medical record router - FastAPI endpoints for medical records"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import AuthUser, get_current_user
from ...database import get_db
from .schemas import MedicalRecordCreate, MedicalRecordResponse
from .service import MedicalRecordService

router = APIRouter(prefix="/medical-records", tags=["Medical Records"])


def get_medical_record_service(db: Session = Depends(get_db)) -> MedicalRecordService:
    """Dependency injection for MedicalRecordService"""
    return MedicalRecordService(db)


@router.get("", response_model=list[MedicalRecordResponse])
async def get_medical_records(
    current_user: AuthUser = Depends(get_current_user),
    service: MedicalRecordService = Depends(get_medical_record_service),
):
    """Get the current user's 10 most recent medical records"""
    return service.get_records(current_user)


@router.post("", response_model=MedicalRecordResponse)
async def create_medical_record(
    data: MedicalRecordCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: MedicalRecordService = Depends(get_medical_record_service),
):
    """Add a medical record to the current user's history"""
    return service.create_record(data, current_user)
