"""Medical record service - Business logic for a patient's medical history"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...auth import AuthUser
from ...models import MedicalRecord
from ...shared.validators import parse_iso_date, require_fields, sanitize_field
from ..doctors.service import DoctorService
from .repository import MedicalRecordRepository
from .schemas import MedicalRecordCreate, MedicalRecordResponse

logger = logging.getLogger(__name__)


def to_response(record: MedicalRecord) -> MedicalRecordResponse:
    return MedicalRecordResponse(
        id=record.id,
        date=record.date.isoformat(),
        title=record.title,
        description=record.description,
        doctorName=record.doctor.name,
    )


class MedicalRecordService:
    """Service layer for medical record business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MedicalRecordRepository()
        self.doctors = DoctorService(db)

    def get_records(self, user: AuthUser) -> list[MedicalRecordResponse]:
        return [to_response(r) for r in self.repo.get_recent_records(self.db, user.id)]

    def create_record(self, data: MedicalRecordCreate, user: AuthUser) -> MedicalRecordResponse:
        require_fields(data, "doctorId", "date", "title", "description")
        record_date = parse_iso_date(data.date)
        title = sanitize_field(data.title, "Title", max_length=255)
        description = sanitize_field(data.description, "Description")

        self.doctors.get_doctor(data.doctorId)

        try:
            record = self.repo.create_record(
                self.db,
                user_id=user.id,
                doctor_id=data.doctorId,
                record_date=record_date,
                title=title,
                description=description,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating medical record for {user.id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to create medical record") from e

        logger.info(f"🩺 Medical record {record.id} added for {user.id}")
        return to_response(record)
