"""Doctor service - Business logic for the doctor directory"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Doctor
from ...shared.validators import require_fields
from .repository import DoctorRepository
from .schemas import DoctorCreate

logger = logging.getLogger(__name__)


class DoctorService:
    """Service layer for doctor business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = DoctorRepository()

    def list_doctors(
        self, doctor_id: Optional[str] = None, search: Optional[str] = None
    ) -> list[Doctor]:
        return self.repo.list_doctors(self.db, doctor_id, search)

    def get_doctor(self, doctor_id: str) -> Doctor:
        """Get a doctor or raise 404"""
        doctor = self.repo.get_doctor(self.db, doctor_id)
        if not doctor:
            logger.warning(f"⚠️ Doctor not found: {doctor_id}")
            raise HTTPException(status_code=404, detail="Doctor not found")
        return doctor

    def create_doctor(self, data: DoctorCreate) -> Doctor:
        require_fields(data, "name", "specialization", detail="Name and specialization are required")

        try:
            doctor = self.repo.create_doctor(
                self.db, data.name.strip(), data.specialization.strip()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating doctor: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to create doctor") from e

        logger.info(f"✅ Doctor created: {doctor.id} ({doctor.specialization})")
        return doctor
