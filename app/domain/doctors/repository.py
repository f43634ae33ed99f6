"""Doctor repository - Database operations for doctors"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Doctor


class DoctorRepository:
    """Repository for doctor database operations"""

    @staticmethod
    def list_doctors(
        db: Session, doctor_id: Optional[str] = None, search: Optional[str] = None
    ) -> list[Doctor]:
        """List doctors, optionally narrowed to one id or a name/specialization search"""
        query = db.query(Doctor)

        if doctor_id:
            query = query.filter(Doctor.id == doctor_id)

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                (Doctor.name.ilike(search_term)) | (Doctor.specialization.ilike(search_term))
            )

        return query.order_by(Doctor.name).all()

    @staticmethod
    def get_doctor(db: Session, doctor_id: str) -> Optional[Doctor]:
        return db.query(Doctor).filter(Doctor.id == doctor_id).first()

    @staticmethod
    def create_doctor(db: Session, name: str, specialization: str) -> Doctor:
        doctor = Doctor(name=name, specialization=specialization)
        db.add(doctor)
        db.commit()
        db.refresh(doctor)
        return doctor
