"""Medical record repository - Database operations for medical records"""

from datetime import date

from sqlalchemy.orm import Session, joinedload

from ...models import MedicalRecord

RECENT_RECORDS_LIMIT = 10


class MedicalRecordRepository:
    @staticmethod
    def get_recent_records(
        db: Session, user_id: str, limit: int = RECENT_RECORDS_LIMIT
    ) -> list[MedicalRecord]:
        """Most recent records first"""
        return (
            db.query(MedicalRecord)
            .options(joinedload(MedicalRecord.doctor))
            .filter(MedicalRecord.user_id == user_id)
            .order_by(MedicalRecord.date.desc(), MedicalRecord.created_at.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def create_record(
        db: Session, user_id: str, doctor_id: str, record_date: date, title: str, description: str
    ) -> MedicalRecord:
        record = MedicalRecord(
            user_id=user_id,
            doctor_id=doctor_id,
            date=record_date,
            title=title,
            description=description,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record
