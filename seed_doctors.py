#!/usr/bin/env python3
"""
Script to insert the sample doctors into the doctors table
"""

from app import models  # noqa: F401
from app.database import Base, SessionLocal, engine
from app.models import Doctor

SAMPLE_DOCTORS = [
    {"name": "Dr. John Doe", "specialization": "Cardiology"},
    {"name": "Dr. Jane Smith", "specialization": "Neurology"},
]


def seed_doctors(db) -> int:
    """Insert sample doctors that are not present yet; returns how many were added"""
    added = 0
    for data in SAMPLE_DOCTORS:
        exists = db.query(Doctor).filter(Doctor.name == data["name"]).first()
        if exists:
            print(f"   ⏭️  {data['name']} already present")
            continue
        db.add(Doctor(**data))
        added += 1
        print(f"   ✅ Added {data['name']} ({data['specialization']})")

    db.commit()
    return added


def main():
    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()

    try:
        print("🔍 Seeding sample doctors...\n")
        added = seed_doctors(db)
        print(f"\n✅ Done: {added} doctor(s) added")
    except Exception as e:
        db.rollback()
        print(f"❌ Error: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
